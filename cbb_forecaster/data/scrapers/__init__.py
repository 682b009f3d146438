"""Scraper exports."""

from .boxscore import BoxScoreScraper
from .schedule import ScheduleScraper, coerce_date
from .team_season import TeamSeasonScraper

__all__ = [
    "BoxScoreScraper",
    "ScheduleScraper",
    "TeamSeasonScraper",
    "coerce_date",
]
