"""Sports Reference daily scoreboard scraper."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ...config import SCHEDULE_PATH
from ...models.game import GameSummary
from ..fetcher import PageFetcher, default_fetcher
from ..normalize import normalize_team_id, school_slug
from ..schema import (
    SCHEDULE_BOXSCORE_LINK_SELECTOR,
    SCHEDULE_GAME_SELECTOR,
    SCHEDULE_TEAM_ROWS_SELECTOR,
)

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


def coerce_date(value: Optional[DateLike]) -> date:
    """Accept a date, datetime or ISO ``YYYY-MM-DD`` string; ``None`` means today."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


class ScheduleScraper:
    """List the men's games played on a given date."""

    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.fetcher = fetcher or default_fetcher()

    def schedule_url(self, game_date: date) -> str:
        return (
            f"{self.fetcher.settings.base_url}{SCHEDULE_PATH}"
            f"?month={game_date.month}&day={game_date.day}&year={game_date.year}"
        )

    def matchups_date(self, game_date: Optional[DateLike] = None) -> List[GameSummary]:
        """
        Fetch the scoreboard for ``game_date`` (default: today).

        Returns games in page order; an empty list when no games were played.
        """
        game_date = coerce_date(game_date)
        soup = self.fetcher.fetch(self.schedule_url(game_date))
        games = self._parse_games(soup, game_date)
        if not games:
            logger.info("No games found for %s", game_date.isoformat())
        return games

    def _parse_games(self, soup: BeautifulSoup, game_date: date) -> List[GameSummary]:
        games: List[GameSummary] = []
        for node in soup.select(SCHEDULE_GAME_SELECTOR):
            rows = node.select(SCHEDULE_TEAM_ROWS_SELECTOR)
            if len(rows) < 2:
                logger.debug("Skipping game block with %d team rows", len(rows))
                continue
            away_name, away_score, away_id = self._parse_team_row(rows[0])
            home_name, home_score, home_id = self._parse_team_row(rows[1])

            link = node.select_one(SCHEDULE_BOXSCORE_LINK_SELECTOR)
            href = link.get("href") if link else None
            boxscore_url = urljoin(self.fetcher.settings.base_url, href) if href else None

            games.append(
                GameSummary(
                    date=game_date,
                    away_team=away_name,
                    home_team=home_name,
                    away_score=away_score,
                    home_score=home_score,
                    boxscore_url=boxscore_url,
                    away_team_id=away_id,
                    home_team_id=home_id,
                )
            )
        return games

    @classmethod
    def _parse_team_row(cls, row):
        anchor = row.select_one("td a")
        if anchor is not None:
            name = anchor.get_text(strip=True)
        else:
            # Unlinked (non-D1) opponents are plain text in the first cell.
            first_cell = row.find("td")
            name = first_cell.get_text(strip=True) if first_cell else ""
        slug = school_slug(anchor.get("href")) if anchor else None
        score_cell = row.select_one("td.right")
        score = cls._to_score(score_cell.get_text(strip=True) if score_cell else None)
        return name, score, normalize_team_id(slug) if slug else None

    @staticmethod
    def _to_score(value: Optional[str]) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None
