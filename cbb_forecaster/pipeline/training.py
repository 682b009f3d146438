"""Scrape a date range of games and train the home/away score models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from ..config import TrainingConfig
from ..data.features.dataset import AssemblyResult, DatasetAssembler
from ..data.fetcher import PageFetcher, default_fetcher
from ..data.scrapers.boxscore import BoxScoreScraper
from ..data.scrapers.schedule import DateLike, ScheduleScraper, coerce_date
from ..ml.trainer import ModelTrainer, TrainedModelPair
from ..models.game import GameSummary
from ..models.team import FourFactorRow

logger = logging.getLogger(__name__)


def date_range(start: date, end: date) -> List[date]:
    """Inclusive list of days from ``start`` to ``end``."""
    if end < start:
        raise ValueError(f"end date {end} is before start date {start}")
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


@dataclass
class CollectionResult:
    """Games scraped for training, before assembly."""

    games: List[Tuple[GameSummary, Sequence[FourFactorRow]]] = field(default_factory=list)
    skipped_without_boxscore: int = 0


class TrainingPipeline:
    """Schedule -> box scores -> training table -> score models."""

    def __init__(
        self,
        config: Optional[TrainingConfig] = None,
        fetcher: Optional[PageFetcher] = None,
        schedule_scraper: Optional[ScheduleScraper] = None,
        boxscore_scraper: Optional[BoxScoreScraper] = None,
        assembler: Optional[DatasetAssembler] = None,
        trainer: Optional[ModelTrainer] = None,
    ):
        self.config = config or TrainingConfig()
        fetcher = fetcher or default_fetcher()
        self.schedule_scraper = schedule_scraper or ScheduleScraper(fetcher)
        self.boxscore_scraper = boxscore_scraper or BoxScoreScraper(fetcher)
        self.assembler = assembler or DatasetAssembler()
        self.trainer = trainer or ModelTrainer(self.config)

    def collect_schedule(self, start_date: DateLike, end_date: DateLike) -> List[GameSummary]:
        """Up to ``games_per_day`` games from each day in the range, in page order."""
        matchups: List[GameSummary] = []
        for day in date_range(coerce_date(start_date), coerce_date(end_date)):
            games = self.schedule_scraper.matchups_date(day)
            logger.info("%s: %d game(s) found", day.isoformat(), len(games))
            matchups.extend(games[: self.config.games_per_day])
        return matchups

    def collect_four_factors(self, matchups: Sequence[GameSummary]) -> CollectionResult:
        result = CollectionResult()
        total = len(matchups)
        for index, game in enumerate(matchups, start=1):
            if not game.boxscore_url:
                logger.info("Skipping game %d of %d (%s @ %s): no box score", index, total, game.away_team, game.home_team)
                result.skipped_without_boxscore += 1
                continue
            logger.info("Processing game %d of %d", index, total)
            rows = self.boxscore_scraper.create_four_factors(game.boxscore_url)
            result.games.append((game, rows))
        return result

    def build_dataset(self, start_date: DateLike, end_date: DateLike) -> AssemblyResult:
        matchups = self.collect_schedule(start_date, end_date)
        collected = self.collect_four_factors(matchups)
        assembled = self.assembler.assemble(collected.games)
        assembled.dropped += collected.skipped_without_boxscore
        logger.info(
            "Assembled %d game(s); %d dropped, %d with unverified home/away order",
            len(assembled.frame),
            assembled.dropped,
            assembled.unverified,
        )
        return assembled

    def run(self, start_date: DateLike, end_date: DateLike) -> TrainedModelPair:
        assembled = self.build_dataset(start_date, end_date)
        return self.trainer.fit(assembled.frame)
