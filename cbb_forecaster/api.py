"""Function-level entry points over the scraper, pipeline and predictor classes."""

from __future__ import annotations

from typing import List, Optional

from .config import TrainingConfig
from .data.fetcher import PageFetcher
from .data.scrapers.boxscore import BoxScoreScraper
from .data.scrapers.schedule import DateLike, ScheduleScraper
from .data.scrapers.team_season import TeamSeasonScraper
from .ml.trainer import TrainedModelPair
from .models.game import GameSummary, PredictionResult
from .models.team import FourFactorRow
from .pipeline.training import TrainingPipeline
from .predictors.matchup import MatchupPredictor


def matchups_date(game_date: Optional[DateLike] = None, fetcher: Optional[PageFetcher] = None) -> List[GameSummary]:
    """Men's games played on ``game_date`` (default today), in page order."""
    return ScheduleScraper(fetcher).matchups_date(game_date)


def create_four_factors(boxscore_url: Optional[str], fetcher: Optional[PageFetcher] = None) -> List[FourFactorRow]:
    """Both teams' four factors from one box score; ``[]`` when the URL is missing."""
    return BoxScoreScraper(fetcher).create_four_factors(boxscore_url)


def calculate_team_metrics(season_url: str, fetcher: Optional[PageFetcher] = None) -> FourFactorRow:
    """A team's season-aggregate four factors."""
    return TeamSeasonScraper(fetcher).calculate_team_metrics(season_url)


def train_model(
    start_date: DateLike,
    end_date: DateLike,
    num_games_per_day: int = 10,
    ntree: int = 500,
    random_seed: int = 42,
    test_fraction: float = 0.2,
    fetcher: Optional[PageFetcher] = None,
) -> TrainedModelPair:
    """Scrape ``start_date``..``end_date`` and train the home/away score models."""
    config = TrainingConfig(
        games_per_day=num_games_per_day,
        n_estimators=ntree,
        random_seed=random_seed,
        test_fraction=test_fraction,
    )
    return TrainingPipeline(config, fetcher=fetcher).run(start_date, end_date)


def predict_matchup(
    team1_url: str,
    team2_url: str,
    model_results: TrainedModelPair,
    fetcher: Optional[PageFetcher] = None,
) -> PredictionResult:
    """Predict team1 (away) at team2 (home)."""
    predictor = MatchupPredictor(model_results, TeamSeasonScraper(fetcher))
    return predictor.predict(team1_url, team2_url)


matchupsDate = matchups_date
trainModel = train_model
