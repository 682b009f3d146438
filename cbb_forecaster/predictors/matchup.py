"""Predict a matchup's final score from both teams' season four factors."""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from ..data.features.dataset import add_comparative_features, team_columns
from ..data.scrapers.team_season import TeamSeasonScraper
from ..ml.trainer import TrainedModelPair
from ..models.game import PredictionResult
from ..models.team import FourFactorRow
from .base import BasePredictor

logger = logging.getLogger(__name__)


class MatchupPredictor(BasePredictor):
    """Feed season aggregates through the trained game-level score models."""

    def __init__(self, models: TrainedModelPair, scraper: Optional[TeamSeasonScraper] = None):
        super().__init__("four_factor_random_forest")
        self.models = models
        self.scraper = scraper or TeamSeasonScraper()

    def predict(self, away_url: str, home_url: str) -> PredictionResult:
        away = self.scraper.calculate_team_metrics(away_url)
        home = self.scraper.calculate_team_metrics(home_url)
        return self.predict_rows(away, home)

    def predict_rows(self, away: FourFactorRow, home: FourFactorRow) -> PredictionResult:
        """Predict from already-extracted season rows."""
        features = self.feature_row(away, home)
        home_points, away_points = self.models.predict(features)
        result = PredictionResult(
            away_team=away.team_id,
            home_team=home.team_id,
            predicted_away_points=float(away_points[0]),
            predicted_home_points=float(home_points[0]),
        )
        logger.info(
            "%s %.1f @ %s %.1f",
            result.away_team,
            result.predicted_away_points,
            result.home_team,
            result.predicted_home_points,
        )
        return result

    @staticmethod
    def feature_row(away: FourFactorRow, home: FourFactorRow) -> pd.DataFrame:
        """Single-row frame shaped like the training table."""
        record = {"game_id": 1, "away_team": away.team_id, "home_team": home.team_id}
        record.update(team_columns(away, "away"))
        record.update(team_columns(home, "home"))
        return add_comparative_features(pd.DataFrame([record]))
