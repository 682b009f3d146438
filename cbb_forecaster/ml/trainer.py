"""Home/away score regressors."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestRegressor
from sklearn.metrics import mean_squared_error

from ..config import TrainingConfig
from ..data.features.dataset import AWAY_TARGET, FEATURE_COLUMNS, HOME_TARGET

logger = logging.getLogger(__name__)


@dataclass
class TrainedModelPair:
    """Fitted home/away regressors with their held-out error."""

    home_model: RandomForestRegressor
    away_model: RandomForestRegressor
    home_rmse: float
    away_rmse: float
    predictions: pd.DataFrame
    feature_columns: List[str] = field(default_factory=lambda: list(FEATURE_COLUMNS))

    def predict(self, features: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(home_scores, away_scores)`` for each row of ``features``."""
        X = features[self.feature_columns]
        return self.home_model.predict(X), self.away_model.predict(X)


class ModelTrainer:
    """
    Fit one random forest per side on a seeded train/test split.

    Both models see the same inputs (``FEATURE_COLUMNS``); neither sees any
    final-score column.
    """

    def __init__(self, config: Optional[TrainingConfig] = None):
        self.config = config or TrainingConfig()

    def split(self, frame: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Random split without replacement; ``floor(n * (1 - test_fraction))`` rows train."""
        n = len(frame)
        n_train = int(math.floor(n * (1.0 - self.config.test_fraction)))
        rng = np.random.default_rng(self.config.random_seed)
        order = rng.permutation(n)
        train_idx = np.sort(order[:n_train])
        test_idx = np.sort(order[n_train:])
        return frame.iloc[train_idx], frame.iloc[test_idx]

    def _regressor(self) -> RandomForestRegressor:
        return RandomForestRegressor(
            n_estimators=self.config.n_estimators,
            random_state=self.config.random_seed,
            n_jobs=self.config.n_jobs,
        )

    def fit(self, frame: pd.DataFrame) -> TrainedModelPair:
        """Train both models on ``frame`` and score them on the held-out rows."""
        missing = [c for c in FEATURE_COLUMNS + [HOME_TARGET, AWAY_TARGET] if c not in frame.columns]
        if missing:
            raise ValueError(f"Training table is missing columns: {', '.join(missing)}")

        usable = frame.dropna(subset=FEATURE_COLUMNS + [HOME_TARGET, AWAY_TARGET])
        if len(usable) < len(frame):
            logger.warning("Ignoring %d row(s) with missing values", len(frame) - len(usable))
        if len(usable) < 2:
            raise ValueError(f"Need at least 2 complete games to train, got {len(usable)}")

        train, test = self.split(usable)
        if train.empty or test.empty:
            raise ValueError(
                f"Split of {len(usable)} games left an empty partition "
                f"(test_fraction={self.config.test_fraction})"
            )
        logger.info("Training on %d games, testing on %d", len(train), len(test))

        home_model = self._regressor().fit(train[FEATURE_COLUMNS], train[HOME_TARGET])
        away_model = self._regressor().fit(train[FEATURE_COLUMNS], train[AWAY_TARGET])

        predicted_home = home_model.predict(test[FEATURE_COLUMNS])
        predicted_away = away_model.predict(test[FEATURE_COLUMNS])
        home_rmse = self.rmse(test[HOME_TARGET].to_numpy(), predicted_home)
        away_rmse = self.rmse(test[AWAY_TARGET].to_numpy(), predicted_away)
        logger.info("Home RMSE: %.3f", home_rmse)
        logger.info("Away RMSE: %.3f", away_rmse)

        predictions = pd.DataFrame(
            {
                "game_id": test["game_id"].to_numpy() if "game_id" in test else np.arange(len(test)) + 1,
                "home_team": test["home_team"].to_numpy() if "home_team" in test else None,
                "away_team": test["away_team"].to_numpy() if "away_team" in test else None,
                "actual_home": test[HOME_TARGET].to_numpy(),
                "predicted_home": predicted_home,
                "actual_away": test[AWAY_TARGET].to_numpy(),
                "predicted_away": predicted_away,
            }
        )
        return TrainedModelPair(
            home_model=home_model,
            away_model=away_model,
            home_rmse=home_rmse,
            away_rmse=away_rmse,
            predictions=predictions,
        )

    @staticmethod
    def rmse(actual: np.ndarray, predicted: np.ndarray) -> float:
        return float(np.sqrt(mean_squared_error(actual, predicted)))
