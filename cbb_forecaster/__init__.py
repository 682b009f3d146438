"""
College basketball score forecaster.

Scrapes Sports Reference scoreboards, box scores and team season pages, turns
them into four-factor features and trains home/away score models.
"""

from .api import (
    calculate_team_metrics,
    create_four_factors,
    matchupsDate,
    matchups_date,
    predict_matchup,
    trainModel,
    train_model,
)
from .config import FetchSettings, TrainingConfig
from .exceptions import ComputationError, FetchError, ForecasterError, ParseError, RetryableError
from .ml.trainer import TrainedModelPair
from .models import FourFactorRow, GamePair, GameSummary, PredictionResult

__all__ = [
    # Entry points
    "matchups_date",
    "matchupsDate",
    "create_four_factors",
    "calculate_team_metrics",
    "train_model",
    "trainModel",
    "predict_matchup",
    # Models
    "FourFactorRow",
    "GamePair",
    "GameSummary",
    "PredictionResult",
    "TrainedModelPair",
    # Configuration
    "FetchSettings",
    "TrainingConfig",
    # Errors
    "ForecasterError",
    "FetchError",
    "RetryableError",
    "ParseError",
    "ComputationError",
]

__version__ = "0.1.0"
