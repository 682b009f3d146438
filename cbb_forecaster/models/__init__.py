"""Data models."""

from .game import GamePair, GameSummary, PredictionResult
from .team import FourFactorRow

__all__ = ["FourFactorRow", "GamePair", "GameSummary", "PredictionResult"]
