"""Matchup predictors."""

from .base import BasePredictor
from .matchup import MatchupPredictor

__all__ = ["BasePredictor", "MatchupPredictor"]
