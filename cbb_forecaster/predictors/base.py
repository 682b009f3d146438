"""Base predictor interface for matchup score predictions."""

from abc import ABC, abstractmethod

from ..models.game import PredictionResult


class BasePredictor(ABC):
    """Abstract base class for score predictors."""

    def __init__(self, name: str):
        """
        Initialize predictor.

        Args:
            name: Name of the predictor model
        """
        self.name = name

    @abstractmethod
    def predict(self, away_url: str, home_url: str) -> PredictionResult:
        """
        Predict the final score of a matchup.

        Args:
            away_url: Season page of the away team
            home_url: Season page of the home team

        Returns:
            PredictionResult with both teams' predicted points
        """
        pass
