"""Game-level models: schedule entries, labeled team pairs and predictions."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .team import FourFactorRow


@dataclass(frozen=True)
class GameSummary:
    """One game from a daily schedule page."""

    date: date
    away_team: str
    home_team: str
    away_score: Optional[int] = None
    home_score: Optional[int] = None
    boxscore_url: Optional[str] = None
    away_team_id: Optional[str] = None
    home_team_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert game to dictionary."""
        return {
            "date": self.date.isoformat(),
            "away_team": self.away_team,
            "home_team": self.home_team,
            "away_score": self.away_score,
            "home_score": self.home_score,
            "boxscore_url": self.boxscore_url,
            "away_team_id": self.away_team_id,
            "home_team_id": self.home_team_id,
        }


@dataclass(frozen=True)
class GamePair:
    """
    Away and home four-factor rows for one game.

    ``verified`` is True when the away/home assignment was matched against the
    schedule's own team links; False means it rests on box-score document order.
    """

    away: FourFactorRow
    home: FourFactorRow
    summary: Optional[GameSummary] = None
    verified: bool = False


@dataclass(frozen=True)
class PredictionResult:
    """Predicted final score for a hypothetical matchup."""

    away_team: str
    home_team: str
    predicted_away_points: float
    predicted_home_points: float

    def to_dict(self) -> dict:
        return {
            "away_team": self.away_team,
            "home_team": self.home_team,
            "predicted_away_points": self.predicted_away_points,
            "predicted_home_points": self.predicted_home_points,
        }
