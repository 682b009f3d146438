"""Team-level four-factor row."""

import math
from dataclasses import asdict, dataclass
from typing import Optional

from ..exceptions import ComputationError


@dataclass(frozen=True)
class FourFactorRow:
    """One team's four factors, for a single game or a season aggregate."""

    team_id: str
    possessions: float
    effective_fg_pct: float
    turnover_pct: float  # percentage units, 0-100
    offensive_rebound_pct: float
    free_throw_rate: float  # FT / FGA
    offensive_rating: float  # points per 100 possessions
    final_score: Optional[float] = None  # None for season aggregates

    def __post_init__(self):
        """Validate the possession estimate, which is a denominator downstream."""
        if not math.isfinite(self.possessions) or self.possessions <= 0:
            raise ComputationError(
                f"Possessions must be positive for team '{self.team_id}', got {self.possessions}"
            )

    def to_dict(self) -> dict:
        """Convert row to dictionary."""
        return asdict(self)
