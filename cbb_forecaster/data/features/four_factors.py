"""Four-factor formulas.

Counting stats in, rates out. A zero denominator raises ``ComputationError``;
nothing here returns NaN or inf.
"""

from __future__ import annotations

from typing import Optional

from ...config import FTA_POSSESSION_WEIGHT
from ...exceptions import ComputationError


def parse_number(text: Optional[str], column: str = "value") -> float:
    """Parse a table cell such as ``"1,234"`` or ``".512"``."""
    if text is None:
        raise ComputationError(f"Missing numeric cell for {column}")
    cleaned = str(text).strip().replace(",", "")
    if not cleaned:
        raise ComputationError(f"Empty numeric cell for {column}")
    try:
        return float(cleaned)
    except ValueError:
        raise ComputationError(f"Non-numeric cell for {column}: {text!r}") from None


def _ratio(numerator: float, denominator: float, what: str) -> float:
    if denominator == 0:
        raise ComputationError(f"Cannot compute {what}: denominator is zero")
    return numerator / denominator


def possessions(fga: float, orb: float, tov: float, fta: float) -> float:
    """Oliver possession estimate: FGA - ORB + TOV + 0.475 * FTA."""
    return fga - orb + tov + FTA_POSSESSION_WEIGHT * fta


def free_throw_rate(ft: float, fga: float) -> float:
    """Free throws made per field-goal attempt."""
    return _ratio(ft, fga, "free throw rate (FGA = 0)")


def turnover_pct(tov: float, fga: float, fta: float) -> float:
    """Turnovers per 100 plays, plays = FGA + 0.475 * FTA + TOV."""
    return 100.0 * _ratio(tov, fga + FTA_POSSESSION_WEIGHT * fta + tov, "turnover percentage")


def offensive_rebound_pct(team_orb: float, opponent_drb: float) -> float:
    """Share of available offensive rebounds collected, in [0, 1]."""
    return _ratio(team_orb, team_orb + opponent_drb, "offensive rebound percentage")


def offensive_rating(points: float, poss: float) -> float:
    """Points per 100 possessions."""
    if poss <= 0:
        raise ComputationError(f"Cannot compute offensive rating from {poss} possessions")
    return 100.0 * points / poss
