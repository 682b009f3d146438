"""Turn per-game four-factor rows into the wide training table.

One row per game: the away team's factors, the home team's factors and four
comparative features. ``add_comparative_features`` is the single definition of
those comparative features; the matchup predictor calls it too, so training
and inference cannot drift apart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ...models.game import GamePair, GameSummary
from ...models.team import FourFactorRow
from ..normalize import normalize_team_id

logger = logging.getLogger(__name__)

# Training-table suffix -> FourFactorRow attribute.
TEAM_STAT_COLUMNS: Dict[str, str] = {
    "poss": "possessions",
    "efg_pct": "effective_fg_pct",
    "tov_pct": "turnover_pct",
    "orb_pct": "offensive_rebound_pct",
    "ft_fga": "free_throw_rate",
    "ortg": "offensive_rating",
    "final": "final_score",
}

COMPARATIVE_COLUMNS = ["delta_ortg", "combined_ortg", "delta_efg_pct", "combined_efg_pct"]

# Model inputs. Final scores are targets; raw ratings only enter through the
# comparative columns.
FEATURE_COLUMNS = [
    f"{side}_{stat}"
    for side in ("away", "home")
    for stat in ("poss", "efg_pct", "tov_pct", "orb_pct", "ft_fga")
] + COMPARATIVE_COLUMNS

HOME_TARGET = "home_final"
AWAY_TARGET = "away_final"

METADATA_COLUMNS = ["game_id", "date", "away_team", "home_team", "away_team_id", "home_team_id"]
TRAINING_COLUMNS = (
    METADATA_COLUMNS
    + [f"away_{stat}" for stat in TEAM_STAT_COLUMNS]
    + [f"home_{stat}" for stat in TEAM_STAT_COLUMNS]
    + COMPARATIVE_COLUMNS
)

GameRows = Tuple[Optional[GameSummary], Sequence[FourFactorRow]]


def team_columns(row: FourFactorRow, side: str) -> Dict[str, Optional[float]]:
    """Prefix one team's factors with ``away_`` or ``home_``."""
    return {f"{side}_{suffix}": getattr(row, attr) for suffix, attr in TEAM_STAT_COLUMNS.items()}


def add_comparative_features(frame: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``frame`` with the home-minus-away and combined columns."""
    out = frame.copy()
    out["delta_ortg"] = out["home_ortg"] - out["away_ortg"]
    out["combined_ortg"] = out["home_ortg"] + out["away_ortg"]
    out["delta_efg_pct"] = out["home_efg_pct"] - out["away_efg_pct"]
    out["combined_efg_pct"] = out["home_efg_pct"] + out["away_efg_pct"]
    return out


@dataclass
class AssemblyResult:
    """Training table plus an account of what could not be used."""

    frame: pd.DataFrame
    dropped: int = 0
    dropped_indices: List[int] = field(default_factory=list)
    unverified: int = 0


class DatasetAssembler:
    """Pair away/home rows and build the training table."""

    def pair_rows(self, rows: Sequence[FourFactorRow]) -> Tuple[List[GamePair], int]:
        """
        Pair a flat row sequence by position: rows 2k and 2k+1 form one game,
        first = away, second = home. Returns the pairs and the number of
        trailing rows left without a partner.
        """
        pairs = [
            GamePair(away=rows[i], home=rows[i + 1])
            for i in range(0, len(rows) - 1, 2)
        ]
        leftover = len(rows) % 2
        if leftover:
            logger.warning("Dropping %d unpaired trailing row(s)", leftover)
        return pairs, leftover

    def label_pair(
        self, rows: Sequence[FourFactorRow], summary: Optional[GameSummary] = None
    ) -> Optional[GamePair]:
        """
        Decide which of a box score's two rows is away and which is home.

        The schedule's team links are the reference. Page order (first = away)
        is only used, unverified, when the schedule has no usable team IDs.
        Returns ``None`` when fewer than two rows were extracted.
        """
        if len(rows) < 2:
            return None
        first, second = rows[0], rows[1]
        if summary is None or not (summary.away_team_id or summary.home_team_id):
            return GamePair(away=first, home=second, summary=summary, verified=False)

        first_id = normalize_team_id(first.team_id)
        second_id = normalize_team_id(second.team_id)
        away_id = summary.away_team_id
        home_id = summary.home_team_id

        if first_id == away_id or second_id == home_id:
            return GamePair(away=first, home=second, summary=summary, verified=True)
        if first_id == home_id or second_id == away_id:
            logger.debug("Box score lists %s before %s; swapping to away/home", first_id, second_id)
            return GamePair(away=second, home=first, summary=summary, verified=True)

        logger.warning(
            "Could not match box score teams (%s, %s) to schedule (%s @ %s); using page order",
            first_id,
            second_id,
            away_id,
            home_id,
        )
        return GamePair(away=first, home=second, summary=summary, verified=False)

    def assemble(self, games: Sequence[GameRows]) -> AssemblyResult:
        """
        Build the training table from ``(summary, rows)`` entries.

        Entries with fewer than two rows are dropped and reported in the result.
        """
        pairs: List[GamePair] = []
        dropped_indices: List[int] = []
        for index, (summary, rows) in enumerate(games):
            pair = self.label_pair(rows, summary)
            if pair is None:
                dropped_indices.append(index)
                continue
            pairs.append(pair)

        if dropped_indices:
            logger.warning("Dropped %d incomplete game(s) of %d", len(dropped_indices), len(games))

        return AssemblyResult(
            frame=self.build_frame(pairs),
            dropped=len(dropped_indices),
            dropped_indices=dropped_indices,
            unverified=sum(1 for pair in pairs if not pair.verified),
        )

    def build_frame(self, pairs: Sequence[GamePair]) -> pd.DataFrame:
        """One row per pair, ``game_id`` numbered 1..N in input order."""
        records = []
        for game_id, pair in enumerate(pairs, start=1):
            summary = pair.summary
            record = {
                "game_id": game_id,
                "date": summary.date if summary else None,
                "away_team": summary.away_team if summary else pair.away.team_id,
                "home_team": summary.home_team if summary else pair.home.team_id,
                "away_team_id": pair.away.team_id,
                "home_team_id": pair.home.team_id,
            }
            record.update(team_columns(pair.away, "away"))
            record.update(team_columns(pair.home, "home"))
            records.append(record)

        if not records:
            return pd.DataFrame(columns=TRAINING_COLUMNS)
        frame = add_comparative_features(pd.DataFrame.from_records(records))
        return frame[TRAINING_COLUMNS]
