"""Column layouts of the Sports Reference tables this package reads.

None of these tables is read by header: the box-score totals rows are read by
cell position and the season team/opponent table has a header row that does not
parse cleanly. Every positional assumption about the site's layout lives here,
so a layout change is a single edit (bump ``SCHEMA_VERSION`` alongside it).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class TableSchema:
    """Ordered column names for one table's ``td`` cells."""

    name: str
    columns: Sequence[str]

    def position(self, column: str) -> int:
        """1-based cell position of ``column``."""
        try:
            return list(self.columns).index(column) + 1
        except ValueError:
            raise KeyError(f"{self.name} has no column '{column}'") from None

    def label(self, cells: List[str]) -> Dict[str, str]:
        """Zip cell texts onto column names; extra cells are ignored."""
        return dict(zip(self.columns, cells))


# ``td`` cells of a box-score basic totals row (the label sits in a ``th``).
BOX_SCORE_BASIC = TableSchema(
    name="box-score-basic",
    columns=(
        "MP", "FG", "FGA", "FG%", "2P", "2PA", "2P%", "3P", "3PA", "3P%",
        "FT", "FTA", "FT%", "ORB", "DRB", "TRB", "AST", "STL", "BLK", "TOV",
        "PF", "PTS",
    ),
)

# ``td`` cells of a box-score advanced totals row.
BOX_SCORE_ADVANCED = TableSchema(
    name="box-score-advanced",
    columns=(
        "MP", "TS%", "eFG%", "3PAr", "FTr", "ORB%", "DRB%", "TRB%", "AST%",
        "STL%", "BLK%", "TOV%", "USG%", "ORtg", "DRtg", "BPM",
    ),
)

# Every cell (``th`` and ``td``) of a row in the season team/opponent table.
SEASON_TEAM_OPPONENT = TableSchema(
    name="season-total_per_game",
    columns=(
        "Entity", "G", "MP", "FG", "FGA", "FG%", "2P", "2PA", "2P%", "3P",
        "3PA", "3P%", "FT", "FTA", "FT%", "ORB", "DRB", "TRB", "AST", "STL",
        "BLK", "TOV", "PF", "PTS",
    ),
)

BOX_SCORE_ADVANCED_PREFIX = "box-score-advanced-"
BOX_SCORE_BASIC_PREFIX = "box-score-basic-"
BOX_SCORE_SECTION_SUFFIX = "_sh"
TOTALS_ROW_LABEL = "School Totals"

PLAYERS_PER_GAME_ID = "div_players_per_game"
TEAM_OPPONENT_ID = "div_season-total_per_game"
TEAM_TOTALS_LABEL = "Team Totals"
TEAM_ROW_LABEL = "Team"
OPPONENT_ROW_LABEL = "Opponent"

SCHEDULE_GAME_SELECTOR = "div.game_summary.nohover.gender-m"
SCHEDULE_TEAM_ROWS_SELECTOR = "table.teams tr"
SCHEDULE_BOXSCORE_LINK_SELECTOR = "td.right.gamelink a"
