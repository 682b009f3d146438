"""Sports Reference box-score scraper: one four-factor row per team."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from bs4 import BeautifulSoup

from ...exceptions import ParseError
from ...models.team import FourFactorRow
from ..features import four_factors as ff
from ..fetcher import PageFetcher, default_fetcher
from ..normalize import normalize_team_id
from ..schema import (
    BOX_SCORE_ADVANCED,
    BOX_SCORE_ADVANCED_PREFIX,
    BOX_SCORE_BASIC,
    BOX_SCORE_BASIC_PREFIX,
    BOX_SCORE_SECTION_SUFFIX,
    TOTALS_ROW_LABEL,
    TableSchema,
)

logger = logging.getLogger(__name__)

BASIC_COLUMNS = ("FGA", "FT", "FTA", "ORB", "TOV", "PTS")
ADVANCED_COLUMNS = ("eFG%", "ORB%", "TOV%", "ORtg")


class BoxScoreScraper:
    """Extract per-game four factors for both teams on a box-score page."""

    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.fetcher = fetcher or default_fetcher()

    def create_four_factors(self, boxscore_url: Optional[str]) -> List[FourFactorRow]:
        """
        Return ``[first_team, second_team]`` in page order.

        A missing URL yields an empty list rather than an error; games without
        a box-score link are common on the scoreboard.
        """
        if not boxscore_url:
            logger.info("Box score URL is missing; returning no rows")
            return []
        soup = self.fetcher.fetch(boxscore_url)
        return self._parse_four_factors(soup)

    def _parse_four_factors(self, soup: BeautifulSoup) -> List[FourFactorRow]:
        team_ids = self._extract_team_ids(soup)
        return [self._team_row(soup, team_id) for team_id in team_ids[:2]]

    @staticmethod
    def _extract_team_ids(soup: BeautifulSoup) -> List[str]:
        team_ids: List[str] = []
        for element in soup.select(f"[id^='{BOX_SCORE_ADVANCED_PREFIX}']"):
            team_id = element["id"][len(BOX_SCORE_ADVANCED_PREFIX):]
            if team_id.endswith(BOX_SCORE_SECTION_SUFFIX):
                team_id = team_id[: -len(BOX_SCORE_SECTION_SUFFIX)]
            if team_id and team_id not in team_ids:
                team_ids.append(team_id)
        if len(team_ids) < 2:
            raise ParseError(f"Failed to extract team IDs from the page (found {team_ids})")
        return team_ids

    def _team_row(self, soup: BeautifulSoup, team_id: str) -> FourFactorRow:
        basic = self._totals(soup, BOX_SCORE_BASIC_PREFIX + team_id, BOX_SCORE_BASIC, BASIC_COLUMNS)
        advanced = self._totals(
            soup, BOX_SCORE_ADVANCED_PREFIX + team_id, BOX_SCORE_ADVANCED, ADVANCED_COLUMNS
        )

        fga = ff.parse_number(basic["FGA"], "FGA")
        ft = ff.parse_number(basic["FT"], "FT")
        fta = ff.parse_number(basic["FTA"], "FTA")
        orb = ff.parse_number(basic["ORB"], "ORB")
        tov = ff.parse_number(basic["TOV"], "TOV")

        return FourFactorRow(
            team_id=normalize_team_id(team_id),
            possessions=ff.possessions(fga, orb, tov, fta),
            effective_fg_pct=ff.parse_number(advanced["eFG%"], "eFG%"),
            turnover_pct=ff.parse_number(advanced["TOV%"], "TOV%"),
            offensive_rebound_pct=ff.parse_number(advanced["ORB%"], "ORB%"),
            free_throw_rate=ff.free_throw_rate(ft, fga),
            offensive_rating=ff.parse_number(advanced["ORtg"], "ORtg"),
            final_score=ff.parse_number(basic["PTS"], "PTS"),
        )

    @staticmethod
    def _totals(
        soup: BeautifulSoup, element_id: str, schema: TableSchema, columns: Sequence[str]
    ) -> Dict[str, str]:
        """Find the School Totals row under ``element_id`` and label its ``td`` cells."""
        section = soup.find(id=element_id)
        if section is None:
            raise ParseError(f"Section '{element_id}' not found on the page")

        wanted = TOTALS_ROW_LABEL.lower()
        for row in section.find_all("tr"):
            if wanted not in row.get_text(" ", strip=True).lower():
                continue
            cells = [td.get_text(strip=True) for td in row.find_all("td")]
            required = max(schema.position(column) for column in columns)
            if len(cells) < required:
                raise ParseError(
                    f"'{TOTALS_ROW_LABEL}' row in '{element_id}' has {len(cells)} cells, "
                    f"expected at least {required} (schema '{schema.name}')"
                )
            return schema.label(cells)

        raise ParseError(f"Failed to find the '{TOTALS_ROW_LABEL}' row in '{element_id}'")
