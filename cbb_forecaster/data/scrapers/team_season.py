"""Sports Reference team season page scraper: one season-aggregate four-factor row."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from ...exceptions import ParseError
from ...models.team import FourFactorRow
from ..features import four_factors as ff
from ..fetcher import PageFetcher, default_fetcher
from ..normalize import team_id_from_url
from ..schema import (
    OPPONENT_ROW_LABEL,
    PLAYERS_PER_GAME_ID,
    SEASON_TEAM_OPPONENT,
    TEAM_OPPONENT_ID,
    TEAM_ROW_LABEL,
    TEAM_TOTALS_LABEL,
)

logger = logging.getLogger(__name__)


class TeamSeasonScraper:
    """Compute a team's season four factors from its school season page."""

    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.fetcher = fetcher or default_fetcher()

    def calculate_team_metrics(self, season_url: str) -> FourFactorRow:
        """Fetch ``season_url`` and return the team's season-aggregate row."""
        soup = self.fetcher.fetch(season_url)
        return self._parse_team_metrics(soup, team_id_from_url(season_url))

    def _parse_team_metrics(self, soup: BeautifulSoup, team_id: str) -> FourFactorRow:
        totals = self._team_totals(soup)
        team_row, opp_row = self._team_and_opponent(soup)

        fga = ff.parse_number(team_row.get("FGA"), "Team FGA")
        orb = ff.parse_number(team_row.get("ORB"), "Team ORB")
        tov = ff.parse_number(team_row.get("TOV"), "Team TOV")
        fta = ff.parse_number(team_row.get("FTA"), "Team FTA")
        ft = ff.parse_number(team_row.get("FT"), "Team FT")
        opp_drb = ff.parse_number(opp_row.get("DRB"), "Opponent DRB")

        poss = ff.possessions(fga, orb, tov, fta)
        points = ff.parse_number(totals.get("PTS"), "Team Totals PTS")

        row = FourFactorRow(
            team_id=team_id,
            possessions=poss,
            effective_fg_pct=ff.parse_number(totals.get("eFG%"), "Team Totals eFG%"),
            turnover_pct=ff.turnover_pct(tov, fga, fta),
            offensive_rebound_pct=ff.offensive_rebound_pct(orb, opp_drb),
            free_throw_rate=ff.free_throw_rate(ft, fga),
            offensive_rating=ff.offensive_rating(points, poss),
        )
        logger.debug("Season metrics for %s: %s", team_id, row)
        return row

    def _team_totals(self, soup: BeautifulSoup) -> Dict[str, str]:
        """The ``Team Totals`` row of the per-player table, keyed by header text."""
        table = self._find_table(soup, PLAYERS_PER_GAME_ID)
        header = self._header(table)
        rows = self._data_rows(table)
        if not rows or not header:
            raise ParseError("Failed to extract the Player Per Game table")

        for cells in rows:
            if TEAM_TOTALS_LABEL in cells:
                return dict(zip(header, cells))
        raise ParseError(f"'{TEAM_TOTALS_LABEL}' row not found in the Player Per Game table")

    def _team_and_opponent(self, soup: BeautifulSoup):
        table = self._find_table(soup, TEAM_OPPONENT_ID)
        rows = self._data_rows(table)
        if not rows:
            raise ParseError("Failed to extract the team/opponent table")

        by_entity = {}
        for cells in rows:
            if cells and cells[0] not in by_entity:
                by_entity[cells[0]] = SEASON_TEAM_OPPONENT.label(cells)

        team_row = by_entity.get(TEAM_ROW_LABEL)
        opp_row = by_entity.get(OPPONENT_ROW_LABEL)
        if team_row is None or opp_row is None:
            raise ParseError("Failed to extract team or opponent rows")
        return team_row, opp_row

    @staticmethod
    def _find_table(soup: BeautifulSoup, element_id: str):
        element = soup.find(id=element_id)
        if element is None:
            raise ParseError(f"Table container '{element_id}' not found on the page")
        table = element if element.name == "table" else element.find("table")
        if table is None:
            raise ParseError(f"No table inside '{element_id}'")
        return table

    @staticmethod
    def _header(table) -> List[str]:
        thead = table.find("thead")
        header_rows = thead.find_all("tr") if thead else table.find_all("tr", limit=1)
        if not header_rows:
            return []
        return [cell.get_text(strip=True) for cell in header_rows[-1].find_all(["th", "td"])]

    @staticmethod
    def _data_rows(table) -> List[List[str]]:
        rows: List[List[str]] = []
        for row in table.find_all("tr"):
            if row.find_parent("thead") is not None:
                continue
            if "thead" in (row.get("class") or []):
                continue
            cells = [cell.get_text(strip=True) for cell in row.find_all(["th", "td"])]
            if cells:
                rows.append(cells)
        return rows
