"""Unit tests for training-table assembly."""

from datetime import date

import pytest

from cbb_forecaster.data.features.dataset import (
    COMPARATIVE_COLUMNS,
    FEATURE_COLUMNS,
    DatasetAssembler,
    add_comparative_features,
)
from cbb_forecaster.models.game import GameSummary
from cbb_forecaster.models.team import FourFactorRow


def _row(team_id, ortg=100.0, efg=0.5, final=70.0):
    return FourFactorRow(
        team_id=team_id,
        possessions=68.0,
        effective_fg_pct=efg,
        turnover_pct=16.0,
        offensive_rebound_pct=30.0,
        free_throw_rate=0.3,
        offensive_rating=ortg,
        final_score=final,
    )


def _summary(away_id, home_id, day=1):
    return GameSummary(
        date=date(2024, 12, day),
        away_team=away_id.title(),
        home_team=home_id.title(),
        away_team_id=away_id,
        home_team_id=home_id,
        boxscore_url=f"https://example.test/{away_id}-{home_id}.html",
    )


def _games(n):
    games = []
    for i in range(n):
        away, home = f"away{i}", f"home{i}"
        rows = [_row(away, ortg=95.0 + i, efg=0.45), _row(home, ortg=105.0 + 2 * i, efg=0.55)]
        games.append((_summary(away, home), rows))
    return games


def test_assemble_n_complete_games():
    result = DatasetAssembler().assemble(_games(5))
    frame = result.frame

    assert len(frame) == 5
    assert list(frame["game_id"]) == [1, 2, 3, 4, 5]
    assert frame["game_id"].is_unique
    assert result.dropped == 0
    assert result.unverified == 0
    assert set(FEATURE_COLUMNS) <= set(frame.columns)


def test_comparative_features():
    frame = DatasetAssembler().assemble(_games(4)).frame

    assert (frame["delta_ortg"] == frame["home_ortg"] - frame["away_ortg"]).all()
    assert (frame["combined_ortg"] == frame["home_ortg"] + frame["away_ortg"]).all()
    assert frame["delta_efg_pct"].tolist() == pytest.approx((frame["home_efg_pct"] - frame["away_efg_pct"]).tolist())
    assert frame["combined_efg_pct"].tolist() == pytest.approx([1.0] * 4)
    # delta = combined - 2 * away for every record
    assert frame["delta_ortg"].tolist() == pytest.approx(
        (frame["combined_ortg"] - 2 * frame["away_ortg"]).tolist()
    )


def test_incomplete_games_are_dropped_and_reported():
    games = _games(3)
    games.insert(1, (_summary("lonely", "nobody"), [_row("lonely")]))
    games.append((_summary("empty", "page"), []))

    result = DatasetAssembler().assemble(games)

    assert len(result.frame) == 3
    assert list(result.frame["game_id"]) == [1, 2, 3]
    assert result.dropped == 2
    assert result.dropped_indices == [1, 4]


def test_reversed_box_score_order_is_swapped_to_schedule_labels():
    summary = _summary("portland", "oregon_state")
    rows = [_row("oregon-state", final=80.0), _row("portland", final=60.0)]

    pair = DatasetAssembler().label_pair(rows, summary)

    assert pair.verified
    assert pair.away.team_id == "portland"
    assert pair.home.team_id == "oregon-state"


def test_unmatched_teams_fall_back_to_page_order():
    summary = _summary("duke", "north_carolina")
    rows = [_row("first"), _row("second")]

    result = DatasetAssembler().assemble([(summary, rows)])

    assert result.unverified == 1
    assert result.frame.loc[0, "away_team_id"] == "first"
    assert result.frame.loc[0, "home_team_id"] == "second"


def test_pair_rows_positional():
    rows = [_row("a1"), _row("h1"), _row("a2"), _row("h2"), _row("orphan")]
    pairs, leftover = DatasetAssembler().pair_rows(rows)

    assert [(p.away.team_id, p.home.team_id) for p in pairs] == [("a1", "h1"), ("a2", "h2")]
    assert leftover == 1
    assert not any(p.verified for p in pairs)

    frame = DatasetAssembler().build_frame(pairs)
    assert list(frame["game_id"]) == [1, 2]
    assert list(frame["away_team"]) == ["a1", "a2"]


def test_assemble_does_not_mutate_inputs():
    games = _games(2)
    snapshot = [(summary, list(rows)) for summary, rows in games]

    DatasetAssembler().assemble(games)

    assert games == snapshot


def test_empty_input_yields_empty_frame_with_columns():
    result = DatasetAssembler().assemble([])
    assert result.frame.empty
    assert set(COMPARATIVE_COLUMNS) <= set(result.frame.columns)


def test_add_comparative_features_returns_copy():
    import pandas as pd

    frame = pd.DataFrame(
        [{"home_ortg": 110.0, "away_ortg": 100.0, "home_efg_pct": 0.55, "away_efg_pct": 0.5}]
    )
    out = add_comparative_features(frame)

    assert "delta_ortg" not in frame.columns
    assert out.loc[0, "delta_ortg"] == pytest.approx(10.0)
    assert out.loc[0, "combined_ortg"] == pytest.approx(210.0)
