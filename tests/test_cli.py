import json
import sys
from datetime import date

import cbb_forecaster.main as main_mod
from cbb_forecaster.exceptions import FetchError
from cbb_forecaster.models.game import GameSummary
from cbb_forecaster.models.team import FourFactorRow


def _run(monkeypatch, argv):
    monkeypatch.setattr(sys, "argv", ["cbb-forecaster"] + argv)
    return main_mod.main()


def test_matchups_command_prints_games(monkeypatch, capsys):
    seen = {}

    class FakeScheduleScraper:
        def __init__(self, fetcher):
            seen["interval"] = fetcher.settings.request_interval

        def matchups_date(self, game_date):
            seen["date"] = game_date
            return [GameSummary(date=date(2025, 1, 4), away_team="Portland", home_team="Oregon State")]

    monkeypatch.setattr(main_mod, "ScheduleScraper", FakeScheduleScraper)

    code = _run(monkeypatch, ["--delay", "1.5", "matchups", "--date", "2025-01-04"])

    assert code == 0
    assert seen == {"interval": 1.5, "date": "2025-01-04"}
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["away_team"] == "Portland"
    assert payload[0]["date"] == "2025-01-04"


def test_team_metrics_command_prints_row(monkeypatch, capsys):
    class FakeSeasonScraper:
        def __init__(self, fetcher):
            pass

        def calculate_team_metrics(self, url):
            return FourFactorRow("gonzaga", 70.1, 0.56, 15.2, 0.33, 0.31, 117.4)

    monkeypatch.setattr(main_mod, "TeamSeasonScraper", FakeSeasonScraper)

    code = _run(monkeypatch, ["team-metrics", "--url", "https://example.test/gonzaga/men/2025.html"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["team_id"] == "gonzaga"
    assert payload["final_score"] is None


def test_errors_are_reported_with_exit_code(monkeypatch, capsys):
    class FailingScraper:
        def __init__(self, fetcher):
            pass

        def create_four_factors(self, url):
            raise FetchError("HTTP 503", url=url, status_code=503)

    monkeypatch.setattr(main_mod, "BoxScoreScraper", FailingScraper)

    code = _run(monkeypatch, ["four-factors", "--url", "https://example.test/box.html"])

    assert code == 1
    assert "HTTP 503" in capsys.readouterr().err


def test_no_command_prints_help(monkeypatch, capsys):
    assert _run(monkeypatch, []) == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_four_factors_command_prints_rows(monkeypatch, capsys):
    class FakeBoxScoreScraper:
        def __init__(self, fetcher):
            pass

        def create_four_factors(self, url):
            return [
                FourFactorRow("portland", 63.7, 0.447, 14.9, 27.0, 0.158, 94.2, 60.0),
                FourFactorRow("oregon_state", 67.5, 0.525, 11.2, 32.4, 0.262, 125.6, 80.0),
            ]

    monkeypatch.setattr(main_mod, "BoxScoreScraper", FakeBoxScoreScraper)

    code = _run(monkeypatch, ["four-factors", "--url", "https://example.test/box.html"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [row["team_id"] for row in payload] == ["portland", "oregon_state"]
    assert payload[1]["final_score"] == 80.0


def test_predict_command_trains_then_predicts(monkeypatch, capsys):
    import numpy as np

    seen = {}

    class FakeModels:
        home_rmse = 9.5
        away_rmse = 10.25

        def predict(self, features):
            return np.array([74.0]), np.array([69.0])

    class FakePipeline:
        def __init__(self, config, fetcher=None):
            seen["config"] = config

        def run(self, start, end):
            seen["range"] = (start, end)
            return FakeModels()

    class FakeSeasonScraper:
        def __init__(self, fetcher):
            pass

        def calculate_team_metrics(self, url):
            return FourFactorRow(url.rsplit("/", 1)[-1], 68.0, 0.5, 16.0, 0.3, 0.3, 105.0)

    monkeypatch.setattr(main_mod, "TrainingPipeline", FakePipeline)
    monkeypatch.setattr(main_mod, "TeamSeasonScraper", FakeSeasonScraper)

    code = _run(
        monkeypatch,
        [
            "predict",
            "--start", "2024-12-01",
            "--end", "2024-12-03",
            "--team1", "https://example.test/gonzaga",
            "--team2", "https://example.test/duke",
            "--games-per-day", "5",
            "--trees", "50",
            "--seed", "3",
        ],
    )

    assert code == 0
    config = seen["config"]
    assert (config.games_per_day, config.n_estimators, config.random_seed) == (5, 50, 3)
    assert seen["range"] == ("2024-12-01", "2024-12-03")
    payload = json.loads(capsys.readouterr().out)
    assert payload["away_team"] == "gonzaga"
    assert payload["home_team"] == "duke"
    assert payload["predicted_home_points"] == 74.0
    assert payload["predicted_away_points"] == 69.0
    assert payload["home_rmse"] == 9.5
