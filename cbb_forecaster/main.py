"""Main CLI interface for the CBB score forecaster."""

import argparse
import json
import logging
import sys

from .config import FetchSettings, TrainingConfig
from .data.fetcher import PageFetcher
from .data.scrapers.boxscore import BoxScoreScraper
from .data.scrapers.schedule import ScheduleScraper
from .data.scrapers.team_season import TeamSeasonScraper
from .exceptions import ForecasterError
from .pipeline.training import TrainingPipeline
from .predictors.matchup import MatchupPredictor


def _fetcher(args) -> PageFetcher:
    return PageFetcher(FetchSettings(request_interval=args.delay, max_retries=args.max_retries))


def _emit(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def list_matchups(args):
    """Print the scoreboard for a date."""
    games = ScheduleScraper(_fetcher(args)).matchups_date(args.date)
    _emit([game.to_dict() for game in games])
    return 0


def four_factors(args):
    """Print both teams' four factors for a box score."""
    rows = BoxScoreScraper(_fetcher(args)).create_four_factors(args.url)
    _emit([row.to_dict() for row in rows])
    return 0


def team_metrics(args):
    """Print a team's season four factors."""
    row = TeamSeasonScraper(_fetcher(args)).calculate_team_metrics(args.url)
    _emit(row.to_dict())
    return 0


def predict(args):
    """Train on a date range, then predict one matchup."""
    config = TrainingConfig(
        games_per_day=args.games_per_day,
        n_estimators=args.trees,
        random_seed=args.seed,
        test_fraction=args.test_fraction,
    )
    fetcher = _fetcher(args)
    print(f"Training on games from {args.start} to {args.end}...", file=sys.stderr)
    models = TrainingPipeline(config, fetcher=fetcher).run(args.start, args.end)
    print(f"Home RMSE: {models.home_rmse:.3f}", file=sys.stderr)
    print(f"Away RMSE: {models.away_rmse:.3f}", file=sys.stderr)

    predictor = MatchupPredictor(models, TeamSeasonScraper(fetcher))
    result = predictor.predict(args.team1, args.team2)
    payload = result.to_dict()
    payload["home_rmse"] = models.home_rmse
    payload["away_rmse"] = models.away_rmse
    _emit(payload)
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="College basketball score forecaster built on four-factor features"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument(
        "--delay", type=float, default=3.0, help="Minimum seconds between requests (default: 3)"
    )
    parser.add_argument(
        "--max-retries", type=int, default=3, help="Retries after an HTTP 429 (default: 3)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    matchups_parser = subparsers.add_parser("matchups", help="List games played on a date")
    matchups_parser.add_argument("--date", default=None, help="YYYY-MM-DD (default: today)")

    ff_parser = subparsers.add_parser("four-factors", help="Four factors from a box score")
    ff_parser.add_argument("--url", required=True, help="Box score URL")

    team_parser = subparsers.add_parser("team-metrics", help="Season four factors for a team")
    team_parser.add_argument("--url", required=True, help="Team season page URL")

    predict_parser = subparsers.add_parser("predict", help="Train on a date range and predict a matchup")
    predict_parser.add_argument("--start", required=True, help="First training date (YYYY-MM-DD)")
    predict_parser.add_argument("--end", required=True, help="Last training date (YYYY-MM-DD)")
    predict_parser.add_argument("--team1", required=True, help="Away team season page URL")
    predict_parser.add_argument("--team2", required=True, help="Home team season page URL")
    predict_parser.add_argument("--games-per-day", type=int, default=10, help="Games kept per day")
    predict_parser.add_argument("--trees", type=int, default=500, help="Trees per random forest")
    predict_parser.add_argument("--seed", type=int, default=42, help="Random seed for the split and forests")
    predict_parser.add_argument("--test-fraction", type=float, default=0.2, help="Held-out share of games")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "matchups": list_matchups,
        "four-factors": four_factors,
        "team-metrics": team_metrics,
        "predict": predict,
    }
    try:
        return commands[args.command](args)
    except (ForecasterError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
