"""Runtime settings and site constants."""

from dataclasses import dataclass
from typing import Optional

SPORTS_REFERENCE_BASE_URL = "https://www.sports-reference.com"
SCHEDULE_PATH = "/cbb/boxscores/index.cgi"

DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)"

# Oliver's free-throw weight in the possession estimate.
FTA_POSSESSION_WEIGHT = 0.475


@dataclass
class FetchSettings:
    """HTTP settings shared by every extractor."""

    base_url: str = SPORTS_REFERENCE_BASE_URL
    # Minimum spacing between requests, in seconds.
    request_interval: float = 3.0
    timeout: int = 30
    max_retries: int = 3
    # Used when a 429 response carries no usable Retry-After header.
    default_retry_after: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class TrainingConfig:
    """Knobs for the score models and the train/test split."""

    games_per_day: int = 10
    n_estimators: int = 500
    test_fraction: float = 0.2
    random_seed: int = 42
    n_jobs: Optional[int] = None

    def __post_init__(self):
        if not 0.0 < self.test_fraction < 1.0:
            raise ValueError(f"test_fraction must be in (0, 1), got {self.test_fraction}")
        if self.n_estimators < 1:
            raise ValueError(f"n_estimators must be positive, got {self.n_estimators}")
        if self.games_per_day < 1:
            raise ValueError(f"games_per_day must be positive, got {self.games_per_day}")
