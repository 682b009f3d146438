"""Page fetching, identifiers and table schemas for Sports Reference data."""

from .fetcher import PageFetcher, default_fetcher
from .rate_limit import FixedIntervalRateLimiter

__all__ = ["FixedIntervalRateLimiter", "PageFetcher", "default_fetcher"]
