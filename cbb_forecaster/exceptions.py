"""Error taxonomy shared by the scrapers, feature code and trainer."""

from typing import Optional


class ForecasterError(Exception):
    """Base class for every error raised by this package."""


class FetchError(ForecasterError):
    """Raised when a page cannot be retrieved (network, HTTP, or missing URL)."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RetryableError(FetchError):
    """HTTP 429 from the upstream site; ``retry_after`` is the advertised wait in seconds."""

    def __init__(self, message: str, url: Optional[str] = None, retry_after: float = 0.0):
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class ParseError(ForecasterError, ValueError):
    """Raised when an expected table, row or section is missing from a fetched page."""


class ComputationError(ForecasterError, ArithmeticError):
    """Raised on a zero denominator or a non-numeric cell where a number is required."""
