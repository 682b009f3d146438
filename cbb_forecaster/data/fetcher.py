"""Page fetcher shared by every Sports Reference extractor."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

import requests
from bs4 import BeautifulSoup, Comment

from ..config import FetchSettings
from ..exceptions import FetchError, RetryableError
from .rate_limit import FixedIntervalRateLimiter

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Fetch and parse Sports Reference pages.

    Every request goes through the rate limiter first. A 429 response is retried
    up to ``settings.max_retries`` times, waiting whatever the ``Retry-After``
    header asks for; any other failure surfaces immediately as ``FetchError``.
    """

    def __init__(
        self,
        settings: Optional[FetchSettings] = None,
        session: Optional[requests.Session] = None,
        rate_limiter=None,
    ):
        self.settings = settings or FetchSettings()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.settings.user_agent})
        self.rate_limiter = rate_limiter or FixedIntervalRateLimiter(self.settings.request_interval)

    def fetch(self, url: Optional[str]) -> BeautifulSoup:
        """Return the parsed document at ``url``."""
        if not url:
            raise FetchError("No URL given", url=url)

        for attempt in range(self.settings.max_retries + 1):
            self.rate_limiter.acquire()
            try:
                html = self._get(url)
            except RetryableError as exc:
                if attempt >= self.settings.max_retries:
                    raise FetchError(
                        f"Still rate limited after {self.settings.max_retries} retries: {url}",
                        url=url,
                        status_code=exc.status_code,
                    ) from exc
                logger.warning(
                    "Rate limited on %s; retrying in %.1fs (retry %d/%d)",
                    url,
                    exc.retry_after,
                    attempt + 1,
                    self.settings.max_retries,
                )
                self.rate_limiter.defer(exc.retry_after)
                continue
            return self.parse(html)

        # Unreachable: the loop either returns or raises.
        raise FetchError(f"Failed to fetch {url}", url=url)

    def _get(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Request failed for {url}: {exc}", url=url) from exc

        if response.status_code == 429:
            retry_after = self._retry_after_seconds(response.headers.get("Retry-After"))
            raise RetryableError(f"HTTP 429 for {url}", url=url, retry_after=retry_after)
        if response.status_code >= 400:
            raise FetchError(
                f"HTTP {response.status_code} for {url}",
                url=url,
                status_code=response.status_code,
            )
        return response.text

    def _retry_after_seconds(self, header: Optional[str]) -> float:
        """Seconds to wait for a ``Retry-After`` value (delta-seconds or HTTP-date)."""
        if not header:
            return self.settings.default_retry_after
        header = header.strip()
        try:
            return max(0.0, float(header))
        except ValueError:
            pass
        try:
            when = parsedate_to_datetime(header)
        except (TypeError, ValueError):
            return self.settings.default_retry_after
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())

    @staticmethod
    def parse(html: str) -> BeautifulSoup:
        """Parse ``html`` and restore tables the site ships inside HTML comments."""
        soup = BeautifulSoup(html, "lxml")
        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            if "<table" not in comment:
                continue
            fragment = BeautifulSoup(str(comment), "lxml")
            container = fragment.body or fragment
            for node in list(container.contents):
                comment.insert_before(node)
            comment.extract()
        return soup


_default_fetcher: Optional[PageFetcher] = None
_default_lock = threading.Lock()


def default_fetcher() -> PageFetcher:
    """
    Process-wide fetcher used when a caller does not supply one.

    Every scraper built without an explicit fetcher shares this instance, and
    with it one rate limiter, so back-to-back calls stay spaced out.
    """
    global _default_fetcher
    with _default_lock:
        if _default_fetcher is None:
            _default_fetcher = PageFetcher()
        return _default_fetcher
