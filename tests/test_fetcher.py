"""Unit tests for the page fetcher and request pacing."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest
import requests

from cbb_forecaster.config import FetchSettings
from cbb_forecaster.data.fetcher import PageFetcher
from cbb_forecaster.data.rate_limit import FixedIntervalRateLimiter
from cbb_forecaster.exceptions import FetchError


class FakeResponse:
    def __init__(self, status_code=200, text="", headers=None):
        self.status_code = status_code
        self.text = text
        self.headers = headers or {}


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class RecordingLimiter:
    def __init__(self):
        self.acquired = 0
        self.deferred = []

    def acquire(self):
        self.acquired += 1
        return 0.0

    def defer(self, seconds):
        self.deferred.append(seconds)


def _fetcher(responses, max_retries=3):
    session = FakeSession(responses)
    limiter = RecordingLimiter()
    fetcher = PageFetcher(FetchSettings(max_retries=max_retries), session=session, rate_limiter=limiter)
    return fetcher, session, limiter


def test_fetch_returns_parsed_document_and_sets_user_agent():
    fetcher, session, limiter = _fetcher([FakeResponse(text="<html><body><p id='x'>hi</p></body></html>")])
    soup = fetcher.fetch("https://example.test/page.html")

    assert soup.find(id="x").get_text() == "hi"
    assert session.headers["User-Agent"]
    assert session.calls == [("https://example.test/page.html", 30)]
    assert limiter.acquired == 1


@pytest.mark.parametrize("url", [None, ""])
def test_fetch_without_url_raises(url):
    fetcher, session, _ = _fetcher([])
    with pytest.raises(FetchError):
        fetcher.fetch(url)
    assert session.calls == []


def test_http_error_is_fetch_error():
    fetcher, _, _ = _fetcher([FakeResponse(status_code=404)])
    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://example.test/missing.html")
    assert excinfo.value.status_code == 404


def test_transport_error_is_fetch_error():
    fetcher, _, _ = _fetcher([requests.ConnectionError("boom")])
    with pytest.raises(FetchError):
        fetcher.fetch("https://example.test/page.html")


def test_429_is_retried_after_advertised_delay():
    fetcher, session, limiter = _fetcher(
        [
            FakeResponse(status_code=429, headers={"Retry-After": "7"}),
            FakeResponse(text="<html><body><p id='ok'>ok</p></body></html>"),
        ]
    )
    soup = fetcher.fetch("https://example.test/page.html")

    assert soup.find(id="ok") is not None
    assert len(session.calls) == 2
    assert limiter.deferred == [7.0]
    assert limiter.acquired == 2


def test_429_without_header_uses_default_delay():
    fetcher, _, limiter = _fetcher(
        [FakeResponse(status_code=429), FakeResponse(text="<html></html>")]
    )
    fetcher.fetch("https://example.test/page.html")
    assert limiter.deferred == [fetcher.settings.default_retry_after]


def test_429_retries_are_bounded():
    fetcher, session, limiter = _fetcher(
        [FakeResponse(status_code=429, headers={"Retry-After": "1"})] * 3,
        max_retries=2,
    )
    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://example.test/page.html")

    assert excinfo.value.status_code == 429
    assert len(session.calls) == 3
    assert limiter.deferred == [1.0, 1.0]


def test_retry_after_http_date():
    fetcher, _, _ = _fetcher([])
    when = datetime.now(timezone.utc) + timedelta(seconds=120)
    delay = fetcher._retry_after_seconds(format_datetime(when, usegmt=True))
    assert 100 <= delay <= 121
    assert fetcher._retry_after_seconds("garbage") == fetcher.settings.default_retry_after


def test_parse_restores_commented_tables():
    html = (
        "<html><body><div id='all_stats'>"
        "<!-- <div id='div_stats'><table id='stats'><tr><td>1</td></tr></table></div> -->"
        "</div></body></html>"
    )
    soup = PageFetcher.parse(html)
    assert soup.find(id="div_stats") is not None
    assert soup.find("table", id="stats").find("td").get_text() == "1"


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_rate_limiter_spaces_requests():
    clock = FakeClock()
    limiter = FixedIntervalRateLimiter(3.0, clock=clock, sleep=clock.sleep)

    assert limiter.acquire() == 0.0
    clock.now += 1.0
    assert limiter.acquire() == pytest.approx(2.0)
    clock.now += 5.0
    assert limiter.acquire() == 0.0
    assert clock.sleeps == [pytest.approx(2.0)]


def test_rate_limiter_defer_pushes_schedule_back():
    clock = FakeClock()
    limiter = FixedIntervalRateLimiter(3.0, clock=clock, sleep=clock.sleep)

    limiter.acquire()
    limiter.defer(10.0)
    assert limiter.acquire() == pytest.approx(10.0)


def test_rate_limiter_rejects_negative_interval():
    with pytest.raises(ValueError):
        FixedIntervalRateLimiter(-1.0)
