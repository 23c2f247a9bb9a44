from datetime import datetime, timedelta, timezone

import pytest

from euro_news_hub.aggregate import set_cache


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, reason="OK"):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_news_cache():
    set_cache(None)
    yield
    set_cache(None)
