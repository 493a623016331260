import pytest

from jobportal.core.config import settings
from jobportal.core.limiter import limiter


@pytest.fixture
def rate_limited(monkeypatch):
    """Turn the edge limiter on for one test with a clean counter."""
    limiter.reset()
    monkeypatch.setattr(limiter, "enabled", True)
    yield limiter
    limiter.reset()


def test_default_limit_is_100_per_15_minutes():
    assert settings.rate_limit == "100/15minutes"


def test_requests_over_the_limit_get_429(client, rate_limited):
    responses = [client.get("/health") for _ in range(102)]

    assert all(r.status_code == 200 for r in responses[:100])
    blocked = responses[-1]
    assert blocked.status_code == 429
    assert blocked.json() == {"success": False, "message": "Too many requests, please try again later."}
