from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed clock shared by time-dependent tests."""
    return NOW


@pytest.fixture
def days():
    """Shorthand: days(3) -> NOW + 3 days, days(-2) -> NOW - 2 days."""
    return lambda n: NOW + timedelta(days=n)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config lookups from the real user directory and environment
    monkeypatch.setenv("HOME", str(home))
    for var in ("LEXITRACK_DAILY_PLAN_SIZE", "LEXITRACK_QUEUE_LIMIT", "LEXITRACK_STRICT"):
        monkeypatch.delenv(var, raising=False)
    return home
