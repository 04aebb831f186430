from __future__ import annotations

import pytest

from utils.settings import get_settings


class FakeClock:
    """Manually advanced seconds source that counts how often it is read."""

    def __init__(self, now: float = 100.0):
        self.now = now
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Steps:
    """Awaitable that suspends `n` times with a bare yield, then returns `value`."""

    def __init__(self, n: int, value=None):
        self.n = n
        self.value = value

    def __await__(self):
        for _ in range(self.n):
            yield
        return self.value


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from default settings, unaffected by the caller's env."""
    for name in ("INSTRUMENT_DEBUG", "INSTRUMENT_LOG_LEVEL", "INSTRUMENT_RICH_TRACEBACKS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
