"""
Tests for the in-memory rate limiter
"""

import pytest

from guestmanager.utils.security import RateLimiter

class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr("guestmanager.utils.security.time.time", fake)
    return fake

def test_limit_per_window(clock):
    limiter = RateLimiter()

    assert limiter.check("10.0.0.1", limit=2)
    assert limiter.check("10.0.0.1", limit=2)
    assert not limiter.check("10.0.0.1", limit=2)

    clock.now += 61
    assert limiter.check("10.0.0.1", limit=2)

def test_idle_clients_are_forgotten(clock):
    limiter = RateLimiter()
    for i in range(100):
        limiter.check(f"10.0.0.{i}", limit=5)
    assert len(limiter.requests) == 100

    clock.now += 61
    limiter.check("10.0.1.1", limit=5)

    assert list(limiter.requests) == ["10.0.1.1"]

def test_active_clients_are_kept(clock):
    limiter = RateLimiter()
    limiter.check("old", limit=5)
    clock.now += 30
    limiter.check("recent", limit=5)
    clock.now += 31

    limiter.check("new", limit=5)

    assert set(limiter.requests) == {"recent", "new"}
