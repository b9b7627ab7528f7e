"""
tests/test_rate_limiter.py

Purpose:
    Sliding-window limiter behavior on a fake monotonic clock: both windows
    are honored, and endpoint limiters only ever add to the application limit.
"""

import pytest

from infrastructure.api.rate_limiter import EndpointRateLimiter, RateLimiter


class _FakeTime:
    """Monotonic clock whose sleep just moves time forward."""

    def __init__(self):
        self.now = 1000.0
        self.sleeps = []

    def clock(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.mark.asyncio
async def test_per_second_window_blocks_until_oldest_expires():
    t = _FakeTime()
    limiter = RateLimiter(2, 100, clock=t.clock, sleep=t.sleep)

    await limiter.acquire()
    await limiter.acquire()
    assert t.sleeps == []

    await limiter.acquire()
    assert t.sleeps == [pytest.approx(1.0)]
    assert t.now == pytest.approx(1001.0)


@pytest.mark.asyncio
async def test_two_minute_window_blocks_for_the_long_window():
    t = _FakeTime()
    limiter = RateLimiter(100, 3, clock=t.clock, sleep=t.sleep)

    for _ in range(3):
        await limiter.acquire()
    await limiter.acquire()

    assert sum(t.sleeps) == pytest.approx(120.0)


@pytest.mark.asyncio
async def test_sustained_rate_never_exceeds_either_window():
    t = _FakeTime()
    limiter = RateLimiter(5, 20, clock=t.clock, sleep=t.sleep)
    stamps = []
    for _ in range(60):
        await limiter.acquire()
        stamps.append(t.now)

    for i, start in enumerate(stamps):
        in_1s = [s for s in stamps[i:] if s - start < 1.0]
        in_2min = [s for s in stamps[i:] if s - start < 120.0]
        assert len(in_1s) <= 5
        assert len(in_2min) <= 20


@pytest.mark.asyncio
async def test_status_and_reset():
    t = _FakeTime()
    limiter = RateLimiter(3, 10, clock=t.clock, sleep=t.sleep)
    await limiter.acquire()
    await limiter.acquire()
    assert limiter.get_status() == (2, 3, 2, 10)

    t.now += 1.5
    assert limiter.get_status() == (0, 3, 2, 10)

    await limiter.reset()
    assert limiter.get_status() == (0, 3, 0, 10)


def test_rejects_non_positive_limits():
    with pytest.raises(ValueError):
        RateLimiter(0, 10)


@pytest.mark.asyncio
async def test_endpoint_requests_also_count_against_application_limit():
    t = _FakeTime()
    limiter = EndpointRateLimiter(clock=t.clock, sleep=t.sleep)
    limiter.set_application_limiter(requests_per_1_sec=3, requests_per_2_min=100)
    limiter.add_endpoint_limiter("match", requests_per_1_sec=10, requests_per_2_min=100)

    await limiter.acquire("match")
    await limiter.acquire("match")
    await limiter.acquire("account")
    assert t.sleeps == []
    assert limiter.get_status()[0] == 3
    assert limiter.get_status("match")[0] == 2

    await limiter.acquire("account")
    assert sum(t.sleeps) == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_reset_endpoint_keeps_application_usage():
    t = _FakeTime()
    limiter = EndpointRateLimiter(clock=t.clock, sleep=t.sleep)
    limiter.set_application_limiter(requests_per_1_sec=10, requests_per_2_min=100)
    limiter.add_endpoint_limiter("league", requests_per_1_sec=5, requests_per_2_min=50)

    await limiter.acquire("league")
    await limiter.reset_endpoint("league")

    assert limiter.get_status("league")[2] == 0
    assert limiter.get_status()[2] == 1
    assert limiter.get_status("unknown") is None
