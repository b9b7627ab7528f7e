"""
tests/test_riot_client.py

Purpose:
    RiotAPIClient over httpx.MockTransport: routing hosts, auth header,
    429 cooldowns (per endpoint or application-wide), retry with backoff,
    and HTTP failures mapped to None.
"""

import httpx
import pytest

from domain.enums import QueueType, Region
from infrastructure.api import EndpointRateLimiter, RiotAPIClient, RiotDataGateway


class _Recorder:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        answer = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


def _client(recorder, sleeps, **kwargs):
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    limiter = EndpointRateLimiter(sleep=fake_sleep)
    limiter.set_application_limiter(requests_per_1_sec=100, requests_per_2_min=1000)
    return RiotAPIClient(
        "RGAPI-test",
        rate_limiter=limiter,
        transport=httpx.MockTransport(recorder),
        sleep=fake_sleep,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_account_lookup_uses_regional_host_and_token():
    recorder = _Recorder([httpx.Response(200, json={"puuid": "p1", "gameName": "Caps", "tagLine": "EUW"})])
    async with _client(recorder, []) as api:
        data = await api.get_account_by_riot_id(Region.EUW1, "Caps", "EUW")

    assert data["puuid"] == "p1"
    request = recorder.requests[0]
    assert request.url.host == "europe.api.riotgames.com"
    assert request.url.path == "/riot/account/v1/accounts/by-riot-id/Caps/EUW"
    assert request.headers["X-Riot-Token"] == "RGAPI-test"


@pytest.mark.asyncio
async def test_summoner_lookup_uses_platform_host():
    recorder = _Recorder([httpx.Response(200, json={"puuid": "p1"})])
    async with _client(recorder, []) as api:
        await api.get_summoner_by_puuid(Region.OC1, "p1")
    assert recorder.requests[0].url.host == "oc1.api.riotgames.com"


@pytest.mark.asyncio
async def test_not_found_and_forbidden_return_none():
    recorder = _Recorder([httpx.Response(404), httpx.Response(403)])
    async with _client(recorder, []) as api:
        assert await api.get_match_by_id(Region.EUW1, "EUW1_1") is None
        assert await api.get_summoner_by_puuid(Region.EUW1, "p1") is None
    assert len(recorder.requests) == 2


@pytest.mark.asyncio
async def test_429_waits_retry_after_then_succeeds():
    recorder = _Recorder([
        httpx.Response(429, headers={"Retry-After": "3"}),
        httpx.Response(200, json=["EUW1_1"]),
    ])
    sleeps = []
    async with _client(recorder, sleeps) as api:
        ids = await api.get_match_ids_by_puuid(Region.EUW1, "p1", count=5)

    assert ids == ["EUW1_1"]
    assert len(recorder.requests) == 2
    assert sleeps and 2.5 < sleeps[0] <= 3.0


@pytest.mark.asyncio
@pytest.mark.parametrize("limit_type,summoner_waits", [("application", True), ("method", False)])
async def test_application_429_pauses_every_endpoint(limit_type, summoner_waits):
    recorder = _Recorder([
        httpx.Response(429, headers={"Retry-After": "30", "X-Rate-Limit-Type": limit_type}),
        httpx.Response(200, json=["EUW1_1"]),
        httpx.Response(200, json={"puuid": "p1"}),
    ])
    sleeps = []
    async with _client(recorder, sleeps) as api:
        await api.get_match_ids_by_puuid(Region.EUW1, "p1", count=5)
        sleeps.clear()
        await api.get_summoner_by_puuid(Region.EUW1, "p1")

    assert len(recorder.requests) == 3
    assert any(s > 25 for s in sleeps) is summoner_waits


@pytest.mark.asyncio
async def test_server_errors_retry_with_backoff_then_give_up():
    recorder = _Recorder([httpx.Response(503)])
    sleeps = []
    async with _client(recorder, sleeps, max_retries=2, retry_backoff=2.0) as api:
        assert await api.get_match_by_id(Region.EUW1, "EUW1_1") is None

    assert len(recorder.requests) == 3
    assert sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_timeouts_are_retried_then_none():
    recorder = _Recorder([httpx.ReadTimeout("slow")])
    sleeps = []
    async with _client(recorder, sleeps, max_retries=1, retry_backoff=2.0) as api:
        assert await api.get_league_entries_by_puuid(Region.EUW1, "p1") is None
    assert len(recorder.requests) == 2
    assert sleeps == [1.0]


@pytest.mark.asyncio
async def test_match_ids_params_are_clamped():
    recorder = _Recorder([httpx.Response(200, json=[])])
    async with _client(recorder, []) as api:
        assert await api.get_match_ids_by_puuid(Region.KR, "p1", count=500, queue=QueueType.SOLO) == []

    request = recorder.requests[0]
    assert request.url.host == "asia.api.riotgames.com"
    assert request.url.params["count"] == "100"
    assert request.url.params["queue"] == "420"


@pytest.mark.asyncio
async def test_request_outside_context_manager_raises():
    api = _client(_Recorder([httpx.Response(200, json={})]), [])
    with pytest.raises(RuntimeError):
        await api.get_match_by_id(Region.EUW1, "EUW1_1")


@pytest.mark.asyncio
async def test_gateway_maps_bad_payloads_to_no_data():
    recorder = _Recorder([
        httpx.Response(200, json=[{"queueType": "CHERRY", "tier": "GOLD"}]),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(500),
    ])
    async with _client(recorder, [], max_retries=0) as api:
        gateway = RiotDataGateway(api)
        assert await gateway.get_ranked_entries("p1", Region.EUW1) == []
        assert await gateway.get_match_detail("EUW1_1", Region.EUW1) is None
        assert await gateway.list_recent_match_ids("p1", Region.EUW1, 10) == []
