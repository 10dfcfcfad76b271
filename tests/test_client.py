import asyncio

import httpx
import pytest

from tournacal.client import StapuboxClient
from tournacal.errors import MalformedPayload, TransportFailure
from tournacal.models import ALL_SPORTS

SPORTS_URL = "https://api.test/sportslist"
TOURNAMENTS_URL = "https://api.test/tournament/demo"


def _client(handler) -> StapuboxClient:
    return StapuboxClient(
        sports_url=SPORTS_URL,
        tournaments_url=TOURNAMENTS_URL,
        timeout_seconds=1,
        transport=httpx.MockTransport(handler),
    )


def test_fetch_sports_and_tournaments() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/sportslist":
            return httpx.Response(200, json={"status": "success", "data": [{"sport_id": 1, "sport_name": "Cricket"}]})
        return httpx.Response(
            200,
            json={
                "status": "success",
                "data": [
                    {
                        "sport_id": 1,
                        "sport_name": "Cricket",
                        "tournaments": [{"id": 5, "name": "Cup", "start_date": "2025-08-05T10:00:00Z"}],
                    }
                ],
            },
        )

    client = _client(handler)

    sports = asyncio.run(client.fetch_sports())
    tournaments = asyncio.run(client.fetch_tournaments())

    assert sports[0] == ALL_SPORTS
    assert sports[1].name == "Cricket"
    assert [(t.id, t.sport_name) for t in tournaments] == [(5, "Cricket")]


def test_http_error_status_is_transport_failure() -> None:
    client = _client(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(TransportFailure):
        asyncio.run(client.fetch_tournaments())


def test_network_error_is_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportFailure):
        asyncio.run(_client(handler).fetch_sports())


def test_invalid_json_is_malformed() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(MalformedPayload):
        asyncio.run(client.fetch_tournaments())


def test_unsuccessful_status_is_malformed() -> None:
    client = _client(lambda request: httpx.Response(200, json={"status": "fail", "err": "quota", "data": None}))

    with pytest.raises(MalformedPayload):
        asyncio.run(client.fetch_sports())
