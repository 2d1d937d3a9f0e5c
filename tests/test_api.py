"""
Tests for the scoring/configuration service client.
"""

import json

import httpx
import pytest

from hotseat.api import ScoreService, parse_countries
from hotseat.exceptions import NetworkError
from hotseat.settings import ServiceSettings

BASE_URL = "http://scores.test"


def make_service(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return ScoreService(settings=ServiceSettings(base_url=BASE_URL), client=client)


@pytest.mark.asyncio
async def test_fetch_board():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/board"
        return httpx.Response(200, json={"bottom": [{"id": 0, "type": "special"}], "left": []})

    async with make_service(handler) as service:
        board = await service.fetch_board()

    assert board["bottom"] == [{"id": 0, "type": "special"}]
    assert board["top"] == []
    assert board["right"] == []


@pytest.mark.asyncio
async def test_malformed_board_is_network_error():
    def handler(request):
        return httpx.Response(200, json={"bottom": "nope"})

    async with make_service(handler) as service:
        with pytest.raises(NetworkError):
            await service.fetch_board()


@pytest.mark.asyncio
async def test_fetch_countries_single_key_format():
    def handler(request):
        return httpx.Response(200, json=[{"ES": "Spain"}, {"MX": "Mexico"}])

    async with make_service(handler) as service:
        countries = await service.fetch_countries()

    assert [(c.code, c.name) for c in countries] == [("ES", "Spain"), ("MX", "Mexico")]


def test_parse_countries_explicit_format():
    countries = parse_countries([{"code": "US", "name": "United States"}, {}, "junk", {"code": "AR"}])

    assert [(c.code, c.name) for c in countries] == [("US", "United States"), ("AR", "AR")]


@pytest.mark.asyncio
async def test_fetch_ranking():
    rows = [
        {"nick_name": "Alice", "score": 2100, "country_code": "ES"},
        {"nick_name": "Bob", "score": 900},
    ]

    def handler(request):
        assert request.url.path == "/ranking"
        return httpx.Response(200, json=rows)

    async with make_service(handler) as service:
        ranking = await service.fetch_ranking()

    assert [(r.nick_name, r.score, r.country_code) for r in ranking] == [
        ("Alice", 2100, "ES"),
        ("Bob", 900, None),
    ]


@pytest.mark.asyncio
async def test_submit_score_posts_json():
    received = []

    def handler(request):
        received.append(request)
        return httpx.Response(201, json={"ok": True})

    async with make_service(handler) as service:
        ack = await service.submit_score(nick_name="Alice", score=1800, country_code="ES")

    assert ack == {"ok": True}
    request = received[0]
    assert request.method == "POST"
    assert request.url.path == "/score-recorder"
    assert json.loads(request.content) == {"nick_name": "Alice", "score": 1800, "country_code": "ES"}


@pytest.mark.asyncio
async def test_server_error_is_network_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    async with make_service(handler) as service:
        with pytest.raises(NetworkError):
            await service.submit_score(nick_name="Alice", score=1, country_code=None)


@pytest.mark.asyncio
async def test_connection_error_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_service(handler) as service:
        with pytest.raises(NetworkError):
            await service.fetch_board()


@pytest.mark.asyncio
async def test_invalid_json_is_network_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>")

    async with make_service(handler) as service:
        with pytest.raises(NetworkError):
            await service.fetch_ranking()


@pytest.mark.asyncio
async def test_borrowed_client_left_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))

    async with ScoreService(settings=ServiceSettings(base_url=BASE_URL), client=client):
        pass

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_owned_client_closed():
    service = ScoreService(settings=ServiceSettings(base_url=BASE_URL, timeout_seconds=1.5))

    await service.aclose()

    assert service._client.is_closed
    assert service._client.timeout.read == 1.5
