"""Tests for the async REST client using httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from client.api_client import (
    GENERATE_TIMEOUT,
    SHOPPING_LIST_TIMEOUT,
    ApiError,
    InFlightRegistry,
    NutritionApiClient,
    request_signature,
)


class SlowServer:
    """Mock transport handler that counts requests and answers after a short delay."""

    def __init__(self, status_code=200, body=None, delay=0.05):
        self.status_code = status_code
        self.body = body if body is not None else {"success": True, "data": {"ok": True}}
        self.delay = delay
        self.requests = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(self.delay)
        return httpx.Response(self.status_code, json=self.body)


def make_client(handler, token="secret"):
    return NutritionApiClient("http://test", token=token, transport=httpx.MockTransport(handler))


def test_signature_ignores_query_order_and_hashes_body():
    a = request_signature("get", "/meals", {"b": 2, "a": 1})
    b = request_signature("GET", "/meals", {"a": 1, "b": 2})
    assert a == b
    assert request_signature("POST", "/x", body={"k": 1}) != request_signature("POST", "/x", body={"k": 2})


def test_concurrent_identical_gets_share_one_request():
    server = SlowServer()

    async def scenario():
        async with make_client(server) as client:
            results = await asyncio.gather(*(client.list_menus() for _ in range(5)))
            assert len(client.in_flight) == 0
            await client.list_menus()
            return results

    results = asyncio.run(scenario())
    assert results == [{"ok": True}] * 5
    assert len(server.requests) == 2


def test_different_queries_are_not_shared():
    server = SlowServer()

    async def scenario():
        async with make_client(server) as client:
            await asyncio.gather(client.chat_history(limit=10), client.chat_history(limit=20))

    asyncio.run(scenario())
    assert len(server.requests) == 2


def test_posts_are_never_coalesced():
    server = SlowServer()

    async def scenario():
        async with make_client(server) as client:
            await asyncio.gather(client.start_today(1), client.start_today(1))

    asyncio.run(scenario())
    assert len(server.requests) == 2


def test_failure_is_shared_and_entry_removed():
    server = SlowServer(status_code=503, body={"success": False, "error": "Upstream down", "details": "retryable=True"})

    async def scenario():
        async with make_client(server) as client:
            outcomes = await asyncio.gather(client.get_menu(3), client.get_menu(3), return_exceptions=True)
            assert len(client.in_flight) == 0
            return outcomes

    outcomes = asyncio.run(scenario())
    assert len(server.requests) == 1
    for outcome in outcomes:
        assert isinstance(outcome, ApiError)
        assert outcome.status_code == 503
        assert outcome.message == "Upstream down"
        assert outcome.retryable


def test_success_false_envelope_raises_even_on_200():
    server = SlowServer(body={"success": False, "error": "Menu not found"}, delay=0)

    async def scenario():
        async with make_client(server) as client:
            await client.get_menu(1)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(scenario())
    assert exc_info.value.message == "Menu not found"
    assert not exc_info.value.retryable


def test_requests_carry_token_body_and_timeouts():
    server = SlowServer(delay=0)

    async def scenario():
        async with make_client(server) as client:
            await client.generate_menu(days=3, mealsPerDay="3_main")
            await client.shopping_list(4)
            await client.favorite_meal(4, 9)

    asyncio.run(scenario())
    generate, shopping, favorite = server.requests
    assert generate.headers["Authorization"] == "Bearer secret"
    assert json.loads(generate.content) == {"days": 3, "mealsPerDay": "3_main"}
    assert generate.extensions["timeout"]["read"] == GENERATE_TIMEOUT
    assert shopping.url.path == "/recommended-menus/4/shopping-list"
    assert shopping.extensions["timeout"]["read"] == SHOPPING_LIST_TIMEOUT
    assert json.loads(favorite.content) == {"mealId": 9}


def test_timeouts_and_network_errors_become_api_errors():
    def handler(request):
        raise httpx.ConnectTimeout("too slow", request=request)

    async def scenario():
        async with make_client(handler) as client:
            await client.health()

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(scenario())
    assert exc_info.value.message == "Request timed out"
    assert exc_info.value.status_code is None


def test_registry_runs_factory_once_per_key():
    calls = []

    async def fetch():
        calls.append(1)
        await asyncio.sleep(0.01)
        return len(calls)

    async def scenario():
        registry = InFlightRegistry()
        first = await asyncio.gather(registry.run("k", fetch), registry.run("k", fetch))
        second = await registry.run("k", fetch)
        return first, second

    first, second = asyncio.run(scenario())
    assert first == [1, 1]
    assert second == 2
