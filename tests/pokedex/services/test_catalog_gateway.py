"""Tests for the PokeAPI gateway using ``httpx.MockTransport``."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from pokedex.services.catalog_gateway import CatalogGateway
from pokedex.services.errors import CatalogGatewayError, CatalogTimeoutError

BASE_URL = "https://pokeapi.test/api/v2"


def _gateway(handler: Callable[[httpx.Request], httpx.Response]) -> CatalogGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CatalogGateway(client, base_url=BASE_URL + "/", catalog_limit=3)


@pytest.mark.asyncio
async def test_fetch_catalog_maps_results_in_order() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "count": 3,
                "results": [
                    {"name": "bulbasaur", "url": f"{BASE_URL}/pokemon/1/"},
                    {"name": "ivysaur", "url": f"{BASE_URL}/pokemon/2/"},
                    {"name": "venusaur", "url": f"{BASE_URL}/pokemon/3/"},
                ],
            },
        )

    items = await _gateway(handler).fetch_catalog()

    assert [item.identity for item in items] == ["1", "2", "3"]
    assert [item.name for item in items] == ["bulbasaur", "ivysaur", "venusaur"]
    assert all(item.is_favorite is False for item in items)
    assert len(seen) == 1
    assert seen[0].url.path == "/api/v2/pokemon"
    assert seen[0].url.params["limit"] == "3"


@pytest.mark.asyncio
async def test_fetch_catalog_drops_duplicate_identities() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "results": [
                    {"name": "pikachu", "url": f"{BASE_URL}/pokemon/25/"},
                    {"name": "pikachu-copy", "url": f"{BASE_URL}/pokemon/25/"},
                ]
            },
        )

    items = await _gateway(handler).fetch_catalog()

    assert [item.name for item in items] == ["pikachu"]


@pytest.mark.asyncio
async def test_fetch_catalog_with_empty_results_is_not_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": []})

    assert await _gateway(handler).fetch_catalog() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, json={"detail": "down"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"count": 0}),
        httpx.Response(200, json={"results": [{"name": "no-url"}]}),
    ],
)
async def test_fetch_catalog_failures_raise_gateway_error(response: httpx.Response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with pytest.raises(CatalogGatewayError):
        await _gateway(handler).fetch_catalog()


@pytest.mark.asyncio
async def test_fetch_catalog_is_single_shot() -> None:
    """A transport failure surfaces immediately without a retry."""

    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogGatewayError):
        await _gateway(handler).fetch_catalog()
    assert calls == 1


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(CatalogTimeoutError):
        await _gateway(handler).fetch_detail(f"{BASE_URL}/pokemon/25/")


@pytest.mark.asyncio
async def test_fetch_detail_maps_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v2/pokemon/25/"
        return httpx.Response(
            200,
            json={
                "weight": 60,
                "height": 4,
                "types": [{"slot": 1, "type": {"name": "electric"}}],
                "sprites": {
                    "other": {"official-artwork": {"front_default": "https://img/25.png"}}
                },
            },
        )

    payload = await _gateway(handler).fetch_detail(f"{BASE_URL}/pokemon/25/")

    assert payload.weight == 60.0
    assert payload.height == 4.0
    assert [category.name for category in payload.categories] == ["electric"]
    assert payload.image_ref == "https://img/25.png"


@pytest.mark.asyncio
async def test_fetch_detail_rejects_malformed_types() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"weight": "heavy"})

    with pytest.raises(CatalogGatewayError):
        await _gateway(handler).fetch_detail(f"{BASE_URL}/pokemon/25/")


@pytest.mark.asyncio
async def test_fetch_detail_rejects_invalid_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request should be sent")

    with pytest.raises(CatalogGatewayError) as excinfo:
        await _gateway(handler).fetch_detail("http://example.com:abc/")

    assert excinfo.value.url == "http://example.com:abc/"
