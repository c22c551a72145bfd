"""In-memory doubles shared by the presenter and API tests."""

from __future__ import annotations

import asyncio

from pokedex.schemas.catalog import CatalogItem, DetailPayload


class FakeGateway:
    """Stand-in for :class:`pokedex.services.catalog_gateway.CatalogGateway`."""

    def __init__(
        self,
        catalog: list[CatalogItem] | None = None,
        details: dict[str, DetailPayload] | None = None,
        *,
        catalog_error: Exception | None = None,
        detail_error: Exception | None = None,
    ) -> None:
        self.catalog = list(catalog or [])
        self.details = dict(details or {})
        self.catalog_error = catalog_error
        self.detail_error = detail_error
        self.catalog_calls = 0
        self.detail_calls: list[str] = []
        # When set, detail fetches block until the event is released.
        self.detail_gate: asyncio.Event | None = None

    async def fetch_catalog(self) -> list[CatalogItem]:
        self.catalog_calls += 1
        if self.catalog_error is not None:
            raise self.catalog_error
        return list(self.catalog)

    async def fetch_detail(self, source_ref: str) -> DetailPayload:
        self.detail_calls.append(source_ref)
        if self.detail_gate is not None:
            await self.detail_gate.wait()
        if self.detail_error is not None:
            raise self.detail_error
        return self.details[source_ref]


class RecordingShareSheet:
    """Share sheet double that can be held open to test re-entrancy."""

    def __init__(self, *, completed: bool = True) -> None:
        self.completed = completed
        self.presented: list[str] = []
        self.release: asyncio.Event | None = None

    async def present(self, text: str) -> bool:
        self.presented.append(text)
        if self.release is not None:
            await self.release.wait()
        return self.completed


def make_item(identity: str, name: str, *, is_favorite: bool = False) -> CatalogItem:
    return CatalogItem(
        identity=identity,
        name=name,
        source_ref=f"https://pokeapi.co/api/v2/pokemon/{identity}/",
        is_favorite=is_favorite,
    )
