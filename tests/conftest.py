"""Shared fixtures for the Pokedex test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pokedex.db.models import Base
from pokedex.schemas.catalog import Category, CatalogItem, DetailPayload
from tests import _ensure_repo_on_path
from tests.pokedex.support.fakes import FakeGateway, make_item


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Provide an in-memory SQLite session factory with fresh tables."""

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def catalog() -> list[CatalogItem]:
    """Small catalog mixing favorites and non-favorites in API order."""

    return [
        make_item("25", "pikachu"),
        make_item("1", "bulbasaur", is_favorite=True),
        make_item("26", "raichu"),
        make_item("4", "charmander", is_favorite=True),
    ]


@pytest.fixture
def pikachu_detail() -> DetailPayload:
    return DetailPayload(
        weight=60.0,
        height=4.0,
        categories=[Category(name="electric")],
        image_ref="https://img.example/25.png",
    )


@pytest.fixture
def fake_gateway(
    catalog: list[CatalogItem], pikachu_detail: DetailPayload
) -> FakeGateway:
    return FakeGateway(
        catalog,
        {
            item.source_ref: pikachu_detail
            if item.identity == "25"
            else DetailPayload(weight=69.0, height=7.0)
            for item in catalog
        },
    )
