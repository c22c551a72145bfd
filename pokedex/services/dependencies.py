"""FastAPI dependency wiring for the presentation services.

One :class:`PokedexContainer` is built in the application lifespan and parked
on ``app.state``. Every router resolves its collaborators from it, so the list
and detail presenters share a single gateway and a single favorite store.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pokedex.services.catalog_gateway import CatalogGateway
from pokedex.services.detail_presenter import DetailPresenter
from pokedex.services.favorites import FavoritesPersistence, FavoriteStore
from pokedex.services.list_presenter import ListPresenter
from pokedex.services.share import PayloadShareSheet, ShareSheet
from pokedex.settings import AppSettings


@dataclass
class PokedexContainer:
    gateway: CatalogGateway
    favorites: FavoriteStore
    list_presenter: ListPresenter
    detail_presenter: DetailPresenter


def build_container(
    app_settings: AppSettings,
    *,
    client: httpx.AsyncClient,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    share_sheet: ShareSheet | None = None,
) -> PokedexContainer:
    """Assemble the gateway, favorite store, and both presenters."""

    gateway = CatalogGateway(
        client,
        base_url=app_settings.normalized_base_url,
        catalog_limit=app_settings.catalog_limit,
    )
    persistence = (
        FavoritesPersistence(session_factory) if session_factory is not None else None
    )
    favorites = FavoriteStore(persistence)
    timeout = app_settings.http_timeout_seconds or None
    return PokedexContainer(
        gateway=gateway,
        favorites=favorites,
        list_presenter=ListPresenter(gateway, favorites),
        detail_presenter=DetailPresenter(
            gateway,
            favorites,
            share_sheet or PayloadShareSheet(),
            fetch_delay_seconds=app_settings.detail_fetch_delay_seconds,
            fetch_timeout_seconds=timeout,
        ),
    )


def get_container(request: Request) -> PokedexContainer:
    return request.app.state.container


def get_list_presenter(
    container: PokedexContainer = Depends(get_container),
) -> ListPresenter:
    return container.list_presenter


def get_detail_presenter(
    container: PokedexContainer = Depends(get_container),
) -> DetailPresenter:
    return container.detail_presenter


def get_favorite_store(
    container: PokedexContainer = Depends(get_container),
) -> FavoriteStore:
    return container.favorites


__all__ = [
    "PokedexContainer",
    "build_container",
    "get_container",
    "get_detail_presenter",
    "get_favorite_store",
    "get_list_presenter",
]
