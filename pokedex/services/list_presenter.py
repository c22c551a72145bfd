"""Presentation logic for the searchable, filterable catalog list."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pokedex.schemas.catalog import CatalogItem
from pokedex.schemas.views import ListViewState, LoadStatus
from pokedex.services.catalog_gateway import CatalogGateway
from pokedex.services.errors import CatalogGatewayError
from pokedex.services.favorites import FavoriteStore

logger = logging.getLogger(__name__)


def filter_catalog(
    items: Iterable[CatalogItem],
    search_text: str,
    favorites_only: bool,
) -> list[CatalogItem]:
    """Return the items to render, preserving catalog order.

    The favorites filter is applied first, then a case-insensitive substring
    match on the name. An empty ``search_text`` disables the text filter.
    """

    filtered = list(items)

    if favorites_only:
        filtered = [item for item in filtered if item.is_favorite]

    if search_text:
        needle = search_text.lower()
        filtered = [item for item in filtered if needle in item.name.lower()]

    return filtered


@dataclass
class FilterState:
    """Transient UI state of the list screen."""

    search_text: str = ""
    show_favorites_only: bool = False
    selected_item: CatalogItem | None = None

    def reset(self) -> None:
        self.search_text = ""
        self.show_favorites_only = False
        self.selected_item = None


class ListPresenter:
    """Owns the catalog sequence, the filter state, and the current selection."""

    def __init__(self, gateway: CatalogGateway, favorites: FavoriteStore) -> None:
        self._gateway = gateway
        self._favorites = favorites
        self._items: list[CatalogItem] = []
        self._status = LoadStatus.IDLE
        self._error: str | None = None
        self._load_lock = asyncio.Lock()
        self.filters = FilterState()
        favorites.subscribe(self.apply_favorite)

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def items(self) -> list[CatalogItem]:
        return list(self._items)

    @property
    def visible_items(self) -> list[CatalogItem]:
        return filter_catalog(
            self._items,
            self.filters.search_text,
            self.filters.show_favorites_only,
        )

    async def appear(self) -> None:
        """Load the catalog the first time the list becomes visible."""

        async with self._load_lock:
            if self._status is LoadStatus.LOADED:
                return
            await self._load()

    async def refresh(self) -> None:
        """Refetch the catalog and replace it wholesale."""

        async with self._load_lock:
            await self._load()

    async def _load(self) -> None:
        self._status = LoadStatus.LOADING
        try:
            fetched = await self._gateway.fetch_catalog()
        except CatalogGatewayError as exc:
            logger.warning("Catalog fetch failed: %s", exc)
            self._status = LoadStatus.ERROR
            self._error = str(exc)
            return

        try:
            self._items = await self._favorites.load(fetched)
        except Exception as exc:
            logger.warning("Failed to merge favorite flags into the catalog: %s", exc)
            self._status = LoadStatus.ERROR
            self._error = "Could not load favorites"
            raise
        self._status = LoadStatus.LOADED
        self._error = None

        selected = self.filters.selected_item
        if selected is not None:
            self.filters.selected_item = self.get(selected.identity)

    def set_search_text(self, text: str) -> None:
        self.filters.search_text = text

    def show_all(self) -> None:
        self.filters.show_favorites_only = False

    def show_favorites(self) -> None:
        self.filters.show_favorites_only = True

    def get(self, identity: str) -> CatalogItem | None:
        return next((item for item in self._items if item.identity == identity), None)

    def select(self, identity: str) -> CatalogItem | None:
        """Mark ``identity`` as the item whose detail view is presented."""

        item = self.get(identity)
        if item is not None:
            self.filters.selected_item = item
        return item

    def close_selection(self) -> None:
        self.filters.selected_item = None

    def apply_favorite(self, identity: str, value: bool) -> None:
        """Replace the matching catalog item with one carrying ``value``."""

        for index, item in enumerate(self._items):
            if item.identity == identity:
                updated = item.model_copy(update={"is_favorite": value})
                self._items[index] = updated
                selected = self.filters.selected_item
                if selected is not None and selected.identity == identity:
                    self.filters.selected_item = updated
                return

    def snapshot(self) -> ListViewState:
        selected = self.filters.selected_item
        return ListViewState(
            status=self._status,
            search_text=self.filters.search_text,
            show_favorites_only=self.filters.show_favorites_only,
            selected_identity=selected.identity if selected is not None else None,
            items=self.visible_items,
            total=len(self._items),
            error=self._error,
        )

    def teardown(self) -> None:
        """Discard session state when the list view goes away."""

        self.filters.reset()
        self._items = []
        self._status = LoadStatus.IDLE
        self._error = None
