"""In-memory favorite flags backed by optional local persistence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from pokedex.schemas.catalog import CatalogItem
from pokedex.services.favorites.persistence import FavoritesPersistence

logger = logging.getLogger(__name__)

FavoriteListener = Callable[[str, bool], None]


class FavoriteStore:
    """Single source of truth for the favorite flag of each catalog identity.

    Both presenters share one instance: the detail view toggles through it and
    the list view subscribes to it, so a toggle is visible to the favorites
    filter on the next render. Only identities registered by :meth:`load` can
    be toggled; anything else is a silent no-op.
    """

    def __init__(self, persistence: FavoritesPersistence | None = None) -> None:
        self._persistence = persistence
        self._flags: dict[str, bool] = {}
        self._names: dict[str, str] = {}
        self._listeners: list[FavoriteListener] = []
        self._toggle_lock = asyncio.Lock()

    async def load(self, items: Sequence[CatalogItem]) -> list[CatalogItem]:
        """Register ``items`` as the current catalog and merge stored flags."""

        self._names = {item.identity: item.name for item in items}

        persisted: dict[str, bool] = {}
        if await self._persistence_ready():
            persisted = await self._persistence.read_flags(self._names)

        merged: list[CatalogItem] = []
        for item in items:
            flag = persisted.get(
                item.identity, self._flags.get(item.identity, item.is_favorite)
            )
            self._flags[item.identity] = flag
            if item.is_favorite != flag:
                item = item.model_copy(update={"is_favorite": flag})
            merged.append(item)
        return merged

    def knows(self, identity: str) -> bool:
        return identity in self._names

    def is_favorite(self, identity: str) -> bool:
        return self._flags.get(identity, False)

    async def toggle(self, identity: str) -> bool | None:
        """Flip and persist the flag; return the new value or ``None`` if unknown."""

        if identity not in self._names:
            logger.debug("Ignoring favorite toggle for unknown identity %s", identity)
            return None

        async with self._toggle_lock:
            value = not self._flags.get(identity, False)
            if await self._persistence_ready():
                await self._persistence.write_flag(
                    identity, self._names[identity], value
                )
            self._flags[identity] = value

        logger.info(
            "Marked %s (%s) as %s",
            self._names[identity],
            identity,
            "favorite" if value else "not favorite",
        )
        for listener in list(self._listeners):
            listener(identity, value)
        return value

    def subscribe(self, listener: FavoriteListener) -> Callable[[], None]:
        """Register ``listener`` for toggles; the returned callable unsubscribes."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _persistence_ready(self) -> bool:
        if self._persistence is None:
            return False
        if await self._persistence.tables_ready():
            return True
        logger.warning("favorite_flags table is missing; favorites stay in memory")
        return False
