"""Presentation logic for the detail view of a single catalog entry.

The detail fetch is modelled as an explicit state machine
(``idle -> loading -> loaded | error``) that is independent of the list's
selection. Each open starts a cancellable task stamped with a generation
number; a completion whose generation is stale belongs to a view that was
closed or replaced, and is dropped instead of mutating current state.
"""

from __future__ import annotations

import asyncio
import logging

from pokedex.schemas.catalog import CatalogItem, DetailPayload
from pokedex.schemas.views import DetailViewState, LoadStatus, ShareResponse
from pokedex.services.catalog_gateway import CatalogGateway
from pokedex.services.errors import (
    CatalogGatewayError,
    DetailNotReadyError,
    ShareInProgressError,
)
from pokedex.services.favorites import FavoriteStore
from pokedex.services.formatting import (
    build_share_text,
    display_name,
    format_height,
    format_weight,
    join_categories,
)
from pokedex.services.share import ShareSheet

logger = logging.getLogger(__name__)


class DetailPresenter:
    """Drives the detail view: fetch, derived fields, favorite, and share."""

    def __init__(
        self,
        gateway: CatalogGateway,
        favorites: FavoriteStore,
        share_sheet: ShareSheet,
        *,
        fetch_delay_seconds: float = 0.0,
        fetch_timeout_seconds: float | None = None,
    ) -> None:
        self._gateway = gateway
        self._favorites = favorites
        self._share_sheet = share_sheet
        self._fetch_delay_seconds = fetch_delay_seconds
        self._fetch_timeout_seconds = fetch_timeout_seconds

        self._item: CatalogItem | None = None
        self._status = LoadStatus.IDLE
        self._payload: DetailPayload | None = None
        self._error: str | None = None
        self._task: asyncio.Task[None] | None = None
        self._generation = 0
        self._sharing = False

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def item(self) -> CatalogItem | None:
        return self._item

    @property
    def is_open(self) -> bool:
        return self._item is not None

    def open(self, item: CatalogItem) -> DetailViewState:
        """Present ``item`` and schedule its detail fetch.

        Must be called from a running event loop. Any fetch still in flight
        for a previously opened item is cancelled.
        """

        self._cancel_task()
        self._generation += 1
        self._item = item
        self._status = LoadStatus.LOADING
        self._payload = None
        self._error = None
        self._task = asyncio.create_task(
            self._load(item, self._generation),
            name=f"detail-fetch-{item.identity}",
        )
        return self.snapshot()

    def close(self) -> None:
        """Dismiss the view, cancelling any pending fetch."""

        self._cancel_task()
        self._generation += 1
        self._item = None
        self._status = LoadStatus.IDLE
        self._payload = None
        self._error = None

    async def wait_until_settled(self) -> DetailViewState:
        """Wait for the in-flight fetch (if any) and return the resulting state."""

        task = self._task
        if task is not None and not task.done():
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return self.snapshot()

    async def aclose(self) -> None:
        """Close the view and wait for the cancelled fetch to unwind."""

        task = self._task
        self.close()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _load(self, item: CatalogItem, generation: int) -> None:
        # Let the view become visible before the request goes out.
        if self._fetch_delay_seconds > 0:
            await asyncio.sleep(self._fetch_delay_seconds)

        logger.debug("Fetching detail for %s", item.name)
        try:
            payload = await asyncio.wait_for(
                self._gateway.fetch_detail(item.source_ref),
                timeout=self._fetch_timeout_seconds,
            )
        except asyncio.TimeoutError:
            self._fail(generation, f"Timed out loading details for {item.name}")
            return
        except CatalogGatewayError as exc:
            self._fail(generation, str(exc))
            return
        except Exception:
            logger.exception("Unexpected failure loading details for %s", item.name)
            self._fail(generation, f"Could not load details for {item.name}")
            return

        if generation != self._generation:
            logger.debug("Discarding stale detail for %s", item.name)
            return
        self._payload = payload
        self._status = LoadStatus.LOADED

    def _fail(self, generation: int, message: str) -> None:
        if generation != self._generation:
            logger.debug("Discarding stale detail failure: %s", message)
            return
        logger.warning("Detail fetch failed: %s", message)
        self._status = LoadStatus.ERROR
        self._error = message

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def toggle_favorite(self) -> bool | None:
        """Flip the open item's favorite flag; ``None`` when nothing applies."""

        if self._item is None:
            return None
        return await self._favorites.toggle(self._item.identity)

    async def share(self) -> ShareResponse:
        """Serialize the derived fields and present them via the share sheet."""

        if self._item is None or self._status is not LoadStatus.LOADED:
            raise DetailNotReadyError("Details are not loaded yet")
        if self._sharing:
            raise ShareInProgressError("A share is already in progress")

        text = build_share_text(self._item.name, self._payload or DetailPayload())
        self._sharing = True
        try:
            completed = await self._share_sheet.present(text)
        finally:
            self._sharing = False
        return ShareResponse(text=text, completed=completed)

    def snapshot(self) -> DetailViewState:
        item = self._item
        if item is None:
            return DetailViewState(status=self._status)

        payload = self._payload or DetailPayload()
        return DetailViewState(
            status=self._status,
            identity=item.identity,
            display_name=display_name(item.name),
            weight_kg=format_weight(payload.weight),
            height_m=format_height(payload.height),
            types_label=join_categories(payload.categories),
            image_ref=payload.image_ref,
            is_favorite=self._favorites.is_favorite(item.identity),
            redacted=self._status is not LoadStatus.LOADED,
            share_in_progress=self._sharing,
            error=self._error,
        )


__all__ = ["DetailPresenter"]
