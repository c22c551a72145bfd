"""FastAPI router exposing the catalog list screen."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from pokedex.schemas.views import DetailViewState, FavoriteToggleResponse, ListViewState
from pokedex.services.dependencies import (
    get_detail_presenter,
    get_favorite_store,
    get_list_presenter,
)
from pokedex.services.detail_presenter import DetailPresenter
from pokedex.services.errors import FavoriteTargetNotFound
from pokedex.services.favorites import FavoriteStore
from pokedex.services.list_presenter import ListPresenter

router = APIRouter()


@router.get("/", response_model=ListViewState)
async def list_pokemon(
    search: str = Query("", description="Case-insensitive name filter"),
    favorites_only: bool = Query(False, description="Only show favorites"),
    presenter: ListPresenter = Depends(get_list_presenter),
) -> ListViewState:
    """Render the list, loading the catalog the first time it is shown."""

    await presenter.appear()
    presenter.set_search_text(search)
    if favorites_only:
        presenter.show_favorites()
    else:
        presenter.show_all()
    return presenter.snapshot()


@router.post("/refresh", response_model=ListViewState)
async def refresh_pokemon(
    presenter: ListPresenter = Depends(get_list_presenter),
) -> ListViewState:
    """Refetch the catalog, keeping the current filters."""

    await presenter.refresh()
    return presenter.snapshot()


@router.post("/{identity}/favorite", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    identity: str,
    favorites: FavoriteStore = Depends(get_favorite_store),
) -> FavoriteToggleResponse:
    """Flip the favorite flag of a catalog entry from the list."""

    value = await favorites.toggle(identity)
    if value is None:
        raise FavoriteTargetNotFound(identity)
    return FavoriteToggleResponse(identity=identity, is_favorite=value)


@router.post("/{identity}/select", response_model=DetailViewState)
async def select_pokemon(
    identity: str,
    presenter: ListPresenter = Depends(get_list_presenter),
    detail: DetailPresenter = Depends(get_detail_presenter),
) -> DetailViewState:
    """Select an entry and open its detail view in the loading state."""

    item = presenter.select(identity)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Unknown catalog entry '{identity}'")
    return detail.open(item)
