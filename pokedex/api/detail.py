"""FastAPI router exposing the detail view of the selected entry."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from pokedex.schemas.views import DetailViewState, FavoriteToggleResponse, ShareResponse
from pokedex.services.dependencies import get_detail_presenter, get_list_presenter
from pokedex.services.detail_presenter import DetailPresenter
from pokedex.services.errors import DetailNotReadyError
from pokedex.services.list_presenter import ListPresenter

router = APIRouter()


@router.get("/", response_model=DetailViewState)
async def get_detail(
    wait: bool = Query(
        False, description="Block until the pending fetch reaches loaded or error"
    ),
    presenter: DetailPresenter = Depends(get_detail_presenter),
) -> DetailViewState:
    """Return the detail view state, optionally waiting for the fetch."""

    if wait:
        return await presenter.wait_until_settled()
    return presenter.snapshot()


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def close_detail(
    presenter: DetailPresenter = Depends(get_detail_presenter),
    list_presenter: ListPresenter = Depends(get_list_presenter),
) -> Response:
    """Dismiss the detail view and clear the list selection."""

    presenter.close()
    list_presenter.close_selection()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/favorite", response_model=FavoriteToggleResponse)
async def toggle_detail_favorite(
    presenter: DetailPresenter = Depends(get_detail_presenter),
) -> FavoriteToggleResponse:
    """Flip the star of the open entry; the list sees it on its next render."""

    item = presenter.item
    value = await presenter.toggle_favorite()
    if item is None or value is None:
        raise DetailNotReadyError("No catalog entry is open")
    return FavoriteToggleResponse(identity=item.identity, is_favorite=value)


@router.post("/share", response_model=ShareResponse)
async def share_detail(
    presenter: DetailPresenter = Depends(get_detail_presenter),
) -> ShareResponse:
    """Build the share text for the open entry."""

    return await presenter.share()
