"""Pydantic schemas describing the view state handed to the rendering layer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from pokedex.schemas.catalog import CatalogItem


class LoadStatus(str, Enum):
    """Lifecycle of an asynchronous fetch backing a view."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ListViewState(BaseModel):
    """Everything the list screen needs to render a frame."""

    status: LoadStatus = Field(..., description="State of the catalog fetch")
    search_text: str = Field("", description="Current search bar contents")
    show_favorites_only: bool = Field(
        False, description="Whether the Favorites button is active"
    )
    selected_identity: str | None = Field(
        None, description="Identity of the item whose detail view is open"
    )
    items: list[CatalogItem] = Field(
        default_factory=list, description="Filtered items in catalog order"
    )
    total: int = Field(0, description="Size of the unfiltered catalog")
    error: str | None = Field(None, description="Failure message when status is error")


class DetailViewState(BaseModel):
    """Derived, display-ready fields for the detail screen."""

    status: LoadStatus
    identity: str | None = None
    display_name: str = ""
    weight_kg: str = Field("0.00", description="Weight formatted to two decimals")
    height_m: str = Field("0.00", description="Height formatted to two decimals")
    types_label: str = ""
    image_ref: str | None = None
    is_favorite: bool = False
    redacted: bool = Field(
        True, description="True while placeholder values are shown"
    )
    share_in_progress: bool = False
    error: str | None = None


class FavoriteToggleResponse(BaseModel):
    """Result of flipping an item's favorite flag."""

    identity: str
    is_favorite: bool


class ShareResponse(BaseModel):
    """Text handed to the platform share sheet and its completion state."""

    text: str
    completed: bool


__all__ = [
    "DetailViewState",
    "FavoriteToggleResponse",
    "ListViewState",
    "LoadStatus",
    "ShareResponse",
]
