"""Pydantic schemas for entities, view state, and API errors."""

from pokedex.schemas.catalog import (  # noqa: F401
    CatalogItem,
    Category,
    DetailPayload,
)
from pokedex.schemas.views import (  # noqa: F401
    DetailViewState,
    FavoriteToggleResponse,
    ListViewState,
    LoadStatus,
    ShareResponse,
)
