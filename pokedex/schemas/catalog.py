"""Entity models for catalog entries and their detail payloads."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRAILING_ID_PATTERN = re.compile(r"/(\d+)/?$")


def identity_from_source_ref(source_ref: str, name: str) -> str:
    """Derive a stable identity from the trailing numeric path segment.

    PokeAPI links look like ``https://pokeapi.co/api/v2/pokemon/25/``; the
    numeric id survives refetches, which keeps persisted favorites attached to
    the same entry. Links without a numeric segment fall back to the name.
    """

    match = _TRAILING_ID_PATTERN.search(source_ref.strip())
    if match:
        return match.group(1)
    return name.strip().lower()


class CatalogItem(BaseModel):
    """A single catalog entry shown in the list view."""

    model_config = ConfigDict(frozen=True)

    identity: str = Field(..., description="Opaque identifier unique per fetch session")
    name: str = Field(..., description="Display name as returned by the catalog API")
    source_ref: str = Field(..., description="URL of the detail resource")
    is_favorite: bool = Field(
        False,
        description="User-toggled favorite flag; false until toggled.",
    )

    @classmethod
    def from_listing(cls, raw: dict[str, Any]) -> "CatalogItem":
        """Build an item from one ``{name, url}`` entry of the listing payload."""

        name = str(raw["name"])
        source_ref = str(raw["url"])
        return cls(
            identity=identity_from_source_ref(source_ref, name),
            name=name,
            source_ref=source_ref,
        )


class Category(BaseModel):
    """A named category (Pokémon type) attached to a detail payload."""

    name: str


class DetailPayload(BaseModel):
    """Physical attributes, categories, and artwork for a single entry.

    Every field carries a default so partially populated payloads still render;
    weight is in hectograms and height in decimeters, as served by the API.
    """

    weight: float = Field(0.0, description="Weight in hectograms")
    height: float = Field(0.0, description="Height in decimeters")
    categories: list[Category] = Field(default_factory=list)
    image_ref: str | None = Field(None, description="Official artwork URL")

    @field_validator("weight", "height", mode="before")
    @classmethod
    def _default_missing_measure(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "DetailPayload":
        """Map the remote detail document onto the payload model.

        Expected shape::

            {"weight": 60, "height": 4,
             "types": [{"type": {"name": "electric"}}],
             "sprites": {"other": {"official-artwork": {"front_default": "..."}}}}
        """

        categories: list[Category] = []
        for slot in raw.get("types") or []:
            type_info = (slot or {}).get("type") or {}
            name = type_info.get("name")
            if name:
                categories.append(Category(name=name))

        sprites = raw.get("sprites") or {}
        other = sprites.get("other") or {}
        artwork = other.get("official-artwork") or {}

        return cls(
            weight=raw.get("weight"),
            height=raw.get("height"),
            categories=categories,
            image_ref=artwork.get("front_default"),
        )


__all__ = [
    "CatalogItem",
    "Category",
    "DetailPayload",
    "identity_from_source_ref",
]
