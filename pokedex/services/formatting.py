"""Pure helpers deriving display strings from a detail payload."""

from __future__ import annotations

from collections.abc import Iterable

from pokedex.schemas.catalog import Category, DetailPayload


def hectograms_to_kilograms(hectograms: float) -> float:
    return hectograms * 0.1


def decimeters_to_meters(decimeters: float) -> float:
    return decimeters * 0.1


def format_weight(hectograms: float) -> str:
    """Return kilograms with two decimals, e.g. ``60.0`` -> ``"6.00"``."""

    return f"{hectograms_to_kilograms(hectograms):.2f}"


def format_height(decimeters: float) -> str:
    """Return meters with two decimals, e.g. ``4.0`` -> ``"0.40"``."""

    return f"{decimeters_to_meters(decimeters):.2f}"


def join_categories(categories: Iterable[Category] | None) -> str:
    if not categories:
        return ""
    return ", ".join(category.name for category in categories)


def display_name(name: str) -> str:
    """Capitalize each word of a catalog name, e.g. ``"mr-mime"`` -> ``"Mr-Mime"``."""

    return name.title()


def build_share_text(name: str, payload: DetailPayload) -> str:
    """Serialize the derived detail fields into the plain-text share block."""

    lines = [
        f"Name: {display_name(name)}",
        f"Weight: {format_weight(payload.weight)} kg",
        f"Height: {format_height(payload.height)} m",
        f"Types: {join_categories(payload.categories)}",
    ]
    return "\n".join(lines)


__all__ = [
    "build_share_text",
    "decimeters_to_meters",
    "display_name",
    "format_height",
    "format_weight",
    "hectograms_to_kilograms",
    "join_categories",
]
