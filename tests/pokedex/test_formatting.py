"""Unit tests for the derived detail strings."""

from __future__ import annotations

from pokedex.schemas.catalog import Category, DetailPayload
from pokedex.services.formatting import (
    build_share_text,
    display_name,
    format_height,
    format_weight,
    join_categories,
)


def test_weight_converts_hectograms_to_kilograms() -> None:
    assert f"{format_weight(60.0)} kg" == "6.00 kg"
    assert format_weight(0.0) == "0.00"
    assert format_weight(9050.0) == "905.00"


def test_height_converts_decimeters_to_meters() -> None:
    assert f"{format_height(4.0)} m" == "0.40 m"
    assert format_height(17.0) == "1.70"


def test_join_categories() -> None:
    assert join_categories([Category(name="electric")]) == "electric"
    assert (
        join_categories([Category(name="grass"), Category(name="poison")])
        == "grass, poison"
    )
    assert join_categories([]) == ""
    assert join_categories(None) == ""


def test_display_name_capitalizes_each_word() -> None:
    assert display_name("pikachu") == "Pikachu"
    assert display_name("mr-mime") == "Mr-Mime"


def test_build_share_text() -> None:
    payload = DetailPayload(weight=60.0, height=4.0, categories=[Category(name="electric")])

    assert build_share_text("pikachu", payload) == (
        "Name: Pikachu\n"
        "Weight: 6.00 kg\n"
        "Height: 0.40 m\n"
        "Types: electric"
    )
