from __future__ import annotations

import pytest

from favicon_collection.services.color_service import clean_hex_color, hex_to_rgba


@pytest.mark.parametrize(
    "value, expected",
    [
        ("fff", "fff"),
        ("#FFF", "fff"),
        ("336699", "336699"),
        ("#A1b2C3", "a1b2c3"),
        ("  #000  ", "000"),
    ],
)
def test_clean_valid_colors(value, expected):
    assert clean_hex_color(value) == expected


@pytest.mark.parametrize("value", ["", "#", "ff", "ffff", "12345", "1234567", "ggg", "red", None])
def test_clean_invalid_colors(value):
    assert clean_hex_color(value) == ""


def test_clean_is_idempotent():
    once = clean_hex_color("#3366CC")
    assert clean_hex_color(once) == once == "3366cc"


def test_hex_to_rgba():
    assert hex_to_rgba("fff") == (255, 255, 255, 255)
    assert hex_to_rgba("#336699") == (0x33, 0x66, 0x99, 255)


def test_hex_to_rgba_rejects_invalid():
    with pytest.raises(ValueError):
        hex_to_rgba("nope")
