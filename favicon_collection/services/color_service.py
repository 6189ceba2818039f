from __future__ import annotations

import re

from PIL import ImageColor

_HEX_COLOR_RE = re.compile(r"^(?:[0-9a-f]{3}|[0-9a-f]{6})$")


def clean_hex_color(value: str | None) -> str:
    """Return a lower-case 3 or 6 digit hex color without '#', or '' when invalid."""
    color = str(value or "").strip().lstrip("#").lower()
    if not _HEX_COLOR_RE.match(color):
        return ""
    return color


def hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    color = clean_hex_color(value)
    if not color:
        raise ValueError(f"Invalid hex color: {value!r}")
    r, g, b = ImageColor.getrgb(f"#{color}")[:3]
    return r, g, b, 255
