from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

APP_NAME = "FaviconCollection"

# Fixed artifact names inside the session temp directory.
TEMP_IMAGE_FILENAME = "temp.png"
ICO_FILENAME = "favicon.ico"
ZIP_FILENAME = "faviconCollection.zip"

DEFAULT_BACKGROUND_COLOR = "fff"

# Frames embedded in favicon.ico.
ICO_FRAME_SIZES: tuple[tuple[int, int], ...] = ((16, 16), (32, 32), (48, 48), (64, 64), (128, 128))


@dataclass(frozen=True)
class BuildSettings:
    # Hex color (3 or 6 digits, optional leading '#') used behind opaque variants.
    background_color: str = DEFAULT_BACKGROUND_COLOR
    # Padding in pixels between the canvas edge and the resized source.
    gutter: int = 0
    # Requested catalog sizes. Empty means every size in the catalog.
    sizes: tuple[int, ...] = ()
    # Build favicon.ico alongside the PNG variants.
    include_ico: bool = True
    # Corner radius of rounded variants, as a fraction of the edge length.
    corner_radius_ratio: float = 0.2


DEFAULT_SETTINGS = BuildSettings()


def get_temp_dir() -> Path:
    # Allow override for packaging / CI sandboxes.
    override = os.environ.get("FAVICON_COLLECTION_TMP_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return Path(tempfile.gettempdir())


def get_log_dir() -> Path:
    return Path.home() / ".favicon_collection"
