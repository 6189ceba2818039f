from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageChops, ImageOps

from favicon_collection.config import DEFAULT_SETTINGS
from favicon_collection.services.color_service import hex_to_rgba

_log = logging.getLogger(__name__)

# Output format -> (Pillow format name, image mode the encoder accepts).
OUTPUT_FORMATS: dict[str, tuple[str, str]] = {
    "png": ("PNG", "RGBA"),
    "gif": ("GIF", "RGBA"),
    "webp": ("WEBP", "RGBA"),
    "jpeg": ("JPEG", "RGB"),
    "jpg": ("JPEG", "RGB"),
}

TRANSPARENT = (0, 0, 0, 0)


class RenderError(RuntimeError):
    pass


def image_size(source: str | Path) -> tuple[int, int]:
    """Natural (width, height) of a raster file, honoring EXIF orientation."""
    with Image.open(source) as img:
        width, height = img.size
        orientation = img.getexif().get(0x0112)
    if orientation in (5, 6, 7, 8):
        return height, width
    return width, height


def resize(
    source: str | Path,
    width: int,
    height: int,
    output_format: str = "png",
    background_color: str | None = None,
    round_edges: bool = False,
    gutter: int = 0,
    corner_radius_ratio: float = DEFAULT_SETTINGS.corner_radius_ratio,
) -> Image.Image:
    """Render ``source`` onto a ``width`` x ``height`` canvas.

    The source is scaled to fit inside the canvas minus ``gutter`` on every
    side, keeping its aspect ratio, and centered. ``background_color`` is a
    hex string; ``None`` leaves the canvas transparent. ``round_edges`` clips
    the result to rounded corners.

    Raises ``RenderError`` for bad arguments and lets Pillow's ``OSError``
    propagate for unreadable sources.
    """
    fmt = OUTPUT_FORMATS.get(str(output_format).lower())
    if fmt is None:
        raise RenderError(f"Unsupported output format: {output_format}")
    if width < 1 or height < 1:
        raise RenderError(f"Invalid target size: {width}x{height}")

    gutter = _clamp_gutter(gutter, width, height)
    fill = hex_to_rgba(background_color) if background_color is not None else TRANSPARENT

    with Image.open(source) as src:
        image = ImageOps.exif_transpose(src).convert("RGBA")

    box_w = width - 2 * gutter
    box_h = height - 2 * gutter
    scale = min(box_w / image.width, box_h / image.height)
    new_size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
    if new_size != image.size:
        image = image.resize(new_size, Image.Resampling.LANCZOS)

    canvas = Image.new("RGBA", (width, height), fill)
    offset = ((width - image.width) // 2, (height - image.height) // 2)
    canvas.alpha_composite(image, dest=offset)
    image.close()

    if round_edges:
        radius = min(width, height) * max(0.0, corner_radius_ratio)
        mask = rounded_corner_mask((width, height), radius)
        canvas.putalpha(ImageChops.multiply(canvas.getchannel("A"), mask))

    _log.debug("Rendered %s -> %dx%d (gutter=%d, rounded=%s)", source, width, height, gutter, round_edges)

    if fmt[1] == "RGB":
        # Formats without alpha get flattened onto the fill (white when transparent).
        flat = Image.new("RGB", canvas.size, fill[:3] if fill[3] else (255, 255, 255))
        flat.paste(canvas, mask=canvas.getchannel("A"))
        canvas.close()
        return flat

    return canvas


def rounded_corner_mask(size: tuple[int, int], radius: float) -> Image.Image:
    """Anti-aliased 'L' mask: 255 inside a rounded rectangle, 0 outside."""
    width, height = size
    radius = max(0.0, min(float(radius), width / 2, height / 2))
    if radius == 0:
        return Image.new("L", size, 255)

    # Distance of each pixel center from the rectangle shrunk by the radius.
    xs = np.arange(width, dtype=np.float32) + 0.5
    ys = np.arange(height, dtype=np.float32) + 0.5
    dx = np.maximum(np.maximum(radius - xs, xs - (width - radius)), 0.0)
    dy = np.maximum(np.maximum(radius - ys, ys - (height - radius)), 0.0)
    dist = np.sqrt(dx[np.newaxis, :] ** 2 + dy[:, np.newaxis] ** 2)

    coverage = np.clip(radius - dist + 0.5, 0.0, 1.0)
    return Image.fromarray((coverage * 255.0).round().astype(np.uint8))


def _clamp_gutter(gutter: int, width: int, height: int) -> int:
    # Keep at least one pixel for the source.
    limit = (min(width, height) - 1) // 2
    return max(0, min(int(gutter), limit))


def save_image(image: Image.Image, output_path: str | Path, output_format: str = "png") -> None:
    fmt = OUTPUT_FORMATS.get(str(output_format).lower())
    if fmt is None:
        raise RenderError(f"Unsupported output format: {output_format}")
    image.save(output_path, format=fmt[0])
