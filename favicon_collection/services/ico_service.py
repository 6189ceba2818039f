from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from PIL import Image

from favicon_collection.config import ICO_FRAME_SIZES

# The ICO directory stores dimensions in a single byte (0 meaning 256).
MAX_ICO_DIMENSION = 256


class IcoConverter:
    """Collect source images and write them as one multi-frame ICO file."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._frames: dict[tuple[int, int], Image.Image] = {}

    def add_image(
        self,
        source: str | Path | Image.Image,
        sizes: Iterable[tuple[int, int]] = ICO_FRAME_SIZES,
    ) -> None:
        """Add one frame per requested size, rendered from ``source``.

        A size that was already added by an earlier image is replaced.
        """
        if isinstance(source, Image.Image):
            image = source.convert("RGBA")
        else:
            with Image.open(source) as img:
                image = img.convert("RGBA")

        for width, height in sizes:
            width, height = int(width), int(height)
            if not (0 < width <= MAX_ICO_DIMENSION and 0 < height <= MAX_ICO_DIMENSION):
                self._log.warning("Skipping ICO frame %dx%d: outside 1..%d", width, height, MAX_ICO_DIMENSION)
                continue
            self._frames[(width, height)] = _fit_frame(image, (width, height))

    @property
    def frame_sizes(self) -> list[tuple[int, int]]:
        return sorted(self._frames, key=lambda size: size[0] * size[1])

    def save_ico(self, output_path: str | Path) -> bool:
        if not self._frames:
            self._log.warning("No frames added, not writing %s", output_path)
            return False

        sizes = self.frame_sizes
        frames = [self._frames[size] for size in sizes]
        # Pillow only embeds sizes up to the base image, so the largest frame goes first.
        base, rest = frames[-1], frames[:-1]
        try:
            base.save(output_path, format="ICO", sizes=sizes, append_images=rest)
        except (OSError, ValueError) as exc:
            self._log.warning("Failed to write ICO %s: %s", output_path, exc)
            return False

        self._log.info("Wrote %s with frames %s", output_path, sizes)
        return True

    def clear(self) -> None:
        for frame in self._frames.values():
            frame.close()
        self._frames.clear()


def _fit_frame(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    if image.size == size:
        return image.copy()

    # Letterbox non-square sources on a transparent canvas.
    target_w, target_h = size
    scale = min(target_w / image.width, target_h / image.height)
    new_size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
    resized = image.resize(new_size, Image.Resampling.LANCZOS)
    if resized.size == size:
        return resized

    frame = Image.new("RGBA", size, (0, 0, 0, 0))
    frame.paste(resized, ((target_w - resized.width) // 2, (target_h - resized.height) // 2), resized)
    return frame
