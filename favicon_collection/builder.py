from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from favicon_collection.catalog import IMAGE_DEFINITIONS, ImageDefinition, catalog_sizes
from favicon_collection.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_SETTINGS,
    ICO_FILENAME,
    ICO_FRAME_SIZES,
    TEMP_IMAGE_FILENAME,
    ZIP_FILENAME,
    get_temp_dir,
)
from favicon_collection.services import resize_service
from favicon_collection.services.archive_service import copy_archive, write_zip
from favicon_collection.services.color_service import clean_hex_color
from favicon_collection.services.file_service import remove_files
from favicon_collection.services.ico_service import IcoConverter
from favicon_collection.services.resize_service import RenderError

# Failures that drop a single output instead of failing the build.
RENDER_ERRORS = (OSError, ValueError, RenderError)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class Builder:
    """Render the favicon catalog from one source image and track the outputs.

    Every file the builder writes is tracked until it is zipped or the builder
    is closed, at which point it is deleted. Use it as a context manager so
    the temp files go away at the end of the session::

        with Builder(IcoConverter()) as builder:
            builder.build("logo.png", "336699", sizes=[76, 192])
            builder.zip_output_files("icons.zip")
    """

    def __init__(
        self,
        ico_converter: IcoConverter | None = None,
        tmp_path: str | Path | None = None,
        corner_radius_ratio: float = DEFAULT_SETTINGS.corner_radius_ratio,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.ico_converter = ico_converter
        self.image_definitions: tuple[ImageDefinition, ...] = IMAGE_DEFINITIONS
        self.tmp_path = Path(tmp_path) if tmp_path is not None else get_temp_dir()
        self.tmp_path.mkdir(parents=True, exist_ok=True)
        self.corner_radius_ratio = corner_radius_ratio
        self._output_files: list[Path] = []

    def __enter__(self) -> Builder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.remove_output_files()

    def build(
        self,
        source_file_path: str | Path,
        background_color_hex: str = DEFAULT_BACKGROUND_COLOR,
        gutter: int = 0,
        sizes: Iterable[object] = (),
    ) -> Builder:
        """Build the icon set for ``source_file_path``.

        Variants that fail to render are left out of the output files rather
        than raised; check ``get_output_files()`` for what was produced.
        """
        resolved = self.resolve_sizes(sizes)
        background = self.sanitize_background_color(background_color_hex)
        gutter = max(0, int(gutter))
        self._log.info(
            "Building %s: sizes=%s background=%s gutter=%d", source_file_path, sorted(resolved), background, gutter
        )

        for definition in self.image_definitions:
            if definition.size not in resolved:
                continue
            output_path = self._render_variant(definition, source_file_path, background, gutter)
            if output_path is not None:
                self._track(output_path)

        if self.ico_converter is not None:
            ico_path = self._build_ico_file(self.ico_converter, source_file_path)
            if ico_path is not None:
                self._track(ico_path)

        return self

    def zip_output_files(self, output_path: str | Path | None = None) -> Builder:
        """Package the tracked files into a zip archive and delete the originals.

        With ``output_path`` the archive is copied there and is no longer
        tracked. Otherwise the temp archive becomes the only tracked file.
        Raises ``ArchiveError`` when the archive cannot be written or copied.
        """
        zip_path = self.tmp_path / ZIP_FILENAME
        # A tracked archive from an earlier call is merged, not packed into itself.
        previous = zip_path if zip_path in self._output_files else None
        members = [path for path in self._output_files if path != zip_path]
        write_zip(members, zip_path, base_archive=previous)

        self._output_files = members
        self.remove_output_files()

        if output_path:
            copy_archive(zip_path, output_path)
        else:
            self._track(zip_path)

        return self

    def has_output_files(self) -> bool:
        return len(self._output_files) > 0

    def get_output_files(self) -> list[Path]:
        return list(self._output_files)

    def resolve_sizes(self, sizes: Iterable[object]) -> set[int]:
        """Intersect the requested sizes with the catalog.

        No request, or a request matching nothing in the catalog, means every
        catalog size.
        """
        default_sizes = set(catalog_sizes())
        requested = {size for size in (_coerce_size(value) for value in sizes) if size is not None}

        output_sizes = requested & default_sizes
        if not output_sizes:
            return default_sizes
        return output_sizes

    @staticmethod
    def sanitize_background_color(background_color_hex: str | None) -> str:
        return clean_hex_color(background_color_hex) or DEFAULT_BACKGROUND_COLOR

    def remove_output_files(self) -> None:
        """Delete tracked files. Files that fail to delete stay tracked."""
        self._output_files = remove_files(self._output_files)

    def _track(self, path: Path) -> None:
        # Rebuilding overwrites files in place; track each path once.
        if path not in self._output_files:
            self._output_files.append(path)

    def _render_variant(
        self, definition: ImageDefinition, source_file_path: str | Path, background: str, gutter: int
    ) -> Path | None:
        output_path = self.tmp_path / definition.filename
        try:
            img = resize_service.resize(
                source_file_path,
                definition.size,
                definition.size,
                "png",
                None if definition.transparent_background else background,
                definition.round_edges,
                gutter,
                corner_radius_ratio=self.corner_radius_ratio,
            )
        except RENDER_ERRORS as exc:
            self._log.warning("Failed to render %s: %s", definition.filename, exc)
            return None

        try:
            resize_service.save_image(img, output_path, "png")
        except RENDER_ERRORS as exc:
            self._log.warning("Failed to write %s: %s", output_path, exc)
            return None
        finally:
            img.close()

        return output_path

    def _build_ico_file(self, ico_converter: IcoConverter, source_file_path: str | Path) -> Path | None:
        temporary_file_path = self.tmp_path / TEMP_IMAGE_FILENAME
        output_path = self.tmp_path / ICO_FILENAME

        try:
            width, height = resize_service.image_size(source_file_path)
            size = max(width, height)
            img = resize_service.resize(source_file_path, size, size, "png", DEFAULT_BACKGROUND_COLOR)
            try:
                resize_service.save_image(img, temporary_file_path, "png")
            finally:
                img.close()

            ico_converter.add_image(temporary_file_path, ICO_FRAME_SIZES)
            success = ico_converter.save_ico(output_path)
        except RENDER_ERRORS as exc:
            self._log.warning("Failed to build %s: %s", ICO_FILENAME, exc)
            success = False
        finally:
            ico_converter.clear()
            remove_files([temporary_file_path])

        return output_path if success else None


def _coerce_size(value: object) -> int | None:
    """Integer value of ``value``, reading the leading digits of strings like '76px'."""
    try:
        if isinstance(value, (int, float)):
            return int(value)
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        pass
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else None
