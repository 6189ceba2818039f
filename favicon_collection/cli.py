from __future__ import annotations

import argparse
import logging
import shutil
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

from favicon_collection.app_logging import configure_logging
from favicon_collection.builder import Builder
from favicon_collection.config import APP_NAME, DEFAULT_SETTINGS, ZIP_FILENAME, BuildSettings
from favicon_collection.services.archive_service import ArchiveError
from favicon_collection.services.file_service import copy_files
from favicon_collection.services.ico_service import IcoConverter

_log = logging.getLogger(__name__)


def parse_sizes(value: str) -> tuple[int, ...]:
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError("--sizes must be a comma-separated list of integers, e.g. 76,192")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="favicon-collection",
        description="Generate favicon, touch-icon and tile images plus favicon.ico from one source image.",
    )
    parser.add_argument("source", type=Path, help="Path to the source image (png, jpg, webp, ...)")
    parser.add_argument(
        "-o", "--output", type=Path, default=Path(ZIP_FILENAME), help=f"Zip destination (default ./{ZIP_FILENAME})"
    )
    parser.add_argument(
        "-b",
        "--background",
        default=DEFAULT_SETTINGS.background_color,
        help="Background hex color for opaque variants (default fff)",
    )
    parser.add_argument("-g", "--gutter", type=int, default=DEFAULT_SETTINGS.gutter, help="Padding in pixels")
    parser.add_argument(
        "-s", "--sizes", type=parse_sizes, default=DEFAULT_SETTINGS.sizes, help="Comma separated sizes, e.g. 76,192"
    )
    parser.add_argument("--no-ico", action="store_true", help="Skip favicon.ico")
    parser.add_argument(
        "--keep-files", type=Path, metavar="DIR", help="Copy the individual files to DIR instead of zipping"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> BuildSettings:
    return replace(
        DEFAULT_SETTINGS,
        background_color=args.background,
        gutter=max(0, args.gutter),
        sizes=tuple(args.sizes),
        include_ico=not args.no_ico,
    )


def run(
    source: Path, settings: BuildSettings, output: Path = Path(ZIP_FILENAME), keep_dir: Path | None = None
) -> int:
    # Private temp dir per run so parallel invocations do not share fixed file names.
    # Removing it also disposes of the temp archive left behind by zip_output_files.
    session_dir = Path(tempfile.mkdtemp(prefix="favicon_collection_"))
    converter = IcoConverter() if settings.include_ico else None
    try:
        with Builder(converter, session_dir, settings.corner_radius_ratio) as builder:
            builder.build(source, settings.background_color, settings.gutter, settings.sizes)
            if not builder.has_output_files():
                _log.error("No icons could be generated from %s", source)
                return 1

            if keep_dir is not None:
                copied = copy_files(builder.get_output_files(), keep_dir)
                print(f"Wrote {len(copied)} files to {keep_dir}")
                return 0

            output.parent.mkdir(parents=True, exist_ok=True)
            builder.zip_output_files(output)
            print(f"Wrote {output}")
            return 0
    except ArchiveError as exc:
        _log.error("%s", exc)
        return 1
    finally:
        shutil.rmtree(session_dir, ignore_errors=True)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(APP_NAME, verbose=args.verbose)

    source: Path = args.source
    if not source.is_file():
        print(f"Source image not found: {source}", file=sys.stderr)
        return 2

    return run(source, settings_from_args(args), output=args.output, keep_dir=args.keep_files)


if __name__ == "__main__":
    raise SystemExit(main())
