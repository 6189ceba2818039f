from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Iterable

_log = logging.getLogger(__name__)


class ArchiveError(RuntimeError):
    pass


def write_zip(
    files: Iterable[str | Path],
    zip_path: str | Path,
    base_archive: str | Path | None = None,
) -> Path:
    """Write a new flat archive at ``zip_path`` holding ``files`` by base name.

    Entries of ``base_archive`` are carried over unless a file with the same
    base name is given; ``base_archive`` may be ``zip_path`` itself. The
    archive is built under a scratch name and moved over ``zip_path`` once
    complete. Entries sharing a base name overwrite each other; the last one
    added wins.
    """
    zip_path = Path(zip_path)
    entries: dict[str, Path] = {}
    for file in files:
        path = Path(file)
        if path.name in entries:
            _log.warning("Archive entry %s from %s replaces %s", path.name, path, entries[path.name])
        entries[path.name] = path

    part_path = zip_path.with_name(zip_path.name + ".part")
    carried = 0
    try:
        with zipfile.ZipFile(part_path, "w", zipfile.ZIP_DEFLATED) as zf:
            if base_archive is not None:
                with zipfile.ZipFile(base_archive) as base:
                    for info in base.infolist():
                        if info.filename not in entries:
                            zf.writestr(info, base.read(info))
                            carried += 1
            for name, path in entries.items():
                zf.write(path, arcname=name)
        part_path.replace(zip_path)
    except (OSError, zipfile.BadZipFile) as exc:
        part_path.unlink(missing_ok=True)
        raise ArchiveError(f"Failed to write archive {zip_path}: {exc}") from exc

    _log.info("Wrote %s with %d entries (%d carried over)", zip_path, len(entries) + carried, carried)
    return zip_path


def copy_archive(zip_path: str | Path, output_path: str | Path) -> Path:
    try:
        shutil.copyfile(zip_path, output_path)
    except OSError as exc:
        raise ArchiveError(f"Failed to copy archive to {output_path}: {exc}") from exc
    _log.info("Copied %s to %s", zip_path, output_path)
    return Path(output_path)
