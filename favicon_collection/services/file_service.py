from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

_log = logging.getLogger(__name__)


def remove_files(paths: Iterable[Path]) -> list[Path]:
    """Delete ``paths`` and return the ones that could not be deleted.

    Missing files count as removed.
    """
    remaining: list[Path] = []
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            _log.warning("Could not remove %s: %s", path, exc)
            remaining.append(path)
    return remaining


def copy_files(paths: Iterable[Path], target_dir: Path) -> list[Path]:
    target_dir.mkdir(parents=True, exist_ok=True)
    copied: list[Path] = []
    for path in paths:
        destination = target_dir / path.name
        shutil.copyfile(path, destination)
        copied.append(destination)
    return copied
