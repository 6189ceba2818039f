from __future__ import annotations

import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

from favicon_collection.config import APP_NAME, get_log_dir

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_MAX_BYTES = 2_000_000
LOG_BACKUP_COUNT = 5

_configured_path: Path | None = None


def _is_writable_dir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
        test_path = path / ".favicon_collection_write_test"
        test_path.write_text("ok", encoding="utf-8")
        test_path.unlink(missing_ok=True)
        return True
    except OSError:
        return False


def get_preferred_log_dir() -> Path:
    """
    Prefer the per-user log directory. Fall back to the system temp dir and
    finally the working directory when the home directory is read-only.
    """
    candidates = [get_log_dir(), Path(tempfile.gettempdir()) / "favicon_collection"]

    for d in candidates:
        if _is_writable_dir(d):
            return d

    return Path.cwd()


def resolve_log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    level_name = os.environ.get("FAVICON_COLLECTION_LOG_LEVEL", "INFO").upper().strip()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def build_handlers(log_path: Path, stream=None) -> list[logging.Handler]:
    """Rotating file handler, plus a stream handler when ``stream`` is a terminal."""
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            str(log_path),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    ]
    stream = sys.stderr if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    if callable(isatty) and isatty():
        handlers.append(logging.StreamHandler(stream))
    return handlers


def configure_logging(app_name: str = APP_NAME, verbose: bool = False) -> Path:
    """Attach the file (and terminal) handlers to the root logger once.

    Returns the log file path.
    """
    global _configured_path
    if _configured_path is not None:
        return _configured_path

    log_path = get_preferred_log_dir() / f"{app_name.lower()}.log"
    level = resolve_log_level(verbose)
    formatter = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in build_handlers(log_path):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _configured_path = log_path
    logging.getLogger(__name__).info("Logging initialised, path: %s", log_path)
    return log_path
