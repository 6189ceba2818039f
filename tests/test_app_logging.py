from __future__ import annotations

import io
import logging
from logging.handlers import RotatingFileHandler

import pytest

from favicon_collection import app_logging


def test_writable_dir_is_created(tmp_path):
    target = tmp_path / "logs"
    assert app_logging._is_writable_dir(target)
    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_preferred_log_dir_uses_user_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(app_logging, "get_log_dir", lambda: tmp_path / "user-logs")
    assert app_logging.get_preferred_log_dir() == tmp_path / "user-logs"


def test_preferred_log_dir_falls_back(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory")
    monkeypatch.setattr(app_logging, "get_log_dir", lambda: blocker / "logs")
    assert app_logging.get_preferred_log_dir() != blocker / "logs"


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("FAVICON_COLLECTION_LOG_LEVEL", "warning")
    assert app_logging.resolve_log_level() == logging.WARNING
    assert app_logging.resolve_log_level(verbose=True) == logging.DEBUG


def test_unknown_log_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("FAVICON_COLLECTION_LOG_LEVEL", "chatty")
    assert app_logging.resolve_log_level() == logging.INFO


class _Stream(io.StringIO):
    def __init__(self, tty: bool) -> None:
        super().__init__()
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


@pytest.mark.parametrize("tty, expected", [(True, 2), (False, 1)])
def test_build_handlers(tmp_path, tty, expected):
    handlers = app_logging.build_handlers(tmp_path / "app.log", stream=_Stream(tty))
    try:
        assert len(handlers) == expected
        assert isinstance(handlers[0], RotatingFileHandler)
    finally:
        for handler in handlers:
            handler.close()
