from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image


def _save(path: Path, size: tuple[int, int], color: tuple[int, int, int, int], mode: str = "RGBA") -> Path:
    img = Image.new(mode, size, color if mode == "RGBA" else color[:3])
    img.save(path)
    img.close()
    return path


@pytest.fixture
def session_dir(tmp_path: Path) -> Path:
    path = tmp_path / "session"
    path.mkdir()
    return path


@pytest.fixture
def opaque_source(tmp_path: Path) -> Path:
    return _save(tmp_path / "source.png", (500, 500), (255, 0, 0, 255))


@pytest.fixture
def wide_source(tmp_path: Path) -> Path:
    return _save(tmp_path / "wide.png", (200, 100), (255, 0, 0, 255))


@pytest.fixture
def jpeg_source(tmp_path: Path) -> Path:
    return _save(tmp_path / "photo.jpg", (320, 240), (0, 128, 0, 255), mode="RGB")


@pytest.fixture
def translucent_source(tmp_path: Path) -> Path:
    img = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
    img.paste((0, 0, 255, 255), (16, 16, 48, 48))
    path = tmp_path / "logo.png"
    img.save(path)
    img.close()
    return path


@pytest.fixture
def broken_source(tmp_path: Path) -> Path:
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")
    return path
