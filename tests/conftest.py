"""Shared fixtures: a small filter repository and a destination folder."""

from pathlib import Path

import pytest

from filter_linker.core.links.discovery import CUSTOMSOUNDS_DIR, DARKMODE_DIR


def write(path: Path, text: str = "Show\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def repo(tmp_path):
    """Filter repository with root, darkmode and custom-sounds filters."""
    root = tmp_path / "repo"
    write(root / "a.filter")
    write(root / "README.md", "docs")
    write(root / DARKMODE_DIR / "b.filter")
    write(root / CUSTOMSOUNDS_DIR / "c.filter")
    write(root / CUSTOMSOUNDS_DIR / "alert.mp3", "ID3")
    write(root / CUSTOMSOUNDS_DIR / "notes.txt", "x")
    return root


@pytest.fixture
def dest(tmp_path):
    d = tmp_path / "game"
    d.mkdir()
    return d


@pytest.fixture
def allowed():
    """Probe overrides granting symlink privilege and a shared volume."""
    return {"is_elevated": lambda: True, "same_volume": lambda a, b: True}
