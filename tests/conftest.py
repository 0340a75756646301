"""Shared fixtures for citport tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from citport import utils


@pytest.fixture(autouse=True)
def quiet_logging():
    """Reset verbose output between tests."""
    utils.set_verbose(False)
    yield
    utils.set_verbose(False)


@pytest.fixture
def write_file():
    """Return a helper that writes text or bytes, creating parent directories."""

    def _write(path: Path, content: str | bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def pack_dir(tmp_path: Path) -> Path:
    """Empty input pack root."""
    root = tmp_path / "input"
    root.mkdir()
    return root


@pytest.fixture
def cit_dir(pack_dir: Path) -> Path:
    """OptiFine CIT directory inside the input pack."""
    path = pack_dir / "assets" / "minecraft" / "optifine" / "cit"
    path.mkdir(parents=True)
    return path
