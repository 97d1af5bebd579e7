from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pytest

from tests._fixtures.fake_engine import FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Provide an engine double that records the projects it was started with."""
    return FakeEngine()


@pytest.fixture
def write_tree(tmp_path: Path):
    """Write ``relative path -> contents`` entries below ``tmp_path``."""

    def _write(files: Mapping[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write
