"""Shared test fixtures for structlint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from structlint.source.ts_parser import clear_cache

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clear_lang_cache() -> None:
    """Clear language cache before each test to avoid cross-test pollution."""
    clear_cache()


@pytest.fixture()
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a writer that lays out ``{relative_path: content}`` under a fresh root."""

    def _write(files: dict[str, str]) -> Path:
        root = tmp_path / "proj"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write
