"""Pytest configuration for repository test runs."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src and repository root to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _isolated_booklake_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop host BOOKLAKE_* settings so config defaults are predictable."""
    for name in list(os.environ):
        if name.startswith("BOOKLAKE_"):
            monkeypatch.delenv(name)
