"""Shared pytest fixtures."""

import shutil
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(relative_path: str) -> str:
    """Read a fixture file relative to tests/fixtures."""
    return (FIXTURES_DIR / relative_path).read_text(encoding="utf-8")


@pytest.fixture
def graphite_dir(tmp_path: Path) -> Path:
    """A writable copy of the sample gt metadata directory."""
    target = tmp_path / "git"
    shutil.copytree(FIXTURES_DIR / "graphite", target)
    return target
