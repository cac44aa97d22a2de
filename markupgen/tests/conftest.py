"""Test configuration helpers to ensure package imports work from the repository root."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
REPO_ROOT = ROOT.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES / "petstore.yaml"


@pytest.fixture
def petstore_copy(tmp_path: Path, petstore_path: Path) -> Path:
    """Copy of the petstore description inside a scratch directory for fragments."""

    target = tmp_path / "petstore.yaml"
    target.write_text(petstore_path.read_text(encoding="utf-8"), encoding="utf-8")
    return target
