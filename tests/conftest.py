"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
FIXTURES_ROOT = PROJECT_ROOT / "tests" / "fixtures"
PROCESSING_DATE = date(2025, 10, 17)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    src_path = PROJECT_ROOT / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def fixtures_root() -> Path:
    """Directory holding source_crm/, source_erp/, and run_spec/ fixtures."""
    return FIXTURES_ROOT


@pytest.fixture
def processing_date() -> date:
    """Fixed processing date shared by date-relative rules."""
    return PROCESSING_DATE


@pytest.fixture
def config(tmp_path: Path):
    """Config rooted in a temporary data root and the fixture sources."""
    from core.config import ConformConfig

    return replace(
        ConformConfig.from_env(),
        data_root=tmp_path / "data",
        source_root=FIXTURES_ROOT,
        processing_date=PROCESSING_DATE,
    )


@pytest.fixture
def context():
    """Fresh run context with the fixed processing date."""
    from core.run_context import RunContext

    return RunContext.start(PROCESSING_DATE)
