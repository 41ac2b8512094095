"""Unit tests for core config parsing."""

from __future__ import annotations

from datetime import date

import pytest

from core.config import ConformConfig
from core.errors import ConformConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("CONFORM_DATA_ROOT", "./.tmp-conform")

    config = ConformConfig.from_env()

    assert config.data_root.name == ".tmp-conform" and config.data_root.is_absolute()


def test_from_env_reads_processing_date(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse an ISO processing date."""
    monkeypatch.setenv("CONFORM_PROCESSING_DATE", "2025-10-17")

    assert ConformConfig.from_env().processing_date == date(2025, 10, 17)


def test_from_env_defaults_processing_date_to_none(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset and blank processing dates should mean the run date."""
    monkeypatch.setenv("CONFORM_PROCESSING_DATE", "  ")

    assert ConformConfig.from_env().processing_date is None


def test_from_env_raises_for_invalid_processing_date(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-ISO processing dates."""
    monkeypatch.setenv("CONFORM_PROCESSING_DATE", "17/10/2025")

    with pytest.raises(ConformConfigError):
        ConformConfig.from_env()
