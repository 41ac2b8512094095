"""Runtime configuration model for conform.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import os
from pathlib import Path

from core.constants import DEFAULT_DATA_ROOT, DEFAULT_SOURCE_ROOT
from core.errors import ConformConfigError


@dataclass(frozen=True)
class ConformConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for layers, logs, and reports.
        source_root: Directory holding the CRM and ERP source exports.
        processing_date: Fixed processing date; the run's UTC date when unset.
    """

    data_root: Path
    source_root: Path
    processing_date: date | None

    @classmethod
    def from_env(cls) -> "ConformConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ConformConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("CONFORM_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        source_root_value = os.getenv("CONFORM_SOURCE_ROOT", str(DEFAULT_SOURCE_ROOT))
        processing_date_value = os.getenv("CONFORM_PROCESSING_DATE")
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            source_root=Path(source_root_value).expanduser().resolve(),
            processing_date=parse_processing_date(processing_date_value),
        )


def parse_processing_date(raw_value: str | None) -> date | None:
    """Parse an optional ISO processing date.

    Args:
        raw_value: Raw string from environment or run spec.

    Returns:
        Parsed date, or ``None`` when the value is unset or blank.

    Raises:
        ConformConfigError: If value is not an ISO date.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return date.fromisoformat(raw_value.strip())
    except ValueError as error:
        raise ConformConfigError(
            "Invalid CONFORM_PROCESSING_DATE value: "
            f"expected YYYY-MM-DD, got '{raw_value}'. "
            "Set CONFORM_PROCESSING_DATE to an ISO date or unset it."
        ) from error
