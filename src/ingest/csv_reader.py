"""Typed CSV readers for source exports.

Every column is read as text, then converted to the row field type.
Values that do not parse become ``None`` so defects surface in the
quality report instead of failing the load.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable

import pyarrow as pa
import pyarrow.csv as pacsv

from core.constants import DECIMAL_PRECISION, DECIMAL_SCALE
from core.errors import ConformIngestError
from core.logging_config import get_logger
from store.table_codec import field_value_types

_LOGGER = get_logger(__name__)

_MAX_INTEGER_DIGITS = DECIMAL_PRECISION - DECIMAL_SCALE
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def read_source_table(path: Path, row_type: type) -> list[Any]:
    """Read one CSV export into typed rows.

    Args:
        path: CSV file with a header row; header names match row fields
            case-insensitively.
        row_type: Raw row dataclass.

    Returns:
        Rows in file order.

    Raises:
        ConformIngestError: If the file is missing, unreadable, or lacks a column.
    """
    if not path.is_file():
        raise ConformIngestError(
            f"Failed to read source at {path}: file does not exist. "
            "Check the source root and export file names."
        )
    value_types = field_value_types(row_type)
    table = _read_text_table(path, list(value_types))
    missing = [name for name in value_types if name not in table.column_names]
    if missing:
        raise ConformIngestError(
            f"Source file {path} is missing columns: {', '.join(missing)}. "
            "Re-export the file with the expected header."
        )
    converters = {name: _CONVERTERS[value_type] for name, value_type in value_types.items()}
    columns = {name: table.column(name).cast(pa.string()).to_pylist() for name in value_types}
    rows: list[Any] = []
    coerced_count = 0
    for index in range(table.num_rows):
        values: dict[str, Any] = {}
        for name, convert in converters.items():
            text = columns[name][index]
            value = convert(text)
            if value is None and text is not None and text.strip():
                coerced_count += 1
            values[name] = value
        rows.append(row_type(**values))
    if coerced_count:
        _LOGGER.warning(
            "source_values_coerced",
            source_path=str(path),
            coerced_count=coerced_count,
        )
    return rows


def _read_text_table(path: Path, field_names: list[str]) -> pa.Table:
    column_types: dict[str, pa.DataType] = {}
    for name in field_names:
        column_types[name] = pa.string()
        column_types[name.upper()] = pa.string()
    convert_options = pacsv.ConvertOptions(column_types=column_types, strings_can_be_null=False)
    try:
        table = pacsv.read_csv(path, convert_options=convert_options)
    except (pa.ArrowInvalid, OSError) as error:
        raise ConformIngestError(
            f"Failed to parse CSV source at {path}: {error}. Fix the file and retry the load."
        ) from error
    return table.rename_columns([name.strip().lower() for name in table.column_names])


def parse_text(value: str | None) -> str | None:
    """Keep text verbatim; empty cells become ``None``."""
    if value is None or value == "":
        return None
    return value


def parse_int(value: str | None) -> int | None:
    """Parse an integer cell; blank, malformed, or out-of-range cells become ``None``."""
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value.strip())
    except ValueError:
        return None
    if not _INT64_MIN <= parsed <= _INT64_MAX:
        return None
    return parsed


def parse_decimal(value: str | None) -> Decimal | None:
    """Parse a decimal cell; blank, malformed, or oversized cells become ``None``."""
    if value is None or not value.strip():
        return None
    try:
        parsed = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not parsed.is_finite() or parsed.adjusted() >= _MAX_INTEGER_DIGITS:
        return None
    return parsed


def parse_date(value: str | None) -> date | None:
    """Parse an ISO date cell; blank or malformed cells become ``None``."""
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


_CONVERTERS: dict[type, Callable[[str | None], Any]] = {
    str: parse_text,
    int: parse_int,
    Decimal: parse_decimal,
    date: parse_date,
}
