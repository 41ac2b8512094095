"""Typed row to Arrow table codec.

This module maps frozen row dataclasses onto Arrow schemas and
serializes tables as Parquet bytes. Serialization is deterministic,
so equal rows always produce equal bytes and equal digests.
"""

from __future__ import annotations

import dataclasses
import hashlib
import typing
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from core.constants import DECIMAL_PRECISION, DECIMAL_SCALE, HASH_ALGORITHM
from core.errors import ConformStoreError

_DECIMAL_QUANTUM = Decimal(1).scaleb(-DECIMAL_SCALE)

_ARROW_TYPES: dict[type, pa.DataType] = {
    int: pa.int64(),
    str: pa.string(),
    date: pa.date32(),
    Decimal: pa.decimal128(DECIMAL_PRECISION, DECIMAL_SCALE),
}


def schema_for(row_type: type) -> pa.Schema:
    """Build the Arrow schema for a row dataclass.

    Args:
        row_type: Frozen row dataclass.

    Returns:
        Schema with one nullable field per dataclass field.

    Raises:
        ConformStoreError: If a field type has no Arrow mapping.
    """
    fields = []
    for name, value_type in field_value_types(row_type).items():
        arrow_type = _ARROW_TYPES.get(value_type)
        if arrow_type is None:
            raise ConformStoreError(
                f"Unsupported column type {value_type!r} for {row_type.__name__}.{name}. "
                "Use int, str, date, or Decimal row fields."
            )
        fields.append(pa.field(name, arrow_type, nullable=True))
    return pa.schema(fields)


def field_value_types(row_type: type) -> dict[str, type]:
    """Return each dataclass field name mapped to its non-optional value type."""
    hints = typing.get_type_hints(row_type)
    return {
        field.name: _strip_optional(hints[field.name]) for field in dataclasses.fields(row_type)
    }


def _strip_optional(hint: Any) -> Any:
    arguments = [argument for argument in typing.get_args(hint) if argument is not type(None)]
    if not arguments:
        return hint
    return arguments[0]


def rows_to_table(rows: Sequence[Any], row_type: type) -> pa.Table:
    """Convert typed rows into an Arrow table."""
    schema = schema_for(row_type)
    columns = []
    for arrow_field in schema:
        values = [getattr(row, arrow_field.name) for row in rows]
        if pa.types.is_decimal(arrow_field.type):
            values = [_quantize(value) for value in values]
        columns.append(pa.array(values, type=arrow_field.type))
    return pa.Table.from_arrays(columns, schema=schema)


def _quantize(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    return value.quantize(_DECIMAL_QUANTUM, rounding=ROUND_HALF_UP)


def table_to_rows(table: pa.Table, row_type: type) -> list[Any]:
    """Convert an Arrow table back into typed rows.

    Raises:
        ConformStoreError: If table columns do not match the row type.
    """
    expected_names = [field.name for field in dataclasses.fields(row_type)]
    if table.column_names != expected_names:
        raise ConformStoreError(
            f"Stored columns {table.column_names} do not match {row_type.__name__} "
            f"fields {expected_names}. Re-run the stage that writes this table."
        )
    return [row_type(**payload) for payload in table.to_pylist()]


def encode_table(rows: Sequence[Any], row_type: type) -> bytes:
    """Serialize typed rows as Parquet bytes."""
    sink = pa.BufferOutputStream()
    pq.write_table(rows_to_table(rows, row_type), sink)
    return sink.getvalue().to_pybytes()


def decode_table(payload: bytes, row_type: type) -> list[Any]:
    """Deserialize Parquet bytes into typed rows."""
    table = pq.read_table(pa.BufferReader(payload))
    return table_to_rows(table, row_type)


def digest_bytes(payload: bytes) -> str:
    """Return the hex content digest of serialized table bytes."""
    return hashlib.new(HASH_ALGORITHM, payload).hexdigest()
