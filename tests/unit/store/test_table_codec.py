"""Unit tests for the typed row Parquet codec."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pyarrow as pa
import pytest

from core.errors import ConformStoreError
from core.types import SalesDetail
from store.table_codec import decode_table, digest_bytes, encode_table, schema_for


@dataclass(frozen=True)
class _UnsupportedRow:
    tags: list


def _sale(amount: Decimal | None) -> SalesDetail:
    return SalesDetail(
        "SO1", "FR-R92R-58", 11000, date(2010, 12, 29), None, None, amount, 2, Decimal("12.5")
    )


def test_schema_maps_field_types_to_arrow() -> None:
    """Row field types should map to fixed Arrow types."""
    schema = schema_for(SalesDetail)

    assert (
        schema.field("sls_cust_id").type == pa.int64()
        and schema.field("sls_order_dt").type == pa.date32()
        and schema.field("sls_sales").type == pa.decimal128(18, 4)
        and schema.field("sls_ord_num").type == pa.string()
    )


def test_unsupported_field_type_raises_store_error() -> None:
    """Row types without an Arrow mapping should be rejected."""
    with pytest.raises(ConformStoreError):
        schema_for(_UnsupportedRow)


def test_decoded_rows_keep_values_and_nulls() -> None:
    """Decoded rows should equal the written rows, nulls included."""
    rows = [_sale(Decimal("25")), _sale(None)]

    decoded = decode_table(encode_table(rows, SalesDetail), SalesDetail)

    assert decoded == rows


def test_decimals_are_rounded_half_up_to_four_places() -> None:
    """Stored money values should be quantized to four places."""
    decoded = decode_table(encode_table([_sale(Decimal("1.23455"))], SalesDetail), SalesDetail)

    assert str(decoded[0].sls_sales) == "1.2346"


def test_encoding_is_deterministic() -> None:
    """Equal rows should produce identical bytes and digests."""
    rows = [_sale(Decimal("25"))]

    assert digest_bytes(encode_table(rows, SalesDetail)) == digest_bytes(encode_table(rows, SalesDetail))
