"""Unit tests for typed CSV source readers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from core.errors import ConformIngestError
from core.types import RawCustomerDemographics, RawSalesDetail
from ingest.csv_reader import parse_date, parse_decimal, parse_int, parse_text, read_source_table

SALES_HEADER = (
    "sls_ord_num,sls_prd_key,sls_cust_id,sls_order_dt,sls_ship_dt,sls_due_dt,"
    "sls_sales,sls_quantity,sls_price\n"
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_read_source_table_converts_field_types(tmp_path: Path) -> None:
    """Cells should convert to the row field types."""
    source = _write(
        tmp_path / "sales.csv",
        SALES_HEADER + "SO43697,BK-R93R-62,21768,20101229,20110105,20110110,3578,1,3578.5\n",
    )

    rows = read_source_table(source, RawSalesDetail)

    assert rows == [
        RawSalesDetail(
            "SO43697", "BK-R93R-62", 21768, 20101229, 20110105, 20110110, Decimal("3578"), 1, Decimal("3578.5")
        )
    ]


def test_upper_case_headers_match_fields(tmp_path: Path) -> None:
    """ERP headers should match row fields case-insensitively."""
    source = _write(tmp_path / "CUST_AZ12.csv", "CID,BDATE,GEN\nNASAW00011000,1971-10-06,Male\n")

    rows = read_source_table(source, RawCustomerDemographics)

    assert rows == [RawCustomerDemographics("NASAW00011000", date(1971, 10, 6), "Male")]


def test_text_keeps_padding_and_blank_cells_become_none(tmp_path: Path) -> None:
    """Text cells should stay verbatim while blank cells become None."""
    source = _write(tmp_path / "CUST_AZ12.csv", "CID,BDATE,GEN\nAW1,, M\n")

    rows = read_source_table(source, RawCustomerDemographics)

    assert (rows[0].bdate, rows[0].gen) == (None, " M")


def test_malformed_values_become_none(tmp_path: Path) -> None:
    """Unparseable cells should load as None instead of failing."""
    source = _write(
        tmp_path / "sales.csv",
        SALES_HEADER + "SO1,P1,abc,20101229,20110105,20110110,NaN,x,1\n",
    )

    row = read_source_table(source, RawSalesDetail)[0]

    assert (row.sls_cust_id, row.sls_sales, row.sls_quantity) == (None, None, None)


def test_integers_outside_int64_become_none(tmp_path: Path) -> None:
    """Integer cells too long for int64 storage should load as None."""
    source = _write(
        tmp_path / "sales.csv",
        SALES_HEADER + "SO1,P1,11000,123456789012345678901234,20110105,20110110,10,1,10\n",
    )

    row = read_source_table(source, RawSalesDetail)[0]

    assert (row.sls_order_dt, row.sls_ship_dt) == (None, 20110105)
    assert [parse_int(str(2**63 - 1)), parse_int(str(-(2**63) - 1))] == [2**63 - 1, None]


def test_missing_file_raises_ingest_error(tmp_path: Path) -> None:
    """Missing exports should raise an ingest error."""
    with pytest.raises(ConformIngestError):
        read_source_table(tmp_path / "absent.csv", RawCustomerDemographics)


def test_missing_column_raises_ingest_error(tmp_path: Path) -> None:
    """Exports lacking a field column should raise an ingest error."""
    source = _write(tmp_path / "CUST_AZ12.csv", "CID,GEN\nAW1,M\n")

    with pytest.raises(ConformIngestError):
        read_source_table(source, RawCustomerDemographics)


def test_cell_parsers() -> None:
    """Cell parsers should map blanks and junk to None."""
    assert [parse_text(""), parse_int(" 42 "), parse_decimal("-12.5"), parse_date("2025-10-06 00:00:00")] == [
        None,
        42,
        Decimal("-12.5"),
        date(2025, 10, 6),
    ]
    assert [
        parse_int("4.5"),
        parse_decimal("Infinity"),
        parse_decimal("1e400"),
        parse_date("2025-02-30"),
    ] == [None, None, None, None]
