"""Unit tests for CRM product catalog cleansing."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from cleanse.product_catalog import close_lifecycle, cleanse_product_catalog, split_product_key
from core.types import RawProductInfo


def _product(
    prd_id: int,
    prd_key: str,
    start: date | None,
    end: date | None = None,
    cost: Decimal | None = Decimal("10"),
    line: str | None = "R",
) -> RawProductInfo:
    return RawProductInfo(
        prd_id=prd_id,
        prd_key=prd_key,
        prd_nm=" Road Frame ",
        prd_cost=cost,
        prd_line=line,
        prd_start_dt=start,
        prd_end_dt=end,
    )


def test_split_product_key_extracts_category_and_tail() -> None:
    """Composite keys should split into an underscored category id and a tail."""
    assert split_product_key("CO-RF-FR-R92B-58") == ("CO_RF", "FR-R92B-58")


def test_split_product_key_handles_missing_key() -> None:
    """Missing keys should yield no category and no tail."""
    assert split_product_key(None) == (None, None)


def test_close_lifecycle_returns_previous_day() -> None:
    """Lifecycle end should be the day before the next start."""
    assert close_lifecycle(date(2022, 1, 1)) == date(2021, 12, 31) and close_lifecycle(None) is None


def test_versions_are_closed_by_next_start_date() -> None:
    """Earlier versions should end the day before the next one starts."""
    rows = [
        _product(2, "CO-RF-P1", date(2022, 1, 1), end=date(1999, 1, 1)),
        _product(1, "CO-RF-P1", date(2021, 1, 1), end=date(2007, 12, 28)),
    ]

    cleansed = cleanse_product_catalog(rows)

    assert [(row.prd_id, row.prd_end_dt) for row in cleansed] == [
        (1, date(2021, 12, 31)),
        (2, None),
    ]


def test_versions_of_different_products_do_not_close_each_other() -> None:
    """Gap closing should stay inside one product key."""
    rows = [_product(1, "CO-RF-P1", date(2021, 1, 1)), _product(2, "CO-RF-P2", date(2022, 1, 1))]

    cleansed = cleanse_product_catalog(rows)

    assert [row.prd_end_dt for row in cleansed] == [None, None]


def test_missing_cost_defaults_to_zero() -> None:
    """Null cost should coerce to zero."""
    cleansed = cleanse_product_catalog([_product(1, "CO-RF-P1", date(2021, 1, 1), cost=None)])

    assert cleansed[0].prd_cost == Decimal(0)


def test_product_line_codes_expand() -> None:
    """Product line codes should expand, with unknown codes becoming n/a."""
    rows = [
        _product(index, f"CO-RF-P{index}", date(2021, 1, 1), line=line)
        for index, line in enumerate(("M", "r ", "S", "T", "Z"), start=1)
    ]

    cleansed = cleanse_product_catalog(rows)

    assert [row.prd_line for row in cleansed] == ["Mountain", "Road", "Other Sales", "Touring", "n/a"]


def test_product_name_is_trimmed_and_category_attached() -> None:
    """Names should be trimmed and the category id split out."""
    cleansed = cleanse_product_catalog([_product(1, "AC-HE-HL-U509-R", date(2021, 1, 1))])

    assert (cleansed[0].prd_nm, cleansed[0].cat_id, cleansed[0].prd_key) == (
        "Road Frame",
        "AC_HE",
        "HL-U509-R",
    )
