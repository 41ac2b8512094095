"""Unit tests for dimensional-layer quality checks."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from core.snapshots import CleansedSnapshot, DimensionalSnapshot
from core.types import CustomerDimensionRow, ProductDimensionRow, SalesFactRow
from quality.check_types import QualityInputs
from quality.dimensional_checks import (
    check_customer_surrogate_key,
    check_fact_orphans,
    check_product_surrogate_key,
)


def _customer(customer_key: int) -> CustomerDimensionRow:
    return CustomerDimensionRow(
        customer_key, 11000 + customer_key, "AW", "Jon", "Yang", None, "Married", "Male", None, None
    )


def _product(product_key: int) -> ProductDimensionRow:
    return ProductDimensionRow(
        product_key,
        200 + product_key,
        f"P{product_key}",
        "Frame",
        "CO_RF",
        None,
        None,
        None,
        Decimal("1"),
        "Road",
        date(2022, 1, 1),
    )


def _fact(order_number: str, product_key: int | None, customer_key: int | None) -> SalesFactRow:
    return SalesFactRow(
        order_number,
        product_key,
        customer_key,
        None,
        None,
        None,
        Decimal("2"),
        1,
        Decimal("2"),
    )


def _inputs(dimensional: DimensionalSnapshot) -> QualityInputs:
    return QualityInputs(
        cleansed=CleansedSnapshot(),
        dimensional=dimensional,
        processing_date=date(2025, 10, 17),
    )


def test_surrogate_key_checks_report_duplicates() -> None:
    """Duplicated surrogate keys should be reported for both dimensions."""
    inputs = _inputs(
        DimensionalSnapshot(
            customers=(_customer(1), _customer(1), _customer(2)),
            products=(_product(1), _product(2)),
        )
    )

    assert len(check_customer_surrogate_key(inputs)) == 2 and check_product_surrogate_key(inputs) == []


def test_fact_orphans_reports_retired_product_sale_once() -> None:
    """A sale whose product has no current dimension row should be one orphan."""
    inputs = _inputs(
        DimensionalSnapshot(
            customers=(_customer(1),),
            products=(_product(1),),
            sales=(_fact("SO1", 1, 1), _fact("SO2", None, 1)),
        )
    )

    assert [row.order_number for row in check_fact_orphans(inputs)] == ["SO2"]


def test_fact_orphans_reports_keys_missing_from_dimension() -> None:
    """Non-null keys absent from their dimension should count as orphans."""
    inputs = _inputs(
        DimensionalSnapshot(
            customers=(_customer(1),),
            products=(_product(1),),
            sales=(_fact("SO1", 1, 7), _fact("SO2", None, None)),
        )
    )

    assert [row.order_number for row in check_fact_orphans(inputs)] == ["SO1", "SO2"]
