"""Checks over the dimensional layer."""

from __future__ import annotations

from collections import Counter
from typing import Any

from core.constants import CUSTOMER_DIMENSION_TABLE, PRODUCT_DIMENSION_TABLE, SALES_FACT_TABLE
from quality.check_types import QualityCheck, QualityInputs


def check_customer_surrogate_key(inputs: QualityInputs) -> list[Any]:
    counts = Counter(row.customer_key for row in inputs.dimensional.customers)
    return [row for row in inputs.dimensional.customers if counts[row.customer_key] > 1]


def check_product_surrogate_key(inputs: QualityInputs) -> list[Any]:
    counts = Counter(row.product_key for row in inputs.dimensional.products)
    return [row for row in inputs.dimensional.products if counts[row.product_key] > 1]


def check_fact_orphans(inputs: QualityInputs) -> list[Any]:
    """Return fact rows whose customer or product key does not resolve.

    A key resolves when it is non-null and present in the current
    dimension, so each orphaned fact row is reported exactly once.
    """
    customer_keys = {row.customer_key for row in inputs.dimensional.customers}
    product_keys = {row.product_key for row in inputs.dimensional.products}
    return [
        row
        for row in inputs.dimensional.sales
        if row.customer_key not in customer_keys or row.product_key not in product_keys
    ]


DIMENSIONAL_CHECKS: tuple[QualityCheck, ...] = (
    QualityCheck(
        "dim_customers_surrogate_key",
        CUSTOMER_DIMENSION_TABLE,
        "customer_key duplicated",
        check_customer_surrogate_key,
    ),
    QualityCheck(
        "dim_products_surrogate_key",
        PRODUCT_DIMENSION_TABLE,
        "product_key duplicated",
        check_product_surrogate_key,
    ),
    QualityCheck(
        "fact_sales_orphans",
        SALES_FACT_TABLE,
        "customer or product key missing from its dimension",
        check_fact_orphans,
    ),
)
