"""Dimensional assembly stage entry point.

Both dimensions are built before the fact because the fact reads
their assigned surrogate keys.
"""

from __future__ import annotations

from datetime import datetime

from core.constants import (
    CUSTOMER_DIMENSION_TABLE,
    DIMENSIONAL_LAYER,
    PRODUCT_DIMENSION_TABLE,
    SALES_FACT_TABLE,
)
from core.logging_config import get_logger
from core.run_context import RunContext, utc_now
from core.snapshots import CleansedSnapshot, DimensionalSnapshot
from dimensional.customer_dimension import build_customer_dimension
from dimensional.product_dimension import build_product_dimension
from dimensional.sales_fact import build_sales_fact

_LOGGER = get_logger(__name__)


def transform(cleansed: CleansedSnapshot, context: RunContext) -> DimensionalSnapshot:
    """Build the dimensional layer from a full cleansed snapshot.

    Args:
        cleansed: Cleansed snapshot for this run.
        context: Run context collecting step metrics.

    Returns:
        Dimensional snapshot with both dimensions and the sales fact.
    """
    started_at = utc_now()
    customers = build_customer_dimension(
        cleansed.customers, cleansed.demographics, cleansed.locations
    )
    _record(context, CUSTOMER_DIMENSION_TABLE, started_at, len(customers))

    started_at = utc_now()
    products = build_product_dimension(cleansed.products, cleansed.categories)
    _record(context, PRODUCT_DIMENSION_TABLE, started_at, len(products))

    started_at = utc_now()
    sales = build_sales_fact(cleansed.sales, products, customers)
    _record(context, SALES_FACT_TABLE, started_at, len(sales))

    return DimensionalSnapshot(
        customers=tuple(customers),
        products=tuple(products),
        sales=tuple(sales),
    )


def _record(context: RunContext, table_name: str, started_at: datetime, row_count: int) -> None:
    metric = context.record_step(f"{DIMENSIONAL_LAYER}.{table_name}", started_at, row_count)
    _LOGGER.info(
        "table_assembled",
        run_id=context.run_id,
        table_name=table_name,
        row_count=row_count,
        duration_ms=metric.duration_ms,
    )
