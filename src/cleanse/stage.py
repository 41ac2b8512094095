"""Cleansing stage entry point.

Applies every entity rule to a raw snapshot and records one step
metric per cleansed table in the run context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from cleanse.customer_demographics import cleanse_customer_demographics
from cleanse.customer_locations import cleanse_customer_locations
from cleanse.customer_profiles import cleanse_customer_profiles
from cleanse.product_catalog import cleanse_product_catalog
from cleanse.product_categories import cleanse_product_categories
from cleanse.sales_details import cleanse_sales_details
from core.constants import (
    CLEANSED_LAYER,
    CUSTOMER_DEMOGRAPHICS_TABLE,
    CUSTOMER_INFO_TABLE,
    CUSTOMER_LOCATION_TABLE,
    PRODUCT_CATEGORY_TABLE,
    PRODUCT_INFO_TABLE,
    SALES_DETAILS_TABLE,
)
from core.logging_config import get_logger
from core.run_context import RunContext, utc_now
from core.snapshots import CleansedSnapshot, RawSnapshot

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CleansingRule:
    """One entity rule: the table it owns and how to build it."""

    table_name: str
    apply: Callable[[RawSnapshot, RunContext], list[Any]]


CLEANSING_RULES: tuple[CleansingRule, ...] = (
    CleansingRule(
        CUSTOMER_INFO_TABLE,
        lambda raw, _: cleanse_customer_profiles(raw.customers),
    ),
    CleansingRule(
        PRODUCT_INFO_TABLE,
        lambda raw, _: cleanse_product_catalog(raw.products),
    ),
    CleansingRule(
        SALES_DETAILS_TABLE,
        lambda raw, _: cleanse_sales_details(raw.sales),
    ),
    CleansingRule(
        CUSTOMER_DEMOGRAPHICS_TABLE,
        lambda raw, context: cleanse_customer_demographics(
            raw.demographics, context.processing_date
        ),
    ),
    CleansingRule(
        CUSTOMER_LOCATION_TABLE,
        lambda raw, _: cleanse_customer_locations(raw.locations),
    ),
    CleansingRule(
        PRODUCT_CATEGORY_TABLE,
        lambda raw, _: cleanse_product_categories(raw.categories),
    ),
)


def transform(raw: RawSnapshot, context: RunContext) -> CleansedSnapshot:
    """Build the cleansed layer from a full raw snapshot.

    Args:
        raw: Raw snapshot for this run.
        context: Run context supplying the processing date and collecting metrics.

    Returns:
        Cleansed snapshot covering all six entities.
    """
    tables: dict[str, list[Any]] = {}
    for rule in CLEANSING_RULES:
        started_at = utc_now()
        rows = rule.apply(raw, context)
        metric = context.record_step(f"{CLEANSED_LAYER}.{rule.table_name}", started_at, len(rows))
        _LOGGER.info(
            "table_cleansed",
            run_id=context.run_id,
            table_name=rule.table_name,
            row_count=metric.row_count,
            duration_ms=metric.duration_ms,
        )
        tables[rule.table_name] = rows
    return CleansedSnapshot.from_tables(tables)
