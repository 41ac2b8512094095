"""CRM product catalog cleansing.

Splits the composite product key, expands product-line codes, and
rebuilds lifecycle end dates so versions of one product never overlap.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from core.constants import PRODUCT_CATEGORY_PREFIX_LENGTH, PRODUCT_KEY_TAIL_OFFSET
from core.types import ProductInfo, RawProductInfo
from transforms.code_tables import PRODUCT_LINE_CODES
from transforms.partition_window import pair_with_next
from transforms.recency_deduplication import nulls_first
from transforms.text_cleaning import normalize_code, trim_spaces

_ZERO_COST = Decimal(0)


def cleanse_product_catalog(rows: Iterable[RawProductInfo]) -> list[ProductInfo]:
    """Cleanse product versions and close lifecycle gaps.

    Args:
        rows: Raw CRM products in source order.

    Returns:
        Cleansed products ordered by product key then start date.
    """
    split_rows = [_split_product(row) for row in rows]
    pairs = pair_with_next(
        split_rows,
        partition_key=lambda row: row.prd_key,
        order_key=lambda row: nulls_first(row.prd_start_dt),
    )
    return [
        replace(row, prd_end_dt=close_lifecycle(next_row.prd_start_dt if next_row else None))
        for row, next_row in pairs
    ]


def split_product_key(composite_key: str | None) -> tuple[str | None, str | None]:
    """Split ``CO-RF-FR-R92B-58`` into ``("CO_RF", "FR-R92B-58")``."""
    key = trim_spaces(composite_key)
    if key is None:
        return None, None
    category_id = key[:PRODUCT_CATEGORY_PREFIX_LENGTH].replace("-", "_")
    return category_id, key[PRODUCT_KEY_TAIL_OFFSET:]


def close_lifecycle(next_start_date: date | None) -> date | None:
    """Return the day before the next version starts, or ``None``."""
    if next_start_date is None:
        return None
    return next_start_date - timedelta(days=1)


def _split_product(row: RawProductInfo) -> ProductInfo:
    category_id, product_key = split_product_key(row.prd_key)
    return ProductInfo(
        prd_id=row.prd_id,
        cat_id=category_id,
        prd_key=product_key,
        prd_nm=trim_spaces(row.prd_nm),
        prd_cost=row.prd_cost if row.prd_cost is not None else _ZERO_COST,
        prd_line=PRODUCT_LINE_CODES.label(normalize_code(row.prd_line)),
        prd_start_dt=row.prd_start_dt,
        prd_end_dt=None,
    )

