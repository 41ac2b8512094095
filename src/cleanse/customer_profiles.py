"""CRM customer profile cleansing."""

from __future__ import annotations

from typing import Iterable

from core.types import CustomerInfo, RawCustomerInfo
from transforms.code_tables import GENDER_CODES, MARITAL_STATUS_CODES
from transforms.recency_deduplication import keep_first_per_key, nulls_first
from transforms.text_cleaning import normalize_code, trim_spaces


def cleanse_customer_profiles(rows: Iterable[RawCustomerInfo]) -> list[CustomerInfo]:
    """Keep the most recent profile per business id and normalize codes.

    Args:
        rows: Raw CRM profiles in source order.

    Returns:
        One cleansed profile per ``cst_id`` ordered by ``cst_id``.
    """
    latest_rows = keep_first_per_key(
        rows,
        partition_key=lambda row: row.cst_id,
        order_key=lambda row: nulls_first(row.cst_create_date),
    )
    return [_cleanse_profile(row) for row in latest_rows]


def _cleanse_profile(row: RawCustomerInfo) -> CustomerInfo:
    return CustomerInfo(
        cst_id=row.cst_id,
        cst_key=trim_spaces(row.cst_key),
        cst_firstname=trim_spaces(row.cst_firstname),
        cst_lastname=trim_spaces(row.cst_lastname),
        cst_marital_status=MARITAL_STATUS_CODES.label(normalize_code(row.cst_marital_status)),
        cst_gndr=GENDER_CODES.label(normalize_code(row.cst_gndr)),
        cst_create_date=row.cst_create_date,
    )
