"""Checks over the cleansed layer.

Each check is a pure function from :class:`QualityInputs` to the list
of offending rows in table order.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Any, Callable, Hashable, Iterable, Sequence

from core.constants import (
    BIRTHDATE_LOWER_BOUND,
    CUSTOMER_DEMOGRAPHICS_TABLE,
    CUSTOMER_INFO_TABLE,
    CUSTOMER_LOCATION_TABLE,
    PRODUCT_CATEGORY_TABLE,
    PRODUCT_INFO_TABLE,
    SALES_DATE_LOWER_BOUND,
    SALES_DATE_UPPER_BOUND,
    SALES_DETAILS_TABLE,
)
from quality.check_types import QualityCheck, QualityInputs
from transforms.code_tables import (
    DEMOGRAPHIC_GENDER_CODES,
    GENDER_CODES,
    MARITAL_STATUS_CODES,
    PRODUCT_LINE_CODES,
)
from transforms.text_cleaning import has_unwanted_spaces


def null_or_duplicate_keys(
    rows: Sequence[Any],
    key: Callable[[Any], Hashable],
) -> list[Any]:
    """Return rows whose key has a null part or occurs more than once.

    Args:
        rows: Table rows.
        key: Key extractor; tuple keys count as null when any part is null.

    Returns:
        Offending rows in table order.
    """
    counts = Counter(key(row) for row in rows)
    return [row for row in rows if _has_null_part(key(row)) or counts[key(row)] > 1]


def _has_null_part(value: Hashable) -> bool:
    if isinstance(value, tuple):
        return any(part is None for part in value)
    return value is None


def rows_with_unwanted_spaces(
    rows: Iterable[Any],
    fields: Sequence[str],
) -> list[Any]:
    """Return rows where any named text field differs from its trimmed form."""
    return [
        row for row in rows if any(has_unwanted_spaces(getattr(row, name)) for name in fields)
    ]


def check_customer_primary_key(inputs: QualityInputs) -> list[Any]:
    return null_or_duplicate_keys(inputs.cleansed.customers, lambda row: row.cst_id)


def check_product_primary_key(inputs: QualityInputs) -> list[Any]:
    return null_or_duplicate_keys(inputs.cleansed.products, lambda row: row.prd_id)


def check_sales_natural_key(inputs: QualityInputs) -> list[Any]:
    return null_or_duplicate_keys(
        inputs.cleansed.sales, lambda row: (row.sls_ord_num, row.sls_prd_key)
    )


def check_demographics_primary_key(inputs: QualityInputs) -> list[Any]:
    return null_or_duplicate_keys(inputs.cleansed.demographics, lambda row: row.cid)


def check_location_primary_key(inputs: QualityInputs) -> list[Any]:
    return null_or_duplicate_keys(inputs.cleansed.locations, lambda row: row.cid)


def check_category_primary_key(inputs: QualityInputs) -> list[Any]:
    return null_or_duplicate_keys(inputs.cleansed.categories, lambda row: row.id)


def check_customer_spaces(inputs: QualityInputs) -> list[Any]:
    return rows_with_unwanted_spaces(
        inputs.cleansed.customers, ("cst_firstname", "cst_lastname")
    )


def check_product_spaces(inputs: QualityInputs) -> list[Any]:
    return rows_with_unwanted_spaces(inputs.cleansed.products, ("prd_nm",))


def check_location_spaces(inputs: QualityInputs) -> list[Any]:
    return rows_with_unwanted_spaces(inputs.cleansed.locations, ("cntry",))


def check_category_spaces(inputs: QualityInputs) -> list[Any]:
    return rows_with_unwanted_spaces(
        inputs.cleansed.categories, ("cat", "subcat", "maintenance")
    )


def check_customer_code_domain(inputs: QualityInputs) -> list[Any]:
    marital_labels = MARITAL_STATUS_CODES.allowed_labels()
    gender_labels = GENDER_CODES.allowed_labels()
    return [
        row
        for row in inputs.cleansed.customers
        if row.cst_marital_status not in marital_labels or row.cst_gndr not in gender_labels
    ]


def check_product_line_domain(inputs: QualityInputs) -> list[Any]:
    labels = PRODUCT_LINE_CODES.allowed_labels()
    return [row for row in inputs.cleansed.products if row.prd_line not in labels]


def check_demographics_gender_domain(inputs: QualityInputs) -> list[Any]:
    labels = DEMOGRAPHIC_GENDER_CODES.allowed_labels()
    return [row for row in inputs.cleansed.demographics if row.gen not in labels]


def check_product_cost(inputs: QualityInputs) -> list[Any]:
    return [
        row for row in inputs.cleansed.products if row.prd_cost is None or row.prd_cost < 0
    ]


def check_product_date_order(inputs: QualityInputs) -> list[Any]:
    return [
        row
        for row in inputs.cleansed.products
        if row.prd_end_dt is not None
        and row.prd_start_dt is not None
        and row.prd_end_dt < row.prd_start_dt
    ]


def check_sales_amount_consistency(inputs: QualityInputs) -> list[Any]:
    violations = []
    for row in inputs.cleansed.sales:
        values = (row.sls_sales, row.sls_quantity, row.sls_price)
        if any(value is None or value <= 0 for value in values):
            violations.append(row)
        elif row.sls_sales != row.sls_quantity * row.sls_price:
            violations.append(row)
    return violations


def check_sales_date_order(inputs: QualityInputs) -> list[Any]:
    return [
        row
        for row in inputs.cleansed.sales
        if _is_after(row.sls_order_dt, row.sls_ship_dt) or _is_after(row.sls_order_dt, row.sls_due_dt)
    ]


def _is_after(first: date | None, second: date | None) -> bool:
    return first is not None and second is not None and first > second


def check_sales_date_range(inputs: QualityInputs) -> list[Any]:
    return [
        row
        for row in inputs.cleansed.sales
        if any(
            _outside(value, SALES_DATE_LOWER_BOUND, SALES_DATE_UPPER_BOUND)
            for value in (row.sls_order_dt, row.sls_ship_dt, row.sls_due_dt)
        )
    ]


def check_birthdate_range(inputs: QualityInputs) -> list[Any]:
    return [
        row
        for row in inputs.cleansed.demographics
        if _outside(row.bdate, BIRTHDATE_LOWER_BOUND, inputs.processing_date)
    ]


def _outside(value: date | None, lower: date, upper: date) -> bool:
    return value is not None and (value < lower or value > upper)


CLEANSED_CHECKS: tuple[QualityCheck, ...] = (
    QualityCheck(
        "crm_cust_info_primary_key",
        CUSTOMER_INFO_TABLE,
        "cst_id null or duplicated",
        check_customer_primary_key,
    ),
    QualityCheck(
        "crm_prd_info_primary_key",
        PRODUCT_INFO_TABLE,
        "prd_id null or duplicated",
        check_product_primary_key,
    ),
    QualityCheck(
        "crm_sales_details_natural_key",
        SALES_DETAILS_TABLE,
        "(sls_ord_num, sls_prd_key) null or duplicated",
        check_sales_natural_key,
    ),
    QualityCheck(
        "erp_cust_az12_primary_key",
        CUSTOMER_DEMOGRAPHICS_TABLE,
        "cid null or duplicated",
        check_demographics_primary_key,
    ),
    QualityCheck(
        "erp_loc_a101_primary_key",
        CUSTOMER_LOCATION_TABLE,
        "cid null or duplicated",
        check_location_primary_key,
    ),
    QualityCheck(
        "erp_px_cat_g1v2_primary_key",
        PRODUCT_CATEGORY_TABLE,
        "id null or duplicated",
        check_category_primary_key,
    ),
    QualityCheck(
        "crm_cust_info_unwanted_spaces",
        CUSTOMER_INFO_TABLE,
        "first or last name has leading or trailing spaces",
        check_customer_spaces,
    ),
    QualityCheck(
        "crm_prd_info_unwanted_spaces",
        PRODUCT_INFO_TABLE,
        "product name has leading or trailing spaces",
        check_product_spaces,
    ),
    QualityCheck(
        "erp_loc_a101_unwanted_spaces",
        CUSTOMER_LOCATION_TABLE,
        "country has leading or trailing spaces",
        check_location_spaces,
    ),
    QualityCheck(
        "erp_px_cat_g1v2_unwanted_spaces",
        PRODUCT_CATEGORY_TABLE,
        "category columns have leading or trailing spaces",
        check_category_spaces,
    ),
    QualityCheck(
        "crm_cust_info_code_domain",
        CUSTOMER_INFO_TABLE,
        "marital status or gender outside the label set",
        check_customer_code_domain,
    ),
    QualityCheck(
        "crm_prd_info_product_line_domain",
        PRODUCT_INFO_TABLE,
        "product line outside the label set",
        check_product_line_domain,
    ),
    QualityCheck(
        "erp_cust_az12_gender_domain",
        CUSTOMER_DEMOGRAPHICS_TABLE,
        "gender outside the label set",
        check_demographics_gender_domain,
    ),
    QualityCheck(
        "crm_prd_info_cost_non_negative",
        PRODUCT_INFO_TABLE,
        "cost null or negative",
        check_product_cost,
    ),
    QualityCheck(
        "crm_prd_info_date_order",
        PRODUCT_INFO_TABLE,
        "end date before start date",
        check_product_date_order,
    ),
    QualityCheck(
        "crm_sales_details_amount_consistency",
        SALES_DETAILS_TABLE,
        "amount, quantity or price missing, non-positive or inconsistent",
        check_sales_amount_consistency,
    ),
    QualityCheck(
        "crm_sales_details_date_order",
        SALES_DETAILS_TABLE,
        "order date after ship or due date",
        check_sales_date_order,
    ),
    QualityCheck(
        "crm_sales_details_date_range",
        SALES_DETAILS_TABLE,
        "sales date outside 1900-01-01..2050-01-01",
        check_sales_date_range,
    ),
    QualityCheck(
        "erp_cust_az12_birthdate_range",
        CUSTOMER_DEMOGRAPHICS_TABLE,
        "birthdate before 1924-01-01 or after the processing date",
        check_birthdate_range,
    ),
)
