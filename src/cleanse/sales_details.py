"""CRM sales line item cleansing.

Price and amount depend on each other in the source. The price is
fixed first from the raw values, then the amount is checked against
the fixed price, so one pass settles both.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from core.types import RawSalesDetail, SalesDetail
from transforms.compact_dates import parse_compact_date
from transforms.safe_arithmetic import is_positive, safe_divide, safe_multiply
from transforms.text_cleaning import trim_spaces


def cleanse_sales_details(rows: Iterable[RawSalesDetail]) -> list[SalesDetail]:
    """Reconcile price and amount and parse compact dates.

    Args:
        rows: Raw CRM sales line items in source order.

    Returns:
        Cleansed line items in source order.
    """
    return [_cleanse_line_item(row) for row in rows]


def correct_price(
    price: Decimal | None,
    amount: Decimal | None,
    quantity: int | None,
) -> Decimal | None:
    """Derive ``amount / quantity`` for missing or non-positive prices.

    Args:
        price: Raw unit price.
        amount: Raw line amount.
        quantity: Raw quantity.

    Returns:
        Absolute given price when positive, else the derived price, else ``None``.
    """
    if price is None or price <= 0:
        return safe_divide(amount, quantity)
    return abs(price)


def correct_amount(
    amount: Decimal | None,
    quantity: int | None,
    price: Decimal | None,
) -> Decimal | None:
    """Recompute the amount when it is missing, non-positive, or inconsistent.

    Args:
        amount: Raw line amount.
        quantity: Raw quantity.
        price: Corrected unit price.

    Returns:
        The raw amount when it is positive and equals ``quantity * price``
        (or that product is unknown), else the product.
    """
    expected_amount = safe_multiply(quantity, price)
    if not is_positive(amount):
        return expected_amount
    if expected_amount is not None and amount != expected_amount:
        return expected_amount
    return amount


def _cleanse_line_item(row: RawSalesDetail) -> SalesDetail:
    price = correct_price(row.sls_price, row.sls_sales, row.sls_quantity)
    return SalesDetail(
        sls_ord_num=trim_spaces(row.sls_ord_num),
        sls_prd_key=trim_spaces(row.sls_prd_key),
        sls_cust_id=row.sls_cust_id,
        sls_order_dt=parse_compact_date(row.sls_order_dt),
        sls_ship_dt=parse_compact_date(row.sls_ship_dt),
        sls_due_dt=parse_compact_date(row.sls_due_dt),
        sls_sales=correct_amount(row.sls_sales, row.sls_quantity, price),
        sls_quantity=row.sls_quantity,
        sls_price=price,
    )
