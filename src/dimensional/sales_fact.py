"""Sales fact assembly."""

from __future__ import annotations

from typing import Iterable

from core.types import CustomerDimensionRow, ProductDimensionRow, SalesDetail, SalesFactRow
from dimensional.surrogate_keys import first_match_index


def build_sales_fact(
    sales: Iterable[SalesDetail],
    products: Iterable[ProductDimensionRow],
    customers: Iterable[CustomerDimensionRow],
) -> list[SalesFactRow]:
    """Resolve dimension surrogate keys for every sales line item.

    Unmatched products or customers yield ``None`` keys; no line item
    is dropped, so the fact keeps one row per cleansed line item.

    Args:
        sales: Cleansed sales line items.
        products: Product dimension rows with assigned keys.
        customers: Customer dimension rows with assigned keys.

    Returns:
        Fact rows in line-item order.
    """
    products_by_number = first_match_index(products, lambda row: row.product_number)
    customers_by_id = first_match_index(customers, lambda row: row.customer_id)
    rows: list[SalesFactRow] = []
    for line_item in sales:
        product = products_by_number.get(line_item.sls_prd_key)
        customer = customers_by_id.get(line_item.sls_cust_id)
        rows.append(
            SalesFactRow(
                order_number=line_item.sls_ord_num,
                product_key=product.product_key if product else None,
                customer_key=customer.customer_key if customer else None,
                order_date=line_item.sls_order_dt,
                shipping_date=line_item.sls_ship_dt,
                due_date=line_item.sls_due_dt,
                sales_amount=line_item.sls_sales,
                quantity=line_item.sls_quantity,
                price=line_item.sls_price,
            )
        )
    return rows
