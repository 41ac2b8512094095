"""Product dimension assembly."""

from __future__ import annotations

from typing import Iterable

from core.types import ProductCategory, ProductDimensionRow, ProductInfo
from dimensional.surrogate_keys import assign_surrogate_keys, first_match_index
from transforms.recency_deduplication import nulls_first


def build_product_dimension(
    products: Iterable[ProductInfo],
    categories: Iterable[ProductCategory],
) -> list[ProductDimensionRow]:
    """Keep current product versions and attach their category hierarchy.

    Args:
        products: Cleansed product versions.
        categories: Cleansed category hierarchy.

    Returns:
        Dimension rows keyed from 1 in ``(start date, product key)`` order.
    """
    categories_by_id = first_match_index(categories, lambda row: row.id)
    current_products = [product for product in products if product.prd_end_dt is None]
    keyed_products = assign_surrogate_keys(
        current_products,
        lambda row: (nulls_first(row.prd_start_dt), nulls_first(row.prd_key)),
    )
    rows: list[ProductDimensionRow] = []
    for product_key, product in keyed_products:
        category = categories_by_id.get(product.cat_id)
        rows.append(
            ProductDimensionRow(
                product_key=product_key,
                product_id=product.prd_id,
                product_number=product.prd_key,
                product_name=product.prd_nm,
                category_id=product.cat_id,
                category=category.cat if category else None,
                subcategory=category.subcat if category else None,
                maintenance=category.maintenance if category else None,
                cost=product.prd_cost,
                product_line=product.prd_line,
                start_date=product.prd_start_dt,
            )
        )
    return rows
