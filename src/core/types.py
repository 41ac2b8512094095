"""Shared typed row models.

This module defines immutable rows for the raw, cleansed, and
dimensional layers. Raw and cleansed rows keep the source system
column names; dimensional rows use business-facing names.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class RawCustomerInfo:
    """CRM customer profile exactly as exported.

    Attributes:
        cst_id: Numeric business id; duplicated across profile revisions.
        cst_key: Alternate key shared with the ERP system (e.g. ``AW00011000``).
        cst_firstname: First name, possibly padded.
        cst_lastname: Last name, possibly padded.
        cst_marital_status: Single-letter marital status code.
        cst_gndr: Single-letter gender code.
        cst_create_date: Profile creation date.
    """

    cst_id: int | None
    cst_key: str | None
    cst_firstname: str | None
    cst_lastname: str | None
    cst_marital_status: str | None
    cst_gndr: str | None
    cst_create_date: date | None


@dataclass(frozen=True)
class RawProductInfo:
    """CRM product catalog row exactly as exported.

    Attributes:
        prd_id: Numeric product id.
        prd_key: Composite key; the first five characters encode a category id.
        prd_nm: Product name.
        prd_cost: Unit cost, often missing.
        prd_line: Single-letter product line code.
        prd_start_dt: Lifecycle start date.
        prd_end_dt: Source end date; unreliable and recomputed downstream.
    """

    prd_id: int | None
    prd_key: str | None
    prd_nm: str | None
    prd_cost: Decimal | None
    prd_line: str | None
    prd_start_dt: date | None
    prd_end_dt: date | None


@dataclass(frozen=True)
class RawSalesDetail:
    """CRM sales line item exactly as exported.

    Dates arrive as 8-digit ``YYYYMMDD`` integers, with ``0`` for unknown.
    """

    sls_ord_num: str | None
    sls_prd_key: str | None
    sls_cust_id: int | None
    sls_order_dt: int | None
    sls_ship_dt: int | None
    sls_due_dt: int | None
    sls_sales: Decimal | None
    sls_quantity: int | None
    sls_price: Decimal | None


@dataclass(frozen=True)
class RawCustomerDemographics:
    """ERP customer demographics with free-text gender."""

    cid: str | None
    bdate: date | None
    gen: str | None


@dataclass(frozen=True)
class RawCustomerLocation:
    """ERP customer location with hyphenated ids and free-text country."""

    cid: str | None
    cntry: str | None


@dataclass(frozen=True)
class ProductCategory:
    """ERP product category hierarchy row.

    The same shape is used in the raw and cleansed layers because the
    category export passes through unchanged.
    """

    id: str | None
    cat: str | None
    subcat: str | None
    maintenance: str | None


@dataclass(frozen=True)
class CustomerInfo:
    """Cleansed CRM customer profile, one row per business id."""

    cst_id: int | None
    cst_key: str | None
    cst_firstname: str | None
    cst_lastname: str | None
    cst_marital_status: str
    cst_gndr: str
    cst_create_date: date | None


@dataclass(frozen=True)
class ProductInfo:
    """Cleansed CRM product version.

    Attributes:
        prd_id: Numeric product id.
        cat_id: Category id derived from the composite key (``CO_RF``).
        prd_key: Product key without the category prefix.
        prd_nm: Trimmed product name.
        prd_cost: Unit cost; missing costs become zero.
        prd_line: Expanded product line label.
        prd_start_dt: Lifecycle start date.
        prd_end_dt: Day before the next version starts; ``None`` when current.
    """

    prd_id: int | None
    cat_id: str | None
    prd_key: str | None
    prd_nm: str | None
    prd_cost: Decimal
    prd_line: str
    prd_start_dt: date | None
    prd_end_dt: date | None


@dataclass(frozen=True)
class SalesDetail:
    """Cleansed CRM sales line item with reconciled price and amount."""

    sls_ord_num: str | None
    sls_prd_key: str | None
    sls_cust_id: int | None
    sls_order_dt: date | None
    sls_ship_dt: date | None
    sls_due_dt: date | None
    sls_sales: Decimal | None
    sls_quantity: int | None
    sls_price: Decimal | None


@dataclass(frozen=True)
class CustomerDemographics:
    """Cleansed ERP demographics keyed by the CRM alternate key."""

    cid: str | None
    bdate: date | None
    gen: str


@dataclass(frozen=True)
class CustomerLocation:
    """Cleansed ERP location keyed by the CRM alternate key."""

    cid: str | None
    cntry: str


@dataclass(frozen=True)
class CustomerDimensionRow:
    """Conformed customer merged from CRM profile and ERP attributes."""

    customer_key: int
    customer_id: int | None
    customer_number: str | None
    first_name: str | None
    last_name: str | None
    country: str | None
    marital_status: str
    gender: str
    birthdate: date | None
    create_date: date | None


@dataclass(frozen=True)
class ProductDimensionRow:
    """Current product version enriched with its category hierarchy."""

    product_key: int
    product_id: int | None
    product_number: str | None
    product_name: str | None
    category_id: str | None
    category: str | None
    subcategory: str | None
    maintenance: str | None
    cost: Decimal
    product_line: str
    start_date: date | None


@dataclass(frozen=True)
class SalesFactRow:
    """One sales line item with resolved dimension surrogate keys.

    A ``None`` key means the referenced product or customer has no
    current dimension row.
    """

    order_number: str | None
    product_key: int | None
    customer_key: int | None
    order_date: date | None
    shipping_date: date | None
    due_date: date | None
    sales_amount: Decimal | None
    quantity: int | None
    price: Decimal | None
