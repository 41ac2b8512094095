"""Integration tests for a full warehouse refresh over fixture exports."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from store.warehouse_sdk import WarehouseClient


@pytest.fixture
def refreshed(config):
    """Client and result of one full refresh."""
    client = WarehouseClient(config)
    return client, client.run()


def test_refresh_row_counts(refreshed) -> None:
    """Every layer should hold the expected number of rows per table."""
    _, result = refreshed

    assert result.row_counts["cleansed"] == {
        "crm_cust_info": 5,
        "crm_prd_info": 5,
        "crm_sales_details": 5,
        "erp_cust_az12": 4,
        "erp_loc_a101": 4,
        "erp_px_cat_g1v2": 2,
    }
    assert result.row_counts["dimensional"] == {"dim_customers": 5, "dim_products": 3, "fact_sales": 5}


def test_refresh_cleanses_customer_profiles(refreshed) -> None:
    """Duplicate profiles should collapse to the latest with expanded codes."""
    client, _ = refreshed
    customers = {row.cst_id: row for row in client.read_layer("cleansed").customers}

    assert (customers[11000].cst_firstname, customers[11000].cst_lastname) == ("Jon", "Yang")
    assert customers[11002].cst_marital_status == "Married"
    assert (customers[11003].cst_marital_status, customers[11003].cst_gndr) == ("Single", "n/a")


def test_refresh_closes_product_lifecycles(refreshed) -> None:
    """Earlier product versions should end the day before the next start."""
    client, _ = refreshed
    end_dates = {row.prd_id: row.prd_end_dt for row in client.read_layer("cleansed").products}

    assert end_dates == {
        210: None,
        211: date(2021, 12, 31),
        212: None,
        313: date(2012, 6, 30),
        314: None,
    }


def test_refresh_reconciles_sales(refreshed) -> None:
    """Price and amount should be reconciled and bad dates nulled."""
    client, _ = refreshed
    sales = {row.sls_ord_num: row for row in client.read_layer("cleansed").sales}

    assert (sales["SO43698"].sls_price, sales["SO43698"].sls_sales) == (Decimal("25"), Decimal("50"))
    assert (sales["SO43699"].sls_sales, sales["SO43699"].sls_order_dt) == (Decimal("20"), None)
    assert sales["SO43700"].sls_price == Decimal("25")
    assert sales["SO43701"].sls_price == Decimal("20")


def test_refresh_builds_conformed_customers(refreshed) -> None:
    """Customers should merge ERP country, birthdate, and fallback gender."""
    client, _ = refreshed
    customers = {row.customer_id: row for row in client.read_layer("dimensional").customers}

    assert [row.customer_key for row in customers.values()] == [1, 2, 3, 4, 5]
    assert (customers[11000].country, customers[11001].country) == ("Australia", "United States")
    assert (customers[11003].gender, customers[11003].birthdate) == ("Female", None)
    assert customers[11003].country == "United Kingdom"


def test_refresh_keys_current_products(refreshed) -> None:
    """Only current products should be keyed, ordered by start date."""
    client, _ = refreshed
    products = client.read_layer("dimensional").products

    assert [(row.product_key, row.product_id, row.category) for row in products] == [
        (1, 210, "Components"),
        (2, 314, "Accessories"),
        (3, 212, "Components"),
    ]


def test_refresh_quality_report(refreshed) -> None:
    """Only the seeded defects should fail their checks."""
    _, result = refreshed
    report = result.quality_report
    failed = {check.name: len(check.violations) for check in report.results if check.status != "passed"}

    assert failed == {"crm_cust_info_primary_key": 1, "erp_cust_az12_birthdate_range": 1}
    assert report.violations("fact_sales_orphans") == ()
    assert result.report_path.is_file()
