"""Layer snapshot models.

A snapshot holds every table of one layer for one run. Stages consume
and produce whole snapshots, and the store persists them atomically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Sequence, TypeVar

from core.constants import (
    CUSTOMER_DEMOGRAPHICS_TABLE,
    CUSTOMER_DIMENSION_TABLE,
    CUSTOMER_INFO_TABLE,
    CUSTOMER_LOCATION_TABLE,
    PRODUCT_CATEGORY_TABLE,
    PRODUCT_DIMENSION_TABLE,
    PRODUCT_INFO_TABLE,
    SALES_DETAILS_TABLE,
    SALES_FACT_TABLE,
)
from core.types import (
    CustomerDemographics,
    CustomerDimensionRow,
    CustomerInfo,
    CustomerLocation,
    ProductCategory,
    ProductDimensionRow,
    ProductInfo,
    RawCustomerDemographics,
    RawCustomerInfo,
    RawCustomerLocation,
    RawProductInfo,
    RawSalesDetail,
    SalesDetail,
    SalesFactRow,
)

SnapshotT = TypeVar("SnapshotT", bound="LayerSnapshot")

# (table name, attribute name, row type)
TableBinding = tuple[str, str, type]


class LayerSnapshot:
    """Mixin mapping snapshot attributes onto named layer tables."""

    TABLES: ClassVar[tuple[TableBinding, ...]] = ()

    @classmethod
    def table_types(cls) -> dict[str, type]:
        """Return the row type of each table in declaration order."""
        return {table_name: row_type for table_name, _, row_type in cls.TABLES}

    @classmethod
    def from_tables(cls: type[SnapshotT], tables: Mapping[str, Sequence[Any]]) -> SnapshotT:
        """Build a snapshot from a table-name keyed mapping.

        Args:
            tables: Rows per table name; every declared table must be present.

        Returns:
            Snapshot instance.

        Raises:
            KeyError: If a declared table is missing.
        """
        values = {attribute: tuple(tables[table_name]) for table_name, attribute, _ in cls.TABLES}
        return cls(**values)

    def tables(self) -> dict[str, tuple[Any, ...]]:
        """Return rows keyed by table name."""
        return {
            table_name: getattr(self, attribute) for table_name, attribute, _ in self.TABLES
        }

    def row_counts(self) -> dict[str, int]:
        """Return row count per table name."""
        return {table_name: len(rows) for table_name, rows in self.tables().items()}


@dataclass(frozen=True)
class RawSnapshot(LayerSnapshot):
    """Unmodified source records, one table per source entity."""

    TABLES: ClassVar[tuple[TableBinding, ...]] = (
        (CUSTOMER_INFO_TABLE, "customers", RawCustomerInfo),
        (PRODUCT_INFO_TABLE, "products", RawProductInfo),
        (SALES_DETAILS_TABLE, "sales", RawSalesDetail),
        (CUSTOMER_DEMOGRAPHICS_TABLE, "demographics", RawCustomerDemographics),
        (CUSTOMER_LOCATION_TABLE, "locations", RawCustomerLocation),
        (PRODUCT_CATEGORY_TABLE, "categories", ProductCategory),
    )

    customers: tuple[RawCustomerInfo, ...] = ()
    products: tuple[RawProductInfo, ...] = ()
    sales: tuple[RawSalesDetail, ...] = ()
    demographics: tuple[RawCustomerDemographics, ...] = ()
    locations: tuple[RawCustomerLocation, ...] = ()
    categories: tuple[ProductCategory, ...] = ()


@dataclass(frozen=True)
class CleansedSnapshot(LayerSnapshot):
    """Deduplicated and normalized records, one table per source entity."""

    TABLES: ClassVar[tuple[TableBinding, ...]] = (
        (CUSTOMER_INFO_TABLE, "customers", CustomerInfo),
        (PRODUCT_INFO_TABLE, "products", ProductInfo),
        (SALES_DETAILS_TABLE, "sales", SalesDetail),
        (CUSTOMER_DEMOGRAPHICS_TABLE, "demographics", CustomerDemographics),
        (CUSTOMER_LOCATION_TABLE, "locations", CustomerLocation),
        (PRODUCT_CATEGORY_TABLE, "categories", ProductCategory),
    )

    customers: tuple[CustomerInfo, ...] = ()
    products: tuple[ProductInfo, ...] = ()
    sales: tuple[SalesDetail, ...] = ()
    demographics: tuple[CustomerDemographics, ...] = ()
    locations: tuple[CustomerLocation, ...] = ()
    categories: tuple[ProductCategory, ...] = ()


@dataclass(frozen=True)
class DimensionalSnapshot(LayerSnapshot):
    """Star schema: two conformed dimensions and the sales fact."""

    TABLES: ClassVar[tuple[TableBinding, ...]] = (
        (CUSTOMER_DIMENSION_TABLE, "customers", CustomerDimensionRow),
        (PRODUCT_DIMENSION_TABLE, "products", ProductDimensionRow),
        (SALES_FACT_TABLE, "sales", SalesFactRow),
    )

    customers: tuple[CustomerDimensionRow, ...] = ()
    products: tuple[ProductDimensionRow, ...] = ()
    sales: tuple[SalesFactRow, ...] = ()
