"""Raw layer loading from CRM and ERP exports.

This module maps each source export file onto its raw table and
builds a full raw snapshot, recording one step metric per table.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import (
    CUSTOMER_DEMOGRAPHICS_TABLE,
    CUSTOMER_INFO_TABLE,
    CUSTOMER_LOCATION_TABLE,
    PRODUCT_CATEGORY_TABLE,
    PRODUCT_INFO_TABLE,
    RAW_LAYER,
    SALES_DETAILS_TABLE,
)
from core.logging_config import get_logger
from core.run_context import RunContext, utc_now
from core.snapshots import RawSnapshot
from ingest.csv_reader import read_source_table

_LOGGER = get_logger(__name__)

SOURCE_FILES: dict[str, Path] = {
    CUSTOMER_INFO_TABLE: Path("source_crm") / "cust_info.csv",
    PRODUCT_INFO_TABLE: Path("source_crm") / "prd_info.csv",
    SALES_DETAILS_TABLE: Path("source_crm") / "sales_details.csv",
    CUSTOMER_DEMOGRAPHICS_TABLE: Path("source_erp") / "CUST_AZ12.csv",
    CUSTOMER_LOCATION_TABLE: Path("source_erp") / "LOC_A101.csv",
    PRODUCT_CATEGORY_TABLE: Path("source_erp") / "PX_CAT_G1V2.csv",
}


def load_raw_snapshot(source_root: Path, context: RunContext) -> RawSnapshot:
    """Read every source export under ``source_root`` into a raw snapshot.

    Args:
        source_root: Directory holding ``source_crm`` and ``source_erp``.
        context: Run context collecting step metrics.

    Returns:
        Raw snapshot with all six tables.

    Raises:
        ConformIngestError: If any export is missing or unreadable.
    """
    tables = {}
    for table_name, row_type in RawSnapshot.table_types().items():
        source_path = source_root / SOURCE_FILES[table_name]
        started_at = utc_now()
        rows = read_source_table(source_path, row_type)
        metric = context.record_step(f"{RAW_LAYER}.{table_name}", started_at, len(rows))
        _LOGGER.info(
            "table_loaded",
            run_id=context.run_id,
            table_name=table_name,
            source_path=str(source_path),
            row_count=metric.row_count,
            duration_ms=metric.duration_ms,
        )
        tables[table_name] = rows
    return RawSnapshot.from_tables(tables)
