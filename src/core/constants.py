"""Core constants used across conform modules.

This module centralizes layer, table, and rule constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

DEFAULT_DATA_ROOT = Path(".conform")
DEFAULT_SOURCE_ROOT = Path("datasets")
LAYERS_DIR_NAME = "layers"
LOGS_DIR_NAME = "logs"
REPORTS_DIR_NAME = "reports"
RUN_LOG_FILE_NAME = "etl_log.jsonl"
LAYER_MANIFEST_FILE_NAME = "manifest.json"
TABLE_FILE_SUFFIX = ".parquet"
HASH_ALGORITHM = "sha256"

RAW_LAYER = "raw"
CLEANSED_LAYER = "cleansed"
DIMENSIONAL_LAYER = "dimensional"
SUPPORTED_LAYERS = (RAW_LAYER, CLEANSED_LAYER, DIMENSIONAL_LAYER)

CUSTOMER_INFO_TABLE = "crm_cust_info"
PRODUCT_INFO_TABLE = "crm_prd_info"
SALES_DETAILS_TABLE = "crm_sales_details"
CUSTOMER_DEMOGRAPHICS_TABLE = "erp_cust_az12"
CUSTOMER_LOCATION_TABLE = "erp_loc_a101"
PRODUCT_CATEGORY_TABLE = "erp_px_cat_g1v2"
CUSTOMER_DIMENSION_TABLE = "dim_customers"
PRODUCT_DIMENSION_TABLE = "dim_products"
SALES_FACT_TABLE = "fact_sales"

STATUS_SUCCESS = "SUCCESS"
STATUS_FAILED = "FAILED"

NOT_AVAILABLE = "n/a"
DECIMAL_SCALE = 4
DECIMAL_PRECISION = 18
PRODUCT_CATEGORY_PREFIX_LENGTH = 5
PRODUCT_KEY_TAIL_OFFSET = 6
DEMOGRAPHICS_ID_PREFIX = "NAS"
COMPACT_DATE_LENGTH = 8
SALES_DATE_LOWER_BOUND = date(1900, 1, 1)
SALES_DATE_UPPER_BOUND = date(2050, 1, 1)
BIRTHDATE_LOWER_BOUND = date(1924, 1, 1)
