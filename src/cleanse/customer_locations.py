"""ERP customer location cleansing."""

from __future__ import annotations

from typing import Iterable

from core.constants import NOT_AVAILABLE
from core.types import CustomerLocation, RawCustomerLocation
from transforms.code_tables import COUNTRY_CODES
from transforms.text_cleaning import CharacterClass, strip_characters, trim_spaces


def cleanse_customer_locations(rows: Iterable[RawCustomerLocation]) -> list[CustomerLocation]:
    """Strip id hyphens and normalize country names.

    Args:
        rows: Raw ERP locations in source order.

    Returns:
        Cleansed locations in source order.
    """
    return [
        CustomerLocation(cid=normalize_location_id(row.cid), cntry=normalize_country(row.cntry))
        for row in rows
    ]


def normalize_location_id(customer_id: str | None) -> str | None:
    """Turn ``AW-00011000`` into the CRM alternate key ``AW00011000``."""
    trimmed = trim_spaces(customer_id)
    return trimmed.replace("-", "") if trimmed is not None else None


def normalize_country(value: str | None) -> str:
    """Expand country codes while keeping spaces inside country names.

    Codes are matched after removing all whitespace, but the fallback
    value only loses line breaks and outer spaces so names such as
    ``United Kingdom`` keep their internal space.
    """
    compact = strip_characters(value, CharacterClass.ALL_WHITESPACE)
    if not compact:
        return NOT_AVAILABLE
    mapped = COUNTRY_CODES.lookup(compact)
    if mapped is not None:
        return mapped
    return (strip_characters(value, CharacterClass.LINE_BREAKS) or "").strip()
