"""ERP customer demographics cleansing."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from core.constants import DEMOGRAPHICS_ID_PREFIX
from core.types import CustomerDemographics, RawCustomerDemographics
from transforms.code_tables import DEMOGRAPHIC_GENDER_CODES
from transforms.text_cleaning import CharacterClass, strip_characters, trim_spaces


def cleanse_customer_demographics(
    rows: Iterable[RawCustomerDemographics],
    processing_date: date,
) -> list[CustomerDemographics]:
    """Align ids with the CRM key, drop future birthdates, normalize gender.

    Args:
        rows: Raw ERP demographics in source order.
        processing_date: Reference date for rejecting future birthdates.

    Returns:
        Cleansed demographics in source order.
    """
    return [
        CustomerDemographics(
            cid=strip_id_prefix(trim_spaces(row.cid)),
            bdate=row.bdate if row.bdate is None or row.bdate <= processing_date else None,
            gen=normalize_gender(row.gen),
        )
        for row in rows
    ]


def strip_id_prefix(customer_id: str | None) -> str | None:
    """Remove the ERP ``NAS`` prefix from ids that carry it."""
    if customer_id is not None and customer_id.startswith(DEMOGRAPHICS_ID_PREFIX):
        return customer_id[len(DEMOGRAPHICS_ID_PREFIX):]
    return customer_id


def normalize_gender(value: str | None) -> str:
    """Map free-text gender to ``Female``, ``Male``, or ``n/a``."""
    code = strip_characters(value, CharacterClass.ALL_WHITESPACE)
    return DEMOGRAPHIC_GENDER_CODES.label(code.upper() if code is not None else None)
