"""Customer dimension assembly."""

from __future__ import annotations

from typing import Iterable

from core.constants import NOT_AVAILABLE
from core.types import CustomerDemographics, CustomerDimensionRow, CustomerInfo, CustomerLocation
from dimensional.surrogate_keys import assign_surrogate_keys, first_match_index
from transforms.recency_deduplication import nulls_first


def build_customer_dimension(
    profiles: Iterable[CustomerInfo],
    demographics: Iterable[CustomerDemographics],
    locations: Iterable[CustomerLocation],
) -> list[CustomerDimensionRow]:
    """Merge CRM profiles with ERP demographics and locations.

    Every profile survives; ERP attributes are matched on the CRM
    alternate key and default to ``None`` when absent. CRM gender wins
    unless it is ``n/a``.

    Args:
        profiles: Cleansed CRM profiles.
        demographics: Cleansed ERP demographics.
        locations: Cleansed ERP locations.

    Returns:
        Dimension rows keyed from 1 in ascending ``customer_id`` order.
    """
    demographics_by_id = first_match_index(demographics, lambda row: row.cid)
    locations_by_id = first_match_index(locations, lambda row: row.cid)
    keyed_profiles = assign_surrogate_keys(profiles, lambda row: nulls_first(row.cst_id))
    rows: list[CustomerDimensionRow] = []
    for customer_key, profile in keyed_profiles:
        demographic = demographics_by_id.get(profile.cst_key)
        location = locations_by_id.get(profile.cst_key)
        rows.append(
            CustomerDimensionRow(
                customer_key=customer_key,
                customer_id=profile.cst_id,
                customer_number=profile.cst_key,
                first_name=profile.cst_firstname,
                last_name=profile.cst_lastname,
                country=location.cntry if location else None,
                marital_status=profile.cst_marital_status,
                gender=resolve_gender(profile.cst_gndr, demographic.gen if demographic else None),
                birthdate=demographic.bdate if demographic else None,
                create_date=profile.cst_create_date,
            )
        )
    return rows


def resolve_gender(crm_gender: str, erp_gender: str | None) -> str:
    """Prefer CRM gender, falling back to ERP gender, then ``n/a``."""
    if crm_gender != NOT_AVAILABLE:
        return crm_gender
    return erp_gender or NOT_AVAILABLE
