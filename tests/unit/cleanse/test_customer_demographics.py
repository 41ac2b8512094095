"""Unit tests for ERP customer demographics cleansing."""

from __future__ import annotations

from datetime import date

import pytest

from cleanse.customer_demographics import (
    cleanse_customer_demographics,
    normalize_gender,
    strip_id_prefix,
)
from core.types import RawCustomerDemographics


def test_strip_id_prefix_only_removes_leading_prefix() -> None:
    """The NAS prefix should be removed only where present."""
    assert [strip_id_prefix(value) for value in ("NASAW00011000", "AW00011000", None)] == [
        "AW00011000",
        "AW00011000",
        None,
    ]


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("F", "Female"),
        (" female\r", "Female"),
        ("M", "Male"),
        ("Ma le\n", "Male"),
        ("", "n/a"),
        (None, "n/a"),
        ("X", "n/a"),
    ],
)
def test_normalize_gender(raw_value: str | None, expected: str) -> None:
    """Gender free text should map after stripping all whitespace."""
    assert normalize_gender(raw_value) == expected


def test_future_birthdates_are_nulled(processing_date: date) -> None:
    """Birthdates after the processing date should become None."""
    rows = [
        RawCustomerDemographics(cid="NASAW1", bdate=date(2099, 1, 1), gen="F"),
        RawCustomerDemographics(cid="AW2", bdate=processing_date, gen="M"),
    ]

    cleansed = cleanse_customer_demographics(rows, processing_date)

    assert [row.bdate for row in cleansed] == [None, processing_date]
    assert [row.cid for row in cleansed] == ["AW1", "AW2"]
