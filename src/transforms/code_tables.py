"""Code-to-label mapping rules.

Each table is an exact-match lookup with an explicit default. Callers
normalize raw codes (trim, upper-case, strip control characters)
before lookup so the tables themselves stay literal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from core.constants import NOT_AVAILABLE


@dataclass(frozen=True)
class CodeTable:
    """Exact-match code table.

    Attributes:
        name: Table name used in logs and quality reports.
        labels: Code to label mapping.
        default: Label returned for unknown or missing codes.
    """

    name: str
    labels: Mapping[str, str] = field(default_factory=dict)
    default: str = NOT_AVAILABLE

    def label(self, code: str | None) -> str:
        """Return the label for ``code`` or the table default."""
        if code is None:
            return self.default
        return self.labels.get(code, self.default)

    def lookup(self, code: str | None) -> str | None:
        """Return the label for ``code`` or ``None`` when unmapped."""
        if code is None:
            return None
        return self.labels.get(code)

    def allowed_labels(self) -> frozenset[str]:
        """Return every label this table can produce, default included."""
        return frozenset(self.labels.values()) | {self.default}


MARITAL_STATUS_CODES = CodeTable(
    name="marital_status",
    labels={"S": "Single", "M": "Married"},
)

GENDER_CODES = CodeTable(
    name="gender",
    labels={"F": "Female", "M": "Male"},
)

PRODUCT_LINE_CODES = CodeTable(
    name="product_line",
    labels={"M": "Mountain", "R": "Road", "S": "Other Sales", "T": "Touring"},
)

DEMOGRAPHIC_GENDER_CODES = CodeTable(
    name="demographic_gender",
    labels={"F": "Female", "FEMALE": "Female", "M": "Male", "MALE": "Male"},
)

COUNTRY_CODES = CodeTable(
    name="country",
    labels={"DE": "Germany", "US": "United States", "USA": "United States"},
)
