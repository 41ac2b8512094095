"""Typed models for quality validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Literal

from core.snapshots import CleansedSnapshot, DimensionalSnapshot

CheckStatus = Literal["passed", "failed", "error"]


@dataclass(frozen=True)
class QualityInputs:
    """Read-only inputs shared by every check function."""

    cleansed: CleansedSnapshot
    dimensional: DimensionalSnapshot
    processing_date: date


CheckFunction = Callable[[QualityInputs], list[Any]]


@dataclass(frozen=True)
class QualityCheck:
    """One named check and the table it inspects."""

    name: str
    table_name: str
    description: str
    find_violations: CheckFunction


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check.

    Attributes:
        name: Check name.
        table_name: Table the check inspects.
        status: ``passed`` with no violations, ``failed`` with some,
            ``error`` when the check itself raised.
        violations: Offending rows in table order.
        details: Error message for ``error`` results, else empty.
        duration_seconds: Check run time.
    """

    name: str
    table_name: str
    status: CheckStatus
    violations: tuple[Any, ...]
    details: str
    duration_seconds: float


@dataclass(frozen=True)
class QualityReport:
    """Full validation report for one run."""

    run_id: str
    processing_date: date
    results: tuple[CheckResult, ...]

    def violations(self, check_name: str) -> tuple[Any, ...]:
        """Return offending rows for ``check_name``.

        Raises:
            KeyError: If no check with that name ran.
        """
        for result in self.results:
            if result.name == check_name:
                return result.violations
        raise KeyError(check_name)

    @property
    def passed(self) -> bool:
        """Whether every check passed."""
        return all(result.status == "passed" for result in self.results)

    @property
    def failed_count(self) -> int:
        """Count checks that did not pass."""
        return sum(1 for result in self.results if result.status != "passed")

    @property
    def violation_count(self) -> int:
        """Count offending rows across all checks."""
        return sum(len(result.violations) for result in self.results)
