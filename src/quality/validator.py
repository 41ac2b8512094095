"""Quality validation orchestration and report formatting."""

from __future__ import annotations

import dataclasses
import json
import time
from pathlib import Path
from typing import Any

from core.constants import REPORTS_DIR_NAME
from core.logging_config import get_logger
from core.run_context import RunContext
from core.snapshots import CleansedSnapshot, DimensionalSnapshot
from quality.check_types import CheckResult, CheckStatus, QualityCheck, QualityInputs, QualityReport
from quality.cleansed_checks import CLEANSED_CHECKS
from quality.dimensional_checks import DIMENSIONAL_CHECKS

__all__ = [
    "ALL_CHECKS",
    "CheckResult",
    "QualityReport",
    "validate",
    "render_quality_report",
    "save_quality_report",
]

ALL_CHECKS: tuple[QualityCheck, ...] = CLEANSED_CHECKS + DIMENSIONAL_CHECKS

_LOGGER = get_logger(__name__)


def validate(
    cleansed: CleansedSnapshot,
    dimensional: DimensionalSnapshot,
    context: RunContext,
) -> QualityReport:
    """Run every quality check and collect offending rows.

    The validator is read-only and never raises for data defects; a
    check that raises is reported with status ``error``.

    Args:
        cleansed: Cleansed snapshot to inspect.
        dimensional: Dimensional snapshot to inspect.
        context: Run context supplying run id and processing date.

    Returns:
        Report with one result per check in declaration order.
    """
    inputs = QualityInputs(
        cleansed=cleansed,
        dimensional=dimensional,
        processing_date=context.processing_date,
    )
    results = tuple(_run_single_check(check, inputs) for check in ALL_CHECKS)
    report = QualityReport(
        run_id=context.run_id,
        processing_date=context.processing_date,
        results=results,
    )
    _LOGGER.info(
        "quality_validated",
        run_id=context.run_id,
        check_count=len(results),
        failed_count=report.failed_count,
        violation_count=report.violation_count,
    )
    return report


def _run_single_check(check: QualityCheck, inputs: QualityInputs) -> CheckResult:
    started_at = time.monotonic()
    status: CheckStatus
    try:
        violations = tuple(check.find_violations(inputs))
        status = "failed" if violations else "passed"
        details = ""
        if violations:
            _LOGGER.warning(
                "quality_check_failed",
                check_name=check.name,
                table_name=check.table_name,
                violation_count=len(violations),
            )
    except Exception as error:
        violations = ()
        status = "error"
        details = str(error)
        _LOGGER.warning("quality_check_error", check_name=check.name, error=details)
    return CheckResult(
        name=check.name,
        table_name=check.table_name,
        status=status,
        violations=violations,
        details=details,
        duration_seconds=round(time.monotonic() - started_at, 3),
    )


def render_quality_report(report: QualityReport) -> str:
    """Render report into stable multi-line text for CLI output."""
    lines = [
        f"run_id={report.run_id}",
        f"processing_date={report.processing_date.isoformat()}",
    ]
    for result in report.results:
        line = f"[{result.status.upper()}] {result.name} ({result.table_name}) violations={len(result.violations)}"
        if result.details:
            line += f" :: {result.details}"
        lines.append(line)
    lines.append(f"failed={report.failed_count}")
    lines.append(f"violations={report.violation_count}")
    return "\n".join(lines)


def save_quality_report(report: QualityReport, data_root: Path) -> Path:
    """Persist report JSON under ``<data_root>/reports/<run_id>.json``."""
    report_path = data_root / REPORTS_DIR_NAME / f"{report.run_id}.json"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "run_id": report.run_id,
        "processing_date": report.processing_date.isoformat(),
        "passed": report.passed,
        "checks": [
            {
                "name": result.name,
                "table_name": result.table_name,
                "status": result.status,
                "details": result.details,
                "duration_seconds": result.duration_seconds,
                "violations": [_row_payload(row) for row in result.violations],
            }
            for result in report.results
        ],
    }
    report_path.write_text(json.dumps(payload, indent=2, default=str) + "\n", encoding="utf-8")
    return report_path


def _row_payload(row: Any) -> Any:
    if dataclasses.is_dataclass(row):
        return dataclasses.asdict(row)
    return row
