"""Quality validation command wiring for the conform CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from quality.check_types import QualityReport
from quality.validator import render_quality_report
from store.warehouse_sdk import WarehouseClient


def add_fail_on_violations_flag(parser: argparse.ArgumentParser) -> None:
    """Register the shared ``--fail-on-violations`` flag."""
    parser.add_argument(
        "--fail-on-violations",
        action="store_true",
        help="Exit with status 1 when any quality check does not pass",
    )


def add_validate_command(subparsers: Any) -> None:
    """Register validate subcommand."""
    parser = subparsers.add_parser(
        "validate",
        help="Run quality checks over the cleansed and dimensional layers",
    )
    add_fail_on_violations_flag(parser)


def run_validate_command(client: WarehouseClient, args: argparse.Namespace) -> int:
    """Execute quality validation and print the check report."""
    report, report_path = client.validate()
    return print_quality_report(report, report_path, args.fail_on_violations)


def print_quality_report(report: QualityReport, report_path: Path, fail_on_violations: bool) -> int:
    """Print a quality report and return the command exit code."""
    print(render_quality_report(report))
    print(f"report_path={report_path}")
    if fail_on_violations and not report.passed:
        return 1
    return 0
