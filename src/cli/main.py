"""Conform CLI entry points.
This module exposes commands for loading, cleansing, assembling, and
validating warehouse layers. It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from cli.validate_command import (
    add_fail_on_violations_flag,
    add_validate_command,
    print_quality_report,
    run_validate_command,
)
from core.config import ConformConfig
from core.constants import CLEANSED_LAYER, DIMENSIONAL_LAYER, RAW_LAYER
from core.errors import ConformError
from pipeline.run_summary import render_row_counts, render_run_summary
from store.warehouse_sdk import WarehouseClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="conform", description="Conform warehouse CLI")
    parser.add_argument("--data-root", help="Override CONFORM_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_load_raw_command(subparsers)
    _add_cleanse_command(subparsers)
    _add_assemble_command(subparsers)
    add_validate_command(subparsers)
    _add_run_command(subparsers)
    _add_log_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the conform CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
        return _dispatch(parser, client, args)
    except ConformError as error:
        print(f"error={error}", file=sys.stderr)
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: WarehouseClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "load-raw":
        return _run_load_raw_command(client, args)
    if args.command == "cleanse":
        return _run_cleanse_command(client)
    if args.command == "assemble":
        return _run_assemble_command(client)
    if args.command == "validate":
        return run_validate_command(client, args)
    if args.command == "run":
        return _run_run_command(client, args)
    if args.command == "log":
        return _run_log_command(client, args)
    if args.command == "run-spec":
        return run_run_spec_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> WarehouseClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = ConformConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return WarehouseClient(config)


def _run_load_raw_command(client: WarehouseClient, args: argparse.Namespace) -> int:
    """Handle load-raw command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    raw = client.load_raw(args.source_root)
    _print_lines(render_row_counts(RAW_LAYER, raw.row_counts()))
    return 0


def _run_cleanse_command(client: WarehouseClient) -> int:
    """Handle cleanse command."""
    cleansed = client.cleanse()
    _print_lines(render_row_counts(CLEANSED_LAYER, cleansed.row_counts()))
    return 0


def _run_assemble_command(client: WarehouseClient) -> int:
    """Handle assemble command."""
    dimensional = client.assemble()
    _print_lines(render_row_counts(DIMENSIONAL_LAYER, dimensional.row_counts()))
    return 0


def _run_run_command(client: WarehouseClient, args: argparse.Namespace) -> int:
    """Handle run command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.run(args.source_root)
    print(f"run_id={result.run_id}")
    for layer, row_counts in result.row_counts.items():
        _print_lines(render_row_counts(layer, row_counts))
    return print_quality_report(result.quality_report, result.report_path, args.fail_on_violations)


def _run_log_command(client: WarehouseClient, args: argparse.Namespace) -> int:
    """Handle log command."""
    summary = client.run_log(args.run_id)
    print(render_run_summary(summary))
    return 0


def _print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)


def _add_load_raw_command(subparsers: Any) -> None:
    """Register load-raw subcommand."""
    parser = subparsers.add_parser("load-raw", help="Load CRM and ERP exports into the raw layer")
    parser.add_argument(
        "source_root",
        nargs="?",
        help="Directory with source_crm/ and source_erp/; defaults to CONFORM_SOURCE_ROOT",
    )


def _add_cleanse_command(subparsers: Any) -> None:
    """Register cleanse subcommand."""
    subparsers.add_parser("cleanse", help="Rebuild the cleansed layer from the raw layer")


def _add_assemble_command(subparsers: Any) -> None:
    """Register assemble subcommand."""
    subparsers.add_parser("assemble", help="Rebuild dimensions and the sales fact")


def _add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser("run", help="Run load, cleanse, assemble, and validate")
    parser.add_argument(
        "source_root",
        nargs="?",
        help="Directory with source_crm/ and source_erp/; defaults to CONFORM_SOURCE_ROOT",
    )
    add_fail_on_violations_flag(parser)


def _add_log_command(subparsers: Any) -> None:
    """Register log subcommand."""
    parser = subparsers.add_parser("log", help="Summarize a recorded run from the run log")
    parser.add_argument("--run-id", help="Run to summarize; latest run when omitted")
