"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative pipeline path without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from core.constants import CLEANSED_LAYER, DIMENSIONAL_LAYER, RAW_LAYER
from core.errors import ConformRunSpecError
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import optional_bool, optional_string, validate_step_keys
from pipeline.run_summary import render_row_counts, render_run_summary
from quality.validator import render_quality_report

_STEP_KEYS: dict[str, frozenset[str]] = {
    "load-raw": frozenset({"source_root"}),
    "cleanse": frozenset(),
    "assemble": frozenset(),
    "validate": frozenset({"fail_on_violations"}),
    "run": frozenset({"source_root", "fail_on_violations"}),
    "log": frozenset({"run_id"}),
}


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def with_overrides(
        self,
        data_root: str | None = None,
        source_root: str | None = None,
        processing_date: date | None = None,
    ) -> Any: ...

    def load_raw(self, source_root: str | None = None) -> Any: ...

    def cleanse(self) -> Any: ...

    def assemble(self) -> Any: ...

    def validate(self) -> Any: ...

    def run(self, source_root: str | None = None) -> Any: ...

    def run_log(self, run_id: str | None = None) -> Any: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    defaults = spec.defaults
    execution_client = client.with_overrides(
        data_root=defaults.data_root,
        source_root=defaults.source_root,
        processing_date=defaults.processing_date,
    )
    context = RunSpecExecutionContext(client=execution_client)
    output_lines: list[str] = []
    for step in spec.steps:
        validate_step_keys(step.args, step.command, _STEP_KEYS[step.command])
        output_lines.extend(_execute_step(context, step))
    return tuple(output_lines)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "load-raw":
        raw = context.client.load_raw(optional_string(step.args, "source_root"))
        return render_row_counts(RAW_LAYER, raw.row_counts())
    if step.command == "cleanse":
        return render_row_counts(CLEANSED_LAYER, context.client.cleanse().row_counts())
    if step.command == "assemble":
        return render_row_counts(DIMENSIONAL_LAYER, context.client.assemble().row_counts())
    if step.command == "validate":
        report, report_path = context.client.validate()
        return _quality_lines(step, report, report_path)
    if step.command == "run":
        return _execute_run_step(context, step)
    if step.command == "log":
        summary = context.client.run_log(optional_string(step.args, "run_id"))
        return tuple(render_run_summary(summary).splitlines())
    raise ConformRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_run_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    result = context.client.run(optional_string(step.args, "source_root"))
    lines = [f"run_id={result.run_id}"]
    for layer, row_counts in result.row_counts.items():
        lines.extend(render_row_counts(layer, row_counts))
    lines.extend(_quality_lines(step, result.quality_report, result.report_path))
    return tuple(lines)


def _quality_lines(step: RunSpecStep, report: Any, report_path: Any) -> tuple[str, ...]:
    lines = [*render_quality_report(report).splitlines(), f"report_path={report_path}"]
    if optional_bool(step.args, "fail_on_violations", default_value=False) and not report.passed:
        raise ConformRunSpecError(
            f"Run-spec command '{step.command}' found {report.violation_count} quality "
            f"violations across {report.failed_count} checks. See {report_path}."
        )
    return tuple(lines)
