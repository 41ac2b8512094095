"""Run summaries built from run log entries.

A summary has three parts: the overall run window, per-table metrics
in start order, and aggregate statistics over successful tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from core.constants import STATUS_SUCCESS
from core.errors import ConformStoreError
from store.run_log import RunLogEntry


@dataclass(frozen=True)
class RunSummary:
    """Summary of one pipeline run.

    Attributes:
        run_id: Summarized run.
        started_at: Earliest entry start.
        ended_at: Latest entry end.
        total_duration_ms: Wall-clock run window in milliseconds.
        tables: Per-table entries ordered by start time.
        total_rows: Rows across successful table entries.
        tables_processed: Count of successful table entries.
        total_processing_ms: Summed duration of successful table entries.
    """

    run_id: str
    started_at: datetime
    ended_at: datetime
    total_duration_ms: float
    tables: tuple[RunLogEntry, ...]
    total_rows: int
    tables_processed: int
    total_processing_ms: float


def summarize_run(entries: Sequence[RunLogEntry], run_id: str) -> RunSummary:
    """Build the summary of one run from its log entries.

    Table entries are those named ``<layer>.<table>``; stage entries
    only widen the run window.

    Args:
        entries: Run log entries, possibly from several runs.
        run_id: Run to summarize.

    Returns:
        Run summary.

    Raises:
        ConformStoreError: If no entry belongs to ``run_id``.
    """
    run_entries = [entry for entry in entries if entry.run_id == run_id]
    if not run_entries:
        raise ConformStoreError(
            f"No run log entries found for run '{run_id}'. "
            "Use `conform log` to list recorded runs."
        )
    started_at = min(entry.start_time for entry in run_entries)
    ended_at = max(entry.end_time for entry in run_entries)
    tables = sorted(
        (entry for entry in run_entries if "." in entry.stage_name),
        key=lambda entry: entry.start_time,
    )
    successful = [entry for entry in tables if entry.status == STATUS_SUCCESS]
    return RunSummary(
        run_id=run_id,
        started_at=started_at,
        ended_at=ended_at,
        total_duration_ms=round((ended_at - started_at).total_seconds() * 1000, 2),
        tables=tuple(tables),
        total_rows=sum(entry.row_count for entry in successful),
        tables_processed=len(successful),
        total_processing_ms=round(sum(entry.duration_ms for entry in successful), 2),
    )


def render_run_summary(summary: RunSummary) -> str:
    """Render summary into stable multi-line text for CLI output."""
    lines = [
        f"run_id={summary.run_id}",
        f"started_at={summary.started_at.isoformat()}",
        f"ended_at={summary.ended_at.isoformat()}",
        f"total_duration_ms={summary.total_duration_ms:.2f} ({summary.total_duration_ms / 1000:.2f} seconds)",
    ]
    for entry in summary.tables:
        line = (
            f"[{entry.status}] {entry.stage_name} rows={entry.row_count} "
            f"duration_ms={entry.duration_ms:.2f}"
        )
        if entry.error_message:
            line += f" :: {entry.error_message}"
        lines.append(line)
    lines.append(f"total_rows={summary.total_rows}")
    lines.append(f"tables_processed={summary.tables_processed}")
    lines.append(f"total_processing_ms={summary.total_processing_ms:.2f}")
    return "\n".join(lines)


def render_row_counts(layer: str, row_counts: dict[str, int]) -> tuple[str, ...]:
    """Render per-table row counts of one layer as ``layer.table=count`` lines."""
    return tuple(f"{layer}.{table_name}={count}" for table_name, count in row_counts.items())
