"""Unit tests for run context bookkeeping."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from core.run_context import RunContext, StageMetric, build_run_id


def test_start_uses_given_processing_date() -> None:
    """A fixed processing date should be kept as given."""
    assert RunContext.start(date(2025, 10, 17)).processing_date == date(2025, 10, 17)


def test_start_defaults_processing_date_to_run_date() -> None:
    """Without a processing date the run's UTC date should be used."""
    context = RunContext.start()

    assert context.processing_date == context.started_at.date()


def test_run_ids_are_unique_and_sortable() -> None:
    """Run ids should embed the start timestamp and differ per run."""
    started_at = datetime(2025, 10, 17, 8, 0, tzinfo=timezone.utc)

    first, second = build_run_id(started_at), build_run_id(started_at)

    assert first != second and first.startswith("run-20251017T080000000000Z-")


def test_record_step_appends_metrics() -> None:
    """Recorded steps should be retrievable by name prefix."""
    context = RunContext.start(date(2025, 10, 17))

    context.record_step("raw.crm_cust_info", context.started_at, 6)
    context.record_step("cleansed.crm_cust_info", context.started_at, 5)

    assert [metric.row_count for metric in context.metrics_for("raw.")] == [6]


def test_stage_metric_duration_in_milliseconds() -> None:
    """Duration should be reported in milliseconds."""
    started_at = datetime(2025, 10, 17, tzinfo=timezone.utc)
    metric = StageMetric("raw", started_at, started_at + timedelta(milliseconds=1500), 0)

    assert metric.duration_ms == 1500.0
