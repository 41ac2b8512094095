"""Per-run context threaded through every pipeline stage.

The context carries the run identity, the processing date used by
date-relative rules, and an accumulating list of step metrics.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StageMetric:
    """Timing and volume of one completed pipeline step.

    Attributes:
        name: Step name, e.g. ``cleansed.crm_cust_info``.
        started_at: UTC step start.
        ended_at: UTC step end.
        row_count: Rows produced by the step.
    """

    name: str
    started_at: datetime
    ended_at: datetime
    row_count: int

    @property
    def duration_ms(self) -> float:
        """Step duration in milliseconds."""
        return round((self.ended_at - self.started_at).total_seconds() * 1000, 2)


@dataclass
class RunContext:
    """Mutable state shared by the stages of one pipeline run."""

    run_id: str
    started_at: datetime
    processing_date: date
    metrics: list[StageMetric] = field(default_factory=list)

    @classmethod
    def start(cls, processing_date: date | None = None) -> "RunContext":
        """Open a new run context.

        Args:
            processing_date: Fixed processing date; today's UTC date when omitted.

        Returns:
            Fresh context with a unique run id.
        """
        started_at = utc_now()
        return cls(
            run_id=build_run_id(started_at),
            started_at=started_at,
            processing_date=processing_date or started_at.date(),
        )

    def record_step(self, name: str, started_at: datetime, row_count: int) -> StageMetric:
        """Append a metric for a step that just finished."""
        metric = StageMetric(
            name=name,
            started_at=started_at,
            ended_at=utc_now(),
            row_count=row_count,
        )
        self.metrics.append(metric)
        return metric

    def metrics_for(self, prefix: str) -> list[StageMetric]:
        """Return metrics whose name starts with ``prefix``."""
        return [metric for metric in self.metrics if metric.name.startswith(prefix)]


def build_run_id(started_at: datetime) -> str:
    """Build a sortable unique run id from a start timestamp."""
    timestamp = started_at.strftime("%Y%m%dT%H%M%S%fZ")
    return f"run-{timestamp}-{uuid.uuid4().hex[:8]}"
