"""Stage orchestration for warehouse refresh runs.

Each stage computes its whole output snapshot before the layer store
swaps it into place. A failing stage logs a ``FAILED`` entry and
raises, leaving every previously written layer untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, NoReturn

from cleanse.stage import transform as cleanse_transform
from core.config import ConformConfig
from core.constants import (
    CLEANSED_LAYER,
    DIMENSIONAL_LAYER,
    RAW_LAYER,
    STATUS_FAILED,
    STATUS_SUCCESS,
)
from core.errors import ConformPipelineError
from core.logging_config import get_logger
from core.run_context import RunContext, utc_now
from core.snapshots import CleansedSnapshot, DimensionalSnapshot, LayerSnapshot, RawSnapshot
from dimensional.stage import transform as dimensional_transform
from ingest.raw_loader import load_raw_snapshot
from quality.check_types import QualityReport
from quality.validator import save_quality_report, validate
from store.layer_store import LayerStore
from store.run_log import JsonlRunLogSink, LogSink

QUALITY_STAGE = "quality"

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a full pipeline run.

    Attributes:
        run_id: Run identifier shared by all log entries.
        row_counts: Row count per table, keyed by layer.
        quality_report: Validation report of the run.
        report_path: Saved quality report location.
    """

    run_id: str
    row_counts: dict[str, dict[str, int]] = field(default_factory=dict)
    quality_report: QualityReport | None = None
    report_path: Path | None = None


class PipelineRunner:
    """Runs warehouse stages against one data root."""

    def __init__(
        self,
        config: ConformConfig,
        store: LayerStore | None = None,
        sink: LogSink | None = None,
    ) -> None:
        """Create a pipeline runner.

        Args:
            config: Runtime configuration.
            store: Optional layer store; built from config when omitted.
            sink: Optional run log sink; JSONL under the data root when omitted.
        """
        self._config = config
        self._store = store or LayerStore(config)
        self._sink = sink or JsonlRunLogSink(config)

    def start_context(self) -> RunContext:
        """Open a run context using the configured processing date."""
        return RunContext.start(self._config.processing_date)

    def load_raw(
        self,
        source_root: Path | None = None,
        context: RunContext | None = None,
    ) -> RawSnapshot:
        """Load source exports and replace the raw layer.

        Raises:
            ConformPipelineError: If reading sources or writing the layer fails.
        """
        resolved_root = source_root or self._config.source_root
        return self._run_stage(
            RAW_LAYER,
            context or self.start_context(),
            lambda run_context: load_raw_snapshot(resolved_root, run_context),
        )

    def cleanse(self, context: RunContext | None = None) -> CleansedSnapshot:
        """Rebuild the cleansed layer from the stored raw layer.

        Raises:
            ConformPipelineError: If the raw layer is unreadable or the write fails.
        """
        return self._run_stage(
            CLEANSED_LAYER,
            context or self.start_context(),
            lambda run_context: cleanse_transform(
                self._store.read_layer(RAW_LAYER), run_context
            ),
        )

    def assemble(self, context: RunContext | None = None) -> DimensionalSnapshot:
        """Rebuild the dimensional layer from the stored cleansed layer.

        Raises:
            ConformPipelineError: If the cleansed layer is unreadable or the write fails.
        """
        return self._run_stage(
            DIMENSIONAL_LAYER,
            context or self.start_context(),
            lambda run_context: dimensional_transform(
                self._store.read_layer(CLEANSED_LAYER), run_context
            ),
        )

    def validate(self, context: RunContext | None = None) -> tuple[QualityReport, Path]:
        """Validate the stored cleansed and dimensional layers.

        Returns:
            Pair of quality report and its saved JSON path.

        Raises:
            ConformPipelineError: If a layer cannot be read or the report cannot be saved.
        """
        run_context = context or self.start_context()
        started_at = utc_now()
        try:
            report = validate(
                self._store.read_layer(CLEANSED_LAYER),
                self._store.read_layer(DIMENSIONAL_LAYER),
                run_context,
            )
            report_path = save_quality_report(report, self._config.data_root)
        except Exception as error:
            self._fail_stage(QUALITY_STAGE, run_context, started_at, error)
        self._record(
            QUALITY_STAGE,
            started_at,
            utc_now(),
            report.violation_count,
            STATUS_SUCCESS,
            run_id=run_context.run_id,
        )
        return report, report_path

    def run(self, source_root: Path | None = None) -> PipelineResult:
        """Run every stage in order under one run context.

        Args:
            source_root: Optional override of the configured source root.

        Returns:
            Pipeline result with row counts and the quality report.

        Raises:
            ConformPipelineError: If any stage fails; later stages do not run.
        """
        context = self.start_context()
        _LOGGER.info(
            "pipeline_started",
            run_id=context.run_id,
            processing_date=context.processing_date.isoformat(),
        )
        raw = self.load_raw(source_root, context)
        cleansed = self.cleanse(context)
        dimensional = self.assemble(context)
        report, report_path = self.validate(context)
        _LOGGER.info(
            "pipeline_completed",
            run_id=context.run_id,
            failed_checks=report.failed_count,
            violation_count=report.violation_count,
        )
        return PipelineResult(
            run_id=context.run_id,
            row_counts={
                RAW_LAYER: raw.row_counts(),
                CLEANSED_LAYER: cleansed.row_counts(),
                DIMENSIONAL_LAYER: dimensional.row_counts(),
            },
            quality_report=report,
            report_path=report_path,
        )

    def _run_stage(
        self,
        layer: str,
        context: RunContext,
        compute: Callable[[RunContext], LayerSnapshot],
    ):
        started_at = utc_now()
        first_metric = len(context.metrics)
        try:
            snapshot = compute(context)
            self._store.replace_layer(layer, snapshot, context.run_id)
        except Exception as error:
            self._fail_stage(layer, context, started_at, error)
        for metric in context.metrics[first_metric:]:
            self._record(
                metric.name,
                metric.started_at,
                metric.ended_at,
                metric.row_count,
                STATUS_SUCCESS,
                run_id=context.run_id,
            )
        row_count = sum(snapshot.row_counts().values())
        self._record(layer, started_at, utc_now(), row_count, STATUS_SUCCESS, run_id=context.run_id)
        _LOGGER.info("stage_completed", run_id=context.run_id, stage=layer, row_count=row_count)
        return snapshot

    def _fail_stage(
        self,
        stage: str,
        context: RunContext,
        started_at: datetime,
        error: Exception,
    ) -> NoReturn:
        message = str(error)
        self._record(
            stage,
            started_at,
            utc_now(),
            0,
            STATUS_FAILED,
            error_message=message,
            run_id=context.run_id,
        )
        _LOGGER.error("stage_failed", run_id=context.run_id, stage=stage, error=message)
        raise ConformPipelineError(
            f"Stage '{stage}' failed for run {context.run_id}: {message}. "
            "Previous layer snapshots were kept; fix the cause and re-run."
        ) from error

    def _record(
        self,
        stage_name: str,
        start_time: datetime,
        end_time: datetime,
        row_count: int,
        status: str,
        error_message: str | None = None,
        run_id: str | None = None,
    ) -> None:
        try:
            self._sink.record(
                stage_name,
                start_time,
                end_time,
                row_count,
                status,
                error_message=error_message,
                run_id=run_id,
            )
        except Exception as error:
            _LOGGER.warning(
                "run_log_write_failed",
                run_id=run_id,
                stage_name=stage_name,
                error=str(error),
            )
