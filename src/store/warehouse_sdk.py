"""Python SDK for warehouse operations.

This module exposes high-level APIs for loading, cleansing, assembling,
and validating warehouse layers backed by the layer store.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from pathlib import Path

from core.config import ConformConfig
from core.constants import CLEANSED_LAYER
from core.errors import ConformStoreError
from core.run_context import RunContext
from core.run_spec_execution import execute_run_spec_file
from core.snapshots import CleansedSnapshot, DimensionalSnapshot, LayerSnapshot, RawSnapshot
from dimensional.stage import transform as dimensional_transform
from pipeline.run_summary import RunSummary, summarize_run
from pipeline.runner import PipelineResult, PipelineRunner
from quality.check_types import QualityReport
from store.layer_store import LayerStore
from store.run_log import JsonlRunLogSink, RunLogEntry


class WarehouseClient:
    """Primary SDK entry point for warehouse refresh workflows."""

    def __init__(self, config: ConformConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or ConformConfig.from_env()
        self._store = LayerStore(self._config)
        self._sink = JsonlRunLogSink(self._config)
        self._runner = PipelineRunner(self._config, store=self._store, sink=self._sink)

    @property
    def config(self) -> ConformConfig:
        """Return the runtime configuration."""
        return self._config

    def load_raw(self, source_root: str | None = None) -> RawSnapshot:
        """Load source exports into the raw layer.

        Args:
            source_root: Optional override of the configured source root.

        Returns:
            Loaded raw snapshot.

        Raises:
            ConformPipelineError: If sources cannot be read or the layer cannot be written.
        """
        return self._runner.load_raw(_optional_path(source_root))

    def cleanse(self) -> CleansedSnapshot:
        """Rebuild the cleansed layer from the stored raw layer."""
        return self._runner.cleanse()

    def assemble(self) -> DimensionalSnapshot:
        """Rebuild the dimensional layer from the stored cleansed layer."""
        return self._runner.assemble()

    def validate(self) -> tuple[QualityReport, Path]:
        """Validate stored layers and save the report.

        Returns:
            Pair of quality report and saved report path.
        """
        return self._runner.validate()

    def run(self, source_root: str | None = None) -> PipelineResult:
        """Run every stage end to end under one run id.

        Args:
            source_root: Optional override of the configured source root.

        Returns:
            Pipeline result with row counts and quality report.
        """
        return self._runner.run(_optional_path(source_root))

    def read_layer(self, layer: str) -> LayerSnapshot:
        """Load the latest stored snapshot of a layer."""
        return self._store.read_layer(layer)

    def dimensional_view(self) -> DimensionalSnapshot:
        """Recompute the dimensional model from the latest cleansed layer.

        Nothing is persisted and no run log entry is written.

        Returns:
            Fresh dimensional snapshot.
        """
        cleansed = self._store.read_layer(CLEANSED_LAYER)
        return dimensional_transform(cleansed, RunContext.start(self._config.processing_date))

    def run_log_entries(self, run_id: str | None = None) -> list[RunLogEntry]:
        """List run log entries, optionally for one run."""
        return self._sink.read_entries(run_id)

    def run_log(self, run_id: str | None = None) -> RunSummary:
        """Summarize one run from the run log.

        Args:
            run_id: Run to summarize; the most recent run when omitted.

        Returns:
            Run summary.

        Raises:
            ConformStoreError: If the run log is empty or has no such run.
        """
        resolved_run_id = run_id or self._sink.latest_run_id()
        if resolved_run_id is None:
            raise ConformStoreError(
                f"Run log at {self._sink.log_path} has no entries. Run the pipeline first."
            )
        return summarize_run(self._sink.read_entries(resolved_run_id), resolved_run_id)

    def with_data_root(self, data_root: str) -> "WarehouseClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        return self.with_overrides(data_root=data_root)

    def with_overrides(
        self,
        data_root: str | None = None,
        source_root: str | None = None,
        processing_date: date | None = None,
    ) -> "WarehouseClient":
        """Clone the client with any provided config values replaced."""
        updated_config = self._config
        if data_root:
            updated_config = replace(updated_config, data_root=_resolve(data_root))
        if source_root:
            updated_config = replace(updated_config, source_root=_resolve(source_root))
        if processing_date:
            updated_config = replace(updated_config, processing_date=processing_date)
        return WarehouseClient(updated_config)

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec through the shared execution engine.

        Args:
            spec_file: Path to YAML run-spec file.

        Returns:
            Ordered command output lines.
        """
        return execute_run_spec_file(self, spec_file)


def _resolve(path_value: str) -> Path:
    return Path(path_value).expanduser().resolve()


def _optional_path(path_value: str | None) -> Path | None:
    return _resolve(path_value) if path_value else None
