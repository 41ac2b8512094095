"""Public SDK surface for conform.

This module provides a stable import path for warehouse users.
It re-exports the primary client, stage transforms, and typed models.
"""

from __future__ import annotations

from cleanse.stage import transform as cleanse
from core.config import ConformConfig
from core.run_context import RunContext
from core.snapshots import CleansedSnapshot, DimensionalSnapshot, RawSnapshot
from dimensional.stage import transform as assemble
from pipeline.run_summary import RunSummary, summarize_run
from pipeline.runner import PipelineResult, PipelineRunner
from quality.check_types import CheckResult, QualityReport
from quality.validator import validate
from store.layer_store import LayerStore
from store.run_log import JsonlRunLogSink, LogSink, RunLogEntry
from store.warehouse_sdk import WarehouseClient

__all__ = [
    "CheckResult",
    "CleansedSnapshot",
    "ConformConfig",
    "DimensionalSnapshot",
    "JsonlRunLogSink",
    "LayerStore",
    "LogSink",
    "PipelineResult",
    "PipelineRunner",
    "QualityReport",
    "RawSnapshot",
    "RunContext",
    "RunLogEntry",
    "RunSummary",
    "WarehouseClient",
    "assemble",
    "cleanse",
    "summarize_run",
    "validate",
]
