"""Append-only run log.

This module records one entry per pipeline step and stage, with
timing, row counts, and status, as JSON lines under the data root.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from core.config import ConformConfig
from core.constants import LOGS_DIR_NAME, RUN_LOG_FILE_NAME, STATUS_FAILED, STATUS_SUCCESS
from core.errors import ConformStoreError


@dataclass(frozen=True)
class RunLogEntry:
    """One persisted run log entry.

    Attributes:
        stage_name: Step or stage name, e.g. ``cleansed.crm_cust_info``.
        start_time: UTC step start.
        end_time: UTC step end.
        duration_ms: Step duration in milliseconds.
        row_count: Rows produced by the step.
        status: ``SUCCESS`` or ``FAILED``.
        error_message: Failure details for ``FAILED`` entries.
        run_id: Owning run id.
    """

    stage_name: str
    start_time: datetime
    end_time: datetime
    duration_ms: float
    row_count: int
    status: str
    error_message: str | None = None
    run_id: str | None = None


class LogSink(Protocol):
    """Destination for run log entries."""

    def record(
        self,
        stage_name: str,
        start_time: datetime,
        end_time: datetime,
        row_count: int,
        status: str,
        error_message: str | None = None,
        run_id: str | None = None,
    ) -> RunLogEntry:
        """Persist one entry and return it."""
        ...


class JsonlRunLogSink:
    """Run log sink appending JSON lines to ``<data_root>/logs``."""

    def __init__(self, config: ConformConfig) -> None:
        self._log_path = config.data_root / LOGS_DIR_NAME / RUN_LOG_FILE_NAME

    @property
    def log_path(self) -> Path:
        """Path of the JSONL run log."""
        return self._log_path

    def record(
        self,
        stage_name: str,
        start_time: datetime,
        end_time: datetime,
        row_count: int,
        status: str,
        error_message: str | None = None,
        run_id: str | None = None,
    ) -> RunLogEntry:
        """Append one entry to the run log.

        Args:
            stage_name: Step or stage name.
            start_time: UTC step start.
            end_time: UTC step end.
            row_count: Rows produced by the step.
            status: ``SUCCESS`` or ``FAILED``.
            error_message: Optional failure details.
            run_id: Optional owning run id.

        Returns:
            The appended entry.

        Raises:
            ConformStoreError: If status is unknown or the append fails.
        """
        if status not in (STATUS_SUCCESS, STATUS_FAILED):
            raise ConformStoreError(
                f"Unsupported run log status '{status}'. Use {STATUS_SUCCESS} or {STATUS_FAILED}."
            )
        entry = RunLogEntry(
            stage_name=stage_name,
            start_time=start_time,
            end_time=end_time,
            duration_ms=round((end_time - start_time).total_seconds() * 1000, 2),
            row_count=row_count,
            status=status,
            error_message=error_message,
            run_id=run_id,
        )
        try:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._log_path.open("a", encoding="utf-8") as log_file:
                log_file.write(json.dumps(_payload_from_entry(entry), sort_keys=True) + "\n")
        except OSError as error:
            raise ConformStoreError(
                f"Failed to append run log entry to {self._log_path}: {error}. "
                "Check write permissions and available disk space."
            ) from error
        return entry

    def read_entries(self, run_id: str | None = None) -> list[RunLogEntry]:
        """Load entries in append order, optionally for one run.

        Raises:
            ConformStoreError: If a log line is invalid.
        """
        if not self._log_path.exists():
            return []
        entries: list[RunLogEntry] = []
        lines = self._log_path.read_text(encoding="utf-8").splitlines()
        for line_number, line in enumerate(lines, 1):
            if not line.strip():
                continue
            payload = self._parse_json_line(line, line_number)
            try:
                entry = _entry_from_payload(payload)
            except (KeyError, ValueError) as error:
                raise ConformStoreError(
                    f"Invalid run log entry at {self._log_path}:{line_number}: {error}. "
                    "Remove or repair the malformed line."
                ) from error
            if run_id is None or entry.run_id == run_id:
                entries.append(entry)
        return entries

    def latest_run_id(self) -> str | None:
        """Return the run id of the most recent entry, if any."""
        for entry in reversed(self.read_entries()):
            if entry.run_id:
                return entry.run_id
        return None

    def _parse_json_line(self, line: str, line_number: int) -> dict[str, Any]:
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as error:
            raise ConformStoreError(
                f"Failed to parse run log at {self._log_path}:{line_number}: {error.msg}. "
                "Remove or repair the malformed line."
            ) from error
        if not isinstance(payload, dict):
            raise ConformStoreError(
                f"Failed to parse run log at {self._log_path}:{line_number}: "
                "expected a JSON object per line."
            )
        return payload


def _payload_from_entry(entry: RunLogEntry) -> dict[str, Any]:
    payload = asdict(entry)
    payload["start_time"] = entry.start_time.isoformat()
    payload["end_time"] = entry.end_time.isoformat()
    return payload


def _entry_from_payload(payload: dict[str, Any]) -> RunLogEntry:
    error_message = payload.get("error_message")
    run_id = payload.get("run_id")
    return RunLogEntry(
        stage_name=str(payload["stage_name"]),
        start_time=datetime.fromisoformat(str(payload["start_time"])),
        end_time=datetime.fromisoformat(str(payload["end_time"])),
        duration_ms=float(payload["duration_ms"]),
        row_count=int(payload["row_count"]),
        status=str(payload["status"]),
        error_message=str(error_message) if error_message is not None else None,
        run_id=str(run_id) if run_id is not None else None,
    )
