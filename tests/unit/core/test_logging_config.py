"""Unit tests for structured logging configuration."""

from __future__ import annotations

import json

from core.logging_config import get_logger


def test_log_events_go_to_stderr_as_json(capsys) -> None:
    """Log events should render as JSON on stderr and leave stdout untouched."""
    get_logger("conform.tests").info("table_loaded", table_name="crm_cust_info", row_count=6)
    captured = capsys.readouterr()

    payload = json.loads(captured.err.strip().splitlines()[-1])

    assert captured.out == ""
    assert (payload["event"], payload["row_count"], payload["level"]) == ("table_loaded", 6, "info")
