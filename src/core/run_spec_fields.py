"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors across CLI and SDK flows.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import ConformRunSpecError


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise ConformRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def optional_bool(
    args: Mapping[str, object],
    field_name: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise ConformRunSpecError(f"Run-spec field '{field_name}' must be true/false.")


def validate_step_keys(
    args: Mapping[str, object],
    command: str,
    allowed_keys: frozenset[str],
) -> None:
    """Reject step arguments the command does not accept."""
    unknown_keys = sorted(set(args) - allowed_keys)
    if unknown_keys:
        raise ConformRunSpecError(
            f"Run-spec command '{command}' does not accept: {', '.join(unknown_keys)}."
        )
