"""Conform exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Data defects never raise; only infrastructure and configuration do.
"""

from __future__ import annotations


class ConformError(Exception):
    """Base exception for all conform failures."""


class ConformConfigError(ConformError):
    """Raised for invalid runtime configuration."""


class ConformIngestError(ConformError):
    """Raised when source files cannot be read into the raw layer."""


class ConformStoreError(ConformError):
    """Raised for layer store and run log persistence failures."""


class ConformPipelineError(ConformError):
    """Raised when a pipeline stage fails and its output is discarded."""


class ConformRunSpecError(ConformError):
    """Raised for invalid or unsupported run-spec configuration."""
