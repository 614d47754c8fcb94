"""Structured errors for report scanning, configuration and host access."""

from __future__ import annotations
from typing import Any


class ReportSortError(Exception):
    """Base class for report sorting issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(ReportSortError):
    """Raised when sort options are unknown or carry invalid values."""


class HostTreeError(ReportSortError):
    """Raised when the host tree adapter is handed something it cannot resolve."""
