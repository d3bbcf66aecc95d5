"""
Exception hierarchy for the profiling engine.

Only structural failures are raised.  Per-value coercion failures and
degenerate correlation pairs are absorbed locally by the component that
meets them and never surface here.
"""

from __future__ import annotations

__all__ = [
    "ProfilerError",
    "EmptyDatasetError",
    "ProfilingCancelled",
    "ConfigError",
    "SourceReadError",
]


class ProfilerError(Exception):
    """Base class for every error raised by :mod:`eda_profiler`."""


class EmptyDatasetError(ProfilerError):
    """The dataset has no rows, so there is nothing to profile."""

    def __init__(self, source: str = "") -> None:
        self.source = source
        where = f" ({source})" if source else ""
        super().__init__(f"Dataset is empty or could not be parsed{where}")


class ProfilingCancelled(ProfilerError):
    """A profiling pass was aborted at a field-loop boundary."""

    def __init__(self, stage: str, reason: str) -> None:
        self.stage = stage
        self.reason = reason
        super().__init__(f"Profiling cancelled during {stage}: {reason}")


class ConfigError(ProfilerError, ValueError):
    """A :class:`~eda_profiler.config.ProfilerConfig` value is out of range."""


class SourceReadError(ProfilerError):
    """The ingestion layer could not turn a file into a dataset."""
