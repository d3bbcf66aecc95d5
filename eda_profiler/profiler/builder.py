"""
ProfileBuilder — runs every profiling component over one dataset and
assembles the immutable :class:`Profile` the report layer consumes.

Pipeline::

    classify_fields ──┬── audit_missing
                      ├── describe_numeric      (numeric fields)
                      ├── find_correlations     (numeric fields)
                      └── profile_categories    (categorical fields)

A profile is built in one synchronous pass and never updated; profiling a
new dataset yields a new :class:`Profile`.  The pass can be aborted at any
per-field loop boundary through a cancel event or the configured
``timeout_seconds``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import EmptyDatasetError, ProfilingCancelled
from eda_profiler.models.dataset import Dataset, FieldType
from eda_profiler.profiler.categorical import CategoryFrequency, profile_categories
from eda_profiler.profiler.correlation import CorrelationPair, find_correlations
from eda_profiler.profiler.descriptive import NumericSummary, describe_numeric
from eda_profiler.profiler.field_classifier import classify_fields
from eda_profiler.profiler.missingness import MissingStat, audit_missing

__all__ = ["Profile", "ProfileBuilder", "build_profile"]

logger = logging.getLogger(__name__)


class _CancelSignal(Protocol):
    def is_set(self) -> bool: ...


# ---------------------------------------------------------------------------
# Profile — the aggregate result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Profile:
    """Complete statistical profile of one dataset.

    ``numeric_columns`` and ``categorical_columns`` partition ``columns``;
    both keep field order.
    """

    record_count: int
    columns: tuple[str, ...]
    field_types: Mapping[str, FieldType]
    numeric_columns: tuple[str, ...]
    categorical_columns: tuple[str, ...]
    missing_data: Mapping[str, MissingStat]
    """Only fields with at least one missing value."""
    num_stats: Mapping[str, NumericSummary]
    correlations: tuple[CorrelationPair, ...]
    """Significant pairs, strongest first."""
    cat_stats: Mapping[str, CategoryFrequency]
    source: str = ""

    @property
    def has_missing_data(self) -> bool:
        return len(self.missing_data) > 0

    @property
    def data_quality(self) -> str:
        return "Needs Attention" if self.has_missing_data else "Excellent"


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------

class _Checkpoint:
    """Raises :class:`ProfilingCancelled` once cancelled or past the deadline."""

    def __init__(self, timeout_seconds: float | None, cancel_event: _CancelSignal | None) -> None:
        self._deadline = None if timeout_seconds is None else time.monotonic() + timeout_seconds
        self._timeout = timeout_seconds
        self._cancel_event = cancel_event

    def __call__(self, stage: str) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise ProfilingCancelled(stage, "cancel requested")
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise ProfilingCancelled(stage, f"exceeded {self._timeout:g}s timeout")


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class ProfileBuilder:
    """Orchestrates the profiling components.

    Usage::

        builder = ProfileBuilder(ProfilerConfig())
        profile = builder.build(dataset)
    """

    def __init__(self, config: ProfilerConfig | None = None) -> None:
        self._config = config or ProfilerConfig()

    @property
    def config(self) -> ProfilerConfig:
        return self._config

    def build(self, dataset: Dataset, *, cancel_event: _CancelSignal | None = None) -> Profile:
        """Profile *dataset*.

        Raises
        ------
        EmptyDatasetError
            The dataset has no rows.
        ProfilingCancelled
            *cancel_event* was set, or ``timeout_seconds`` elapsed.
        """
        if len(dataset) == 0:
            raise EmptyDatasetError(dataset.source)

        cfg = self._config
        checkpoint = _Checkpoint(cfg.timeout_seconds, cancel_event)
        start = time.perf_counter()

        field_types = classify_fields(
            dataset,
            sample_size=cfg.sample_size,
            empty_sample_type=cfg.empty_sample_type,
            checkpoint=checkpoint,
        )
        numeric = tuple(f for f in dataset.fields if field_types[f] is FieldType.NUMERIC)
        categorical = tuple(f for f in dataset.fields if field_types[f] is FieldType.CATEGORICAL)
        logger.info(
            "Classified %d fields: %d numeric, %d categorical",
            len(dataset.fields), len(numeric), len(categorical),
        )

        missing = audit_missing(dataset, checkpoint=checkpoint)
        num_stats = describe_numeric(dataset, numeric, checkpoint=checkpoint)
        correlations = find_correlations(
            dataset,
            numeric,
            max_fields=cfg.max_numeric_fields,
            min_pair_samples=cfg.min_pair_samples,
            threshold=cfg.correlation_threshold,
            max_pairs=cfg.max_correlations,
            checkpoint=checkpoint,
        )
        cat_stats = profile_categories(
            dataset,
            categorical,
            max_fields=cfg.max_categorical_fields,
            top_n=cfg.top_categories,
            checkpoint=checkpoint,
        )

        profile = Profile(
            record_count=len(dataset),
            columns=dataset.fields,
            field_types=MappingProxyType(field_types),
            numeric_columns=numeric,
            categorical_columns=categorical,
            missing_data=MappingProxyType(missing),
            num_stats=MappingProxyType(num_stats),
            correlations=tuple(correlations),
            cat_stats=MappingProxyType(cat_stats),
            source=dataset.source,
        )
        logger.info(
            "Profiled %d rows in %.2fs: %d field(s) with missing values, %d significant correlation(s)",
            profile.record_count, time.perf_counter() - start,
            len(missing), len(correlations),
        )
        return profile


def build_profile(dataset: Dataset, config: ProfilerConfig | None = None) -> Profile:
    """Shorthand for ``ProfileBuilder(config).build(dataset)``."""
    return ProfileBuilder(config).build(dataset)
