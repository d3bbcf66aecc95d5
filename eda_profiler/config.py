"""
eda_profiler configuration — every tunable knob in one place.

Defaults are the fixed constants the profiling engine has always used.
Override via ``ProfilerConfig(sample_size=500, ...)`` or, for the CLI,
through ``EDA_PROFILER_*`` environment variables (see :meth:`from_env`).

Where each knob is consumed
---------------------------
- sample_size / empty_sample_type            → profiler.field_classifier
- missing_tokens                             → models.values (ingestion)
- simple/advanced_imputation_below           → profiler.missingness
- max_numeric_fields / min_pair_samples /
  correlation_threshold / max_correlations   → profiler.correlation
- moderate/strong_correlation_above          → profiler.correlation
- max_categorical_fields / top_categories    → profiler.categorical
- report_numeric_fields / report_categorical_fields → report
- timeout_seconds                            → profiler.builder
- max_file_size_mb                           → profiler.source_readers
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any

from dotenv import load_dotenv

from eda_profiler.errors import ConfigError
from eda_profiler.models.dataset import FieldType

__all__ = ["ProfilerConfig", "ENV_PREFIX"]

logger = logging.getLogger(__name__)

ENV_PREFIX = "EDA_PROFILER_"


@dataclass(frozen=True)
class ProfilerConfig:
    """Immutable configuration for the profiling engine and its collaborators."""

    # ── Field classification ─────────────────────────────────────────
    sample_size: int = 100
    """Rows inspected (from the top of the dataset) when deciding whether a
    field is numeric or categorical."""

    empty_sample_type: FieldType = FieldType.CATEGORICAL
    """Type given to a field whose sample window holds no resolvable value.
    Set to ``FieldType.NUMERIC`` to get the old vacuous-true behaviour."""

    # ── Missing values ───────────────────────────────────────────────
    missing_tokens: tuple[str, ...] = ("NA",)
    """Literal cell values treated like an empty cell."""

    simple_imputation_below: float = 5.0
    """Missing percentage under which mean/median imputation is suggested."""

    advanced_imputation_below: float = 30.0
    """Missing percentage under which KNN/MICE imputation is suggested.
    At or above it the field should be dropped or flagged."""

    # ── Correlation ──────────────────────────────────────────────────
    max_numeric_fields: int = 10
    """Only the first N numeric fields (by field order) are paired up."""

    min_pair_samples: int = 11
    """Pairs with fewer valid (x, y) rows than this are skipped."""

    correlation_threshold: float = 0.3
    """A pair is significant when ``|r|`` is strictly above this."""

    max_correlations: int = 10
    """Keep at most this many significant pairs, strongest first."""

    moderate_correlation_above: float = 0.5
    strong_correlation_above: float = 0.7

    # ── Categorical distributions ────────────────────────────────────
    max_categorical_fields: int = 8
    top_categories: int = 5

    # ── Report limits ────────────────────────────────────────────────
    report_numeric_fields: int = 10
    report_categorical_fields: int = 4

    # ── Runtime ──────────────────────────────────────────────────────
    timeout_seconds: float | None = None
    """Abort a profiling pass once it runs longer than this.  ``None``
    disables the deadline."""

    max_file_size_mb: int = 500

    def __post_init__(self) -> None:
        positive_ints = (
            "sample_size",
            "max_numeric_fields",
            "min_pair_samples",
            "max_correlations",
            "max_categorical_fields",
            "top_categories",
            "report_numeric_fields",
            "report_categorical_fields",
            "max_file_size_mb",
        )
        for name in positive_ints:
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        if not 0.0 <= self.correlation_threshold < 1.0:
            raise ConfigError(
                f"correlation_threshold must be in [0, 1), got {self.correlation_threshold!r}"
            )
        if not 0.0 <= self.moderate_correlation_above <= self.strong_correlation_above <= 1.0:
            raise ConfigError("correlation strength breakpoints must satisfy 0 <= moderate <= strong <= 1")
        if not 0.0 <= self.simple_imputation_below <= self.advanced_imputation_below <= 100.0:
            raise ConfigError("imputation breakpoints must satisfy 0 <= simple <= advanced <= 100")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigError(f"timeout_seconds must be positive, got {self.timeout_seconds!r}")
        if not isinstance(self.empty_sample_type, FieldType):
            raise ConfigError(f"empty_sample_type must be a FieldType, got {self.empty_sample_type!r}")

    # ------------------------------------------------------------------
    # Environment overrides
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, *, dotenv: bool = True, **overrides: Any) -> "ProfilerConfig":
        """Build a config from ``EDA_PROFILER_<FIELD>`` environment variables.

        A ``.env`` file in the working directory is loaded first when
        *dotenv* is true.  Explicit keyword *overrides* win over the
        environment.
        """
        if dotenv:
            load_dotenv()

        kwargs: dict[str, Any] = {}
        defaults = cls()
        for f in fields(cls):
            raw = os.environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            kwargs[f.name] = _parse_env_value(f.name, raw, getattr(defaults, f.name))
            logger.debug("Config %s=%r from environment", f.name, kwargs[f.name])

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)


def _parse_env_value(name: str, raw: str, default: Any) -> Any:
    raw = raw.strip()
    try:
        if name == "timeout_seconds":
            return None if raw.lower() in ("", "none") else float(raw)
        if isinstance(default, FieldType):
            return FieldType(raw.lower())
        if isinstance(default, tuple):
            return tuple(token.strip() for token in raw.split(",") if token.strip())
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from exc
    return raw
