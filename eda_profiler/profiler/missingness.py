"""
Missing-value audit.

Scans the whole dataset (not just the classification sample) and counts,
per field, the cells that are absent, empty, or a sentinel token.  Fields
without a single missing cell are left out of the result entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from eda_profiler.models.dataset import Dataset
from eda_profiler.models.values import Missing

__all__ = [
    "MissingStat",
    "MissingTreatment",
    "audit_missing",
    "recommend_treatment",
]

logger = logging.getLogger(__name__)


def _noop(stage: str) -> None:
    return None


@dataclass(frozen=True)
class MissingStat:
    count: int
    percentage: float
    """``count / record_count * 100`` rounded to 2 decimals."""

    @property
    def display_percentage(self) -> str:
        return f"{self.percentage:.2f}"


class MissingTreatment(Enum):
    """Suggested handling for a field, by missing percentage."""

    SIMPLE_IMPUTATION = "Mean/Median Imputation"
    ADVANCED_IMPUTATION = "Advanced Imputation (KNN/MICE)"
    REMOVE_OR_FLAG = "Consider Removal or Flag as Missing"

    @property
    def label(self) -> str:
        return self.value


def audit_missing(
    dataset: Dataset,
    *,
    checkpoint: Callable[[str], None] = _noop,
) -> dict[str, MissingStat]:
    """Return ``{field: MissingStat}`` for fields with at least one missing cell."""
    record_count = len(dataset)
    result: dict[str, MissingStat] = {}
    if record_count == 0:
        return result

    for name in dataset.fields:
        checkpoint("missing-value audit")
        count = sum(1 for value in dataset.column(name) if isinstance(value, Missing))
        if count == 0:
            continue
        result[name] = MissingStat(
            count=count,
            percentage=round(count / record_count * 100, 2),
        )

    logger.debug("Missing values in %d of %d fields", len(result), len(dataset.fields))
    return result


def recommend_treatment(
    stat: MissingStat,
    *,
    simple_below: float = 5.0,
    advanced_below: float = 30.0,
) -> MissingTreatment:
    """Map a missing percentage onto the three treatment tiers."""
    if stat.percentage < simple_below:
        return MissingTreatment.SIMPLE_IMPUTATION
    if stat.percentage < advanced_below:
        return MissingTreatment.ADVANCED_IMPUTATION
    return MissingTreatment.REMOVE_OR_FLAG
