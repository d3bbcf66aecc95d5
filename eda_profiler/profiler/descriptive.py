"""
Descriptive statistics for numeric fields.

Per field: count, mean, median, min and max over the values that coerce
to numbers; everything else in the column is dropped silently.

The median is the element at index ``n // 2`` of the ascending values.
For an even count that is the *upper* of the two middle elements, not
their average: ``[1, 2, 3, 4]`` has median ``3``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from eda_profiler.models.dataset import Dataset
from eda_profiler.models.values import Number

__all__ = ["NumericSummary", "summarize_values", "describe_numeric"]

logger = logging.getLogger(__name__)


def _noop(stage: str) -> None:
    return None


@dataclass(frozen=True)
class NumericSummary:
    """Summary of one numeric field.  ``mean`` is kept unrounded."""

    count: int
    mean: float
    median: float
    min: float
    max: float

    @property
    def display_mean(self) -> str:
        return f"{self.mean:.2f}"


def summarize_values(values: Sequence[float]) -> NumericSummary | None:
    """Summarise raw floats, or return ``None`` when there are none."""
    if len(values) == 0:
        return None

    arr = np.sort(np.asarray(values, dtype=np.float64), kind="stable")
    n = len(arr)
    return NumericSummary(
        count=n,
        mean=float(arr.sum() / n),
        median=float(arr[n // 2]),
        min=float(arr[0]),
        max=float(arr[-1]),
    )


def describe_numeric(
    dataset: Dataset,
    numeric_fields: Iterable[str],
    *,
    checkpoint: Callable[[str], None] = _noop,
) -> dict[str, NumericSummary]:
    """Return ``{field: NumericSummary}``.

    Fields without a single numeric value are omitted rather than
    reported with zeros.
    """
    stats: dict[str, NumericSummary] = {}
    for name in numeric_fields:
        checkpoint("descriptive statistics")
        values = [v.value for v in dataset.column(name) if isinstance(v, Number)]
        summary = summarize_values(values)
        if summary is None:
            logger.debug("Field %r has no numeric values; skipping summary", name)
            continue
        stats[name] = summary
    return stats
