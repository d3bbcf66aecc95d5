"""
Pairwise Pearson correlation between numeric fields.

Only the first ``max_fields`` numeric fields are paired, which bounds the
O(k² · n) cost.  For each unordered pair the rows where both sides are
numbers form the sample; a pair with fewer than ``min_pair_samples`` rows
is skipped.  Pairs with ``|r| > threshold`` are kept, ranked by the
unrounded ``|r|`` (ties keep pair order) and cut to ``max_pairs``.

Coefficients are stored at full precision.  Rounding to three decimals is
a display concern (:attr:`CorrelationPair.display_coefficient`).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from eda_profiler.models.dataset import Dataset
from eda_profiler.models.values import as_number

__all__ = [
    "CorrelationPair",
    "CorrelationStrength",
    "pearson",
    "correlation_strength",
    "find_correlations",
]

logger = logging.getLogger(__name__)


def _noop(stage: str) -> None:
    return None


@dataclass(frozen=True)
class CorrelationPair:
    """An unordered pair of distinct fields and their Pearson ``r``."""

    field_a: str
    field_b: str
    coefficient: float
    sample_size: int

    @property
    def magnitude(self) -> float:
        return abs(self.coefficient)

    @property
    def rounded_coefficient(self) -> float:
        return round(self.coefficient, 3)

    @property
    def display_coefficient(self) -> str:
        return f"{self.coefficient:.3f}"

    def involves(self, name: str) -> bool:
        return name in (self.field_a, self.field_b)


class CorrelationStrength(Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


def correlation_strength(
    coefficient: float,
    *,
    moderate_above: float = 0.5,
    strong_above: float = 0.7,
) -> CorrelationStrength:
    """Label ``|r|``: strong above 0.7, moderate above 0.5, weak otherwise."""
    magnitude = abs(coefficient)
    if magnitude > strong_above:
        return CorrelationStrength.STRONG
    if magnitude > moderate_above:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.WEAK


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson's r from sums of products.

    Returns ``0.0`` when either side has no variance.
    """
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    n = len(x)
    if n == 0 or n != len(y):
        raise ValueError(f"pearson() needs two equal, non-empty samples (got {len(x)} and {len(y)})")

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_x_sq = float((x * x).sum())
    sum_y_sq = float((y * y).sum())
    sum_xy = float((x * y).sum())

    numerator = sum_xy - (sum_x * sum_y / n)
    # Float cancellation on a constant column can leave a tiny negative term.
    variance_product = (sum_x_sq - sum_x * sum_x / n) * (sum_y_sq - sum_y * sum_y / n)
    if variance_product <= 0.0:
        return 0.0

    r = numerator / math.sqrt(variance_product)
    return max(-1.0, min(1.0, r))


def find_correlations(
    dataset: Dataset,
    numeric_fields: Sequence[str],
    *,
    max_fields: int = 10,
    min_pair_samples: int = 11,
    threshold: float = 0.3,
    max_pairs: int = 10,
    checkpoint: Callable[[str], None] = _noop,
) -> list[CorrelationPair]:
    """Return the significant pairs among the first *max_fields* numeric fields."""
    candidates = list(numeric_fields)[:max_fields]
    columns = {name: [as_number(v) for v in dataset.column(name)] for name in candidates}

    significant: list[CorrelationPair] = []
    for i, field_a in enumerate(candidates):
        checkpoint("correlation analysis")
        col_a = columns[field_a]
        for field_b in candidates[i + 1:]:
            col_b = columns[field_b]
            pairs = [(a, b) for a, b in zip(col_a, col_b) if a is not None and b is not None]
            if len(pairs) < min_pair_samples:
                logger.debug(
                    "Skipping %s/%s: %d paired rows (< %d)",
                    field_a, field_b, len(pairs), min_pair_samples,
                )
                continue

            xs, ys = zip(*pairs)
            r = pearson(xs, ys)
            if abs(r) > threshold:
                significant.append(CorrelationPair(field_a, field_b, r, len(pairs)))

    significant.sort(key=lambda pair: pair.magnitude, reverse=True)
    logger.debug("%d significant correlation pair(s) among %d fields", len(significant), len(candidates))
    return significant[:max_pairs]
