"""
Frequency distributions for categorical fields.

Counts raw values without normalisation: ``"Yes"`` and ``"yes"`` are two
categories, and so are the cells ``"01"``, ``"1"`` and ``"1.0"`` even though
all three parse to the number 1.  A numeric cell ``1`` is a category of its
own, apart from the text ``"1"``.  Ties in count keep first-seen order.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from typing import Any

from eda_profiler.models.dataset import Dataset
from eda_profiler.models.values import Missing, Value, category_key

__all__ = ["CategoryFrequency", "top_frequencies", "profile_categories"]

logger = logging.getLogger(__name__)

CategoryFrequency = tuple[tuple[Value, int], ...]


def _noop(stage: str) -> None:
    return None


def top_frequencies(values: Sequence[Value], top_n: int = 5) -> CategoryFrequency:
    """Return the *top_n* most frequent non-missing values, most frequent first.

    Each category is reported through the first cell seen with that key.
    """
    counts: Counter[tuple[str, Any]] = Counter()
    first_seen: dict[tuple[str, Any], Value] = {}
    for value in values:
        if isinstance(value, Missing):
            continue
        key = category_key(value)
        first_seen.setdefault(key, value)
        counts[key] += 1
    # most_common() keeps insertion order among equal counts.
    return tuple((first_seen[key], count) for key, count in counts.most_common(top_n))


def profile_categories(
    dataset: Dataset,
    categorical_fields: Sequence[str],
    *,
    max_fields: int = 8,
    top_n: int = 5,
    checkpoint: Callable[[str], None] = _noop,
) -> dict[str, CategoryFrequency]:
    """Return ``{field: CategoryFrequency}`` for the first *max_fields* categorical fields."""
    stats: dict[str, CategoryFrequency] = {}
    for name in list(categorical_fields)[:max_fields]:
        checkpoint("categorical distributions")
        stats[name] = top_frequencies(list(dataset.column(name)), top_n)
    logger.debug("Category distributions for %d field(s)", len(stats))
    return stats
