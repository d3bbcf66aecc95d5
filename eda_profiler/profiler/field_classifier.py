"""
Field classifier — decide numeric vs categorical per field.

A field is numeric iff every non-missing value in its sample window (the
first ``sample_size`` rows) is a :class:`~eda_profiler.models.Number`.
A single text value anywhere in the window makes it categorical.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from eda_profiler.models.dataset import Dataset, FieldType
from eda_profiler.models.values import Missing, Number

__all__ = ["classify_field", "classify_fields"]

logger = logging.getLogger(__name__)


def _noop(stage: str) -> None:
    return None


def classify_field(
    dataset: Dataset,
    name: str,
    *,
    sample_size: int = 100,
    empty_sample_type: FieldType = FieldType.CATEGORICAL,
) -> FieldType:
    """Classify one field from its sample window."""
    seen = 0
    for value in dataset.column(name, limit=sample_size):
        if isinstance(value, Missing):
            continue
        if not isinstance(value, Number):
            return FieldType.CATEGORICAL
        seen += 1

    if seen == 0:
        logger.warning(
            "Field %r has no values in its first %d rows; classifying as %s",
            name, sample_size, empty_sample_type.value,
        )
        return empty_sample_type
    return FieldType.NUMERIC


def classify_fields(
    dataset: Dataset,
    *,
    sample_size: int = 100,
    empty_sample_type: FieldType = FieldType.CATEGORICAL,
    checkpoint: Callable[[str], None] = _noop,
) -> dict[str, FieldType]:
    """Return ``{field: FieldType}`` for every field, in field order."""
    types: dict[str, FieldType] = {}
    for name in dataset.fields:
        checkpoint("field classification")
        types[name] = classify_field(
            dataset, name, sample_size=sample_size, empty_sample_type=empty_sample_type,
        )
    logger.debug("Classified %d fields: %s", len(types), {k: v.value for k, v in types.items()})
    return types
