"""Core data-model classes: tagged values and the dataset."""

from eda_profiler.models.dataset import Dataset, FieldType, Row
from eda_profiler.models.values import (
    Missing,
    MissingKind,
    Number,
    Text,
    Value,
    as_number,
    category_key,
    coerce_value,
    is_missing,
)

__all__ = [
    "Dataset",
    "FieldType",
    "Row",
    "Missing",
    "MissingKind",
    "Number",
    "Text",
    "Value",
    "as_number",
    "category_key",
    "coerce_value",
    "is_missing",
]
