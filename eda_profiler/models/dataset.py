"""
Dataset — the immutable, in-memory table the engine profiles.

Rows share one field set, taken from the first record's keys.  Later
records are not reconciled against it: a key they lack becomes
``Missing(ABSENT)`` and a key they add is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from eda_profiler.models.values import ABSENT, Value, coerce_value

__all__ = ["FieldType", "Row", "Dataset"]

logger = logging.getLogger(__name__)

Row = Mapping[str, Value]


class FieldType(Enum):
    """Semantic type of a field, fixed once a profile is built."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


@dataclass(frozen=True)
class Dataset:
    """Ordered, read-only sequence of rows plus the shared field list.

    Build one with :meth:`from_records`; the raw cells are coerced to
    tagged values exactly once, there.
    """

    fields: tuple[str, ...]
    rows: tuple[Row, ...]
    source: str = ""
    """Where the rows came from (file name), for messages only."""

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        *,
        missing_tokens: Iterable[str] = ("NA",),
        source: str = "",
    ) -> "Dataset":
        tokens = frozenset(missing_tokens)
        field_names: tuple[str, ...] | None = None
        rows: list[Row] = []

        for record in records:
            if field_names is None:
                field_names = tuple(str(key) for key in record.keys())
            raw = {str(key): val for key, val in record.items()}
            row = {
                name: coerce_value(raw[name], tokens) if name in raw else ABSENT
                for name in field_names
            }
            rows.append(MappingProxyType(row))

        logger.debug("Built dataset %r: %d rows, %d fields", source, len(rows), len(field_names or ()))
        return cls(fields=field_names or (), rows=tuple(rows), source=source)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def record_count(self) -> int:
        return len(self.rows)

    def column(self, name: str, limit: int | None = None) -> Iterator[Value]:
        """Yield the values of field *name*, top to bottom, optionally the first *limit* only."""
        rows = self.rows if limit is None else self.rows[:limit]
        for row in rows:
            yield row[name]
