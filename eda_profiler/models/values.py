"""
Tagged cell values.

Ingestion turns every raw cell into exactly one of :class:`Number`,
:class:`Text` or :class:`Missing` via :func:`coerce_value`, so the engine
pattern-matches on the tag instead of re-inspecting raw Python objects.

Coercion rules
--------------
* ``None`` and float NaN              → ``Missing(ABSENT)``
* ``""``                              → ``Missing(EMPTY)``
* a string equal to a missing token   → ``Missing(SENTINEL)``
* ``bool`` / ``int`` / finite ``float`` → ``Number``
* a string holding a finite decimal literal (surrounding whitespace
  allowed, e.g. ``" 1.5e3 "``)        → ``Number`` (keeping the cell text)
* anything else                       → ``Text``
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import numpy as np

__all__ = [
    "MissingKind",
    "Number",
    "Text",
    "Missing",
    "Value",
    "coerce_value",
    "is_missing",
    "as_number",
    "category_key",
]


_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class MissingKind(Enum):
    """Why a cell counts as missing."""

    ABSENT = "absent"
    EMPTY = "empty"
    SENTINEL = "sentinel"


@dataclass(frozen=True, slots=True)
class Number:
    value: float
    raw: str | None = field(default=None, compare=False)
    """Cell text the number was parsed from; ``None`` for numeric cells."""

    def __str__(self) -> str:
        if self.raw is not None:
            return self.raw
        if self.value.is_integer() and abs(self.value) < 1e16:
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class Text:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Missing:
    kind: MissingKind = MissingKind.ABSENT

    def __str__(self) -> str:
        return ""


Value = Union[Number, Text, Missing]

ABSENT = Missing(MissingKind.ABSENT)
EMPTY = Missing(MissingKind.EMPTY)
SENTINEL = Missing(MissingKind.SENTINEL)


def _parse_literal(text: str) -> float | None:
    """Return the float held by *text*, or ``None`` if it is not a finite literal."""
    stripped = text.strip()
    if not _DECIMAL_LITERAL.fullmatch(stripped):
        return None
    number = float(stripped)
    return number if math.isfinite(number) else None


def coerce_value(raw: Any, missing_tokens: Iterable[str] = ("NA",)) -> Value:
    """Tag a raw cell value.  Never raises."""
    if isinstance(raw, (Number, Text, Missing)):
        return raw
    if raw is None:
        return ABSENT
    if isinstance(raw, str):
        if raw == "":
            return EMPTY
        if raw in missing_tokens:
            return SENTINEL
        parsed = _parse_literal(raw)
        return Number(parsed, raw) if parsed is not None else Text(raw)
    if isinstance(raw, (bool, np.bool_)):
        return Number(1.0 if raw else 0.0)
    if isinstance(raw, numbers.Real):
        number = float(raw)
        if math.isnan(number):
            return ABSENT
        return Number(number) if math.isfinite(number) else Text(str(raw))

    text = str(raw)
    parsed = _parse_literal(text)
    return Number(parsed) if parsed is not None else Text(text)


def is_missing(value: Value) -> bool:
    return isinstance(value, Missing)


def as_number(value: Value) -> float | None:
    """Return the float of a :class:`Number`, ``None`` for every other tag."""
    if isinstance(value, Number):
        return value.value
    return None


def category_key(value: Value) -> tuple[str, Any]:
    """Identity of a cell for frequency counting.

    String cells compare by their exact text, so ``"01"``, ``"1"`` and
    ``"1.0"`` stay apart even though they parse to the same number.
    Numeric cells compare by value.
    """
    if isinstance(value, Number):
        return ("number", value.value) if value.raw is None else ("text", value.raw)
    if isinstance(value, Text):
        return ("text", value.value)
    return ("missing", value.kind)
