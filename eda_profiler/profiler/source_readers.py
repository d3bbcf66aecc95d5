"""
File readers — turn a spreadsheet-like file into a :class:`Dataset`.

pandas does the parsing; every cell is handed to the dataset as a raw
object so that tagging (number / text / missing) happens in one place,
:func:`eda_profiler.models.values.coerce_value`.  pandas' own NA
detection is switched off where the format allows it, otherwise the
``"NA"`` sentinel would never reach the missing-value audit as itself.

Supported formats: Excel (``.xlsx``, ``.xls``, first sheet by default),
CSV, JSON (records), Parquet.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pandas as pd

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import SourceReadError
from eda_profiler.models.dataset import Dataset

__all__ = ["SUPPORTED_SUFFIXES", "read_frame", "frame_to_dataset", "read_dataset"]

logger = logging.getLogger(__name__)


def _read_excel(path: Path, sheet: str | int | None) -> pd.DataFrame:
    return pd.read_excel(
        path,
        sheet_name=0 if sheet is None else sheet,
        dtype=object,
        keep_default_na=False,
        na_values=[],
    )


def _read_csv(path: Path, sheet: str | int | None) -> pd.DataFrame:
    return pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[])


def _read_json(path: Path, sheet: str | int | None) -> pd.DataFrame:
    return pd.read_json(path, orient="records", dtype=False)


def _read_parquet(path: Path, sheet: str | int | None) -> pd.DataFrame:
    return pd.read_parquet(path)


_READERS: dict[str, Callable[[Path, str | int | None], pd.DataFrame]] = {
    ".xlsx": _read_excel,
    ".xls": _read_excel,
    ".csv": _read_csv,
    ".json": _read_json,
    ".parquet": _read_parquet,
}

SUPPORTED_SUFFIXES = tuple(_READERS)


def read_frame(
    path: str | Path,
    *,
    sheet: str | int | None = None,
    max_file_size_mb: int = 500,
) -> pd.DataFrame:
    """Read *path* into a DataFrame, choosing the parser by file suffix."""
    path = Path(path)
    if not path.is_file():
        raise SourceReadError(f"Data file not found: {path}")

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > max_file_size_mb:
        raise SourceReadError(f"File too large: {size_mb:.1f}MB > {max_file_size_mb}MB")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise SourceReadError(
            f"Unsupported file format: {path.suffix or '(none)'} "
            f"(expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )

    logger.info("Reading %s", path)
    try:
        return reader(path, sheet)
    except (ValueError, OSError, ImportError) as exc:
        raise SourceReadError(f"Error parsing file {path.name}: {exc}") from exc


def frame_to_dataset(
    frame: pd.DataFrame,
    *,
    missing_tokens: tuple[str, ...] = ("NA",),
    source: str = "",
) -> Dataset:
    """Convert a DataFrame to a :class:`Dataset`, column order preserved.

    pandas missing markers (NaN, NaT, ``pd.NA``) become ``None`` first so
    they are tagged as absent cells.
    """
    frame = frame.astype(object)
    frame = frame.where(frame.notna(), None)
    records = frame.to_dict(orient="records")
    return Dataset.from_records(records, missing_tokens=missing_tokens, source=source)


def read_dataset(
    path: str | Path,
    *,
    sheet: str | int | None = None,
    config: ProfilerConfig | None = None,
) -> Dataset:
    """Read a file and return it as a :class:`Dataset`.

    An empty file yields an empty dataset; :class:`~eda_profiler.errors.EmptyDatasetError`
    is raised later, by the profile builder.
    """
    cfg = config or ProfilerConfig()
    path = Path(path)
    frame = read_frame(path, sheet=sheet, max_file_size_mb=cfg.max_file_size_mb)
    dataset = frame_to_dataset(frame, missing_tokens=cfg.missing_tokens, source=path.name)
    logger.info("Loaded %s: %d rows, %d fields", path.name, len(dataset), len(dataset.fields))
    return dataset
