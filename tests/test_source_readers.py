"""Tests for eda_profiler.profiler.source_readers."""

import json

import pandas as pd
import pytest

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import SourceReadError
from eda_profiler.models import Missing, MissingKind, Number, Text
from eda_profiler.profiler.source_readers import frame_to_dataset, read_dataset


class TestReadDataset:
    def test_csv_keeps_sentinel_and_empty(self, tmp_path):
        path = tmp_path / "loans.csv"
        path.write_text("id,amount,status\n1,100.5,NA\n2,,paid\n3,abc,\n", encoding="utf-8")
        ds = read_dataset(path)
        assert ds.fields == ("id", "amount", "status")
        assert ds.source == "loans.csv"
        assert [row["amount"] for row in ds] == [Number(100.5), Missing(MissingKind.EMPTY), Text("abc")]
        assert ds.rows[0]["status"] == Missing(MissingKind.SENTINEL)
        assert ds.rows[2]["status"] == Missing(MissingKind.EMPTY)

    def test_csv_custom_tokens(self, tmp_path):
        path = tmp_path / "t.csv"
        path.write_text("a\nnull\nNA\n", encoding="utf-8")
        ds = read_dataset(path, config=ProfilerConfig(missing_tokens=("null",)))
        assert ds.rows[0]["a"] == Missing(MissingKind.SENTINEL)
        assert ds.rows[1]["a"] == Text("NA")

    def test_json_records(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text(json.dumps([{"a": 1, "b": "x"}, {"a": 2}]), encoding="utf-8")
        ds = read_dataset(path)
        assert ds.fields == ("a", "b")
        assert ds.rows[0]["a"] == Number(1.0)
        assert ds.rows[1]["b"] == Missing(MissingKind.ABSENT)

    def test_excel_first_sheet(self, tmp_path):
        pytest.importorskip("openpyxl")
        path = tmp_path / "book.xlsx"
        with pd.ExcelWriter(path) as writer:
            pd.DataFrame({"x": [1, 2], "y": ["a", None]}).to_excel(writer, sheet_name="first", index=False)
            pd.DataFrame({"z": [9]}).to_excel(writer, sheet_name="second", index=False)
        ds = read_dataset(path)
        assert ds.fields == ("x", "y")
        assert ds.rows[0]["x"] == Number(1.0)
        assert isinstance(ds.rows[1]["y"], Missing)

        second = read_dataset(path, sheet="second")
        assert second.fields == ("z",)

    def test_header_only_csv_is_empty(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("a,b\n", encoding="utf-8")
        assert len(read_dataset(path)) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError, match="not found"):
            read_dataset(tmp_path / "nope.csv")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("a\n1\n", encoding="utf-8")
        with pytest.raises(SourceReadError, match="Unsupported"):
            read_dataset(path)

    def test_too_large(self, tmp_path):
        path = tmp_path / "big.csv"
        path.write_text("a\n" + "1\n" * 600_000, encoding="utf-8")
        with pytest.raises(SourceReadError, match="too large"):
            read_dataset(path, config=ProfilerConfig(max_file_size_mb=1))

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SourceReadError):
            read_dataset(path)


class TestFrameToDataset:
    def test_nan_becomes_absent(self):
        frame = pd.DataFrame({"a": [1.0, float("nan")], "b": [pd.NaT, pd.Timestamp("2024-01-02")]})
        ds = frame_to_dataset(frame)
        assert ds.rows[1]["a"] == Missing(MissingKind.ABSENT)
        assert ds.rows[0]["b"] == Missing(MissingKind.ABSENT)
        assert isinstance(ds.rows[1]["b"], Text)
