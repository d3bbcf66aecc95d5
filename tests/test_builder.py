"""Tests for eda_profiler.profiler.builder (end-to-end profiling)."""

import itertools
import threading
import time
from types import SimpleNamespace

import pytest

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import EmptyDatasetError, ProfilingCancelled
from eda_profiler.models import Dataset, FieldType, Text
from eda_profiler.profiler.builder import Profile, ProfileBuilder, build_profile


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _loan_records(n: int = 40) -> list[dict]:
    grades = ["A", "B", "C", "B", "A", "D"]
    records = []
    for i in range(n):
        records.append({
            "customer_id": f"C{i:03d}",
            "age": 20 + i,
            "income": 1000 * (20 + i) + (50 if i % 2 else -50),
            "late_payments": (i * 7) % 5,
            "grade": grades[i % len(grades)],
            "notes": "" if i % 4 == 0 else ("NA" if i % 4 == 1 else "ok"),
            "credit_score": None if i == 3 else 850 - 5 * i,
        })
    return records


def _loan_dataset(n: int = 40) -> Dataset:
    return Dataset.from_records(_loan_records(n), source="loans.xlsx")


# ======================================================================
# Profile shape
# ======================================================================

class TestProfileBuilder:
    def test_empty_dataset_rejected(self):
        with pytest.raises(EmptyDatasetError):
            ProfileBuilder().build(Dataset.from_records([], source="empty.csv"))

    def test_columns_partitioned(self):
        profile = build_profile(_loan_dataset())
        assert profile.record_count == 40
        assert profile.columns == (
            "customer_id", "age", "income", "late_payments", "grade", "notes", "credit_score",
        )
        assert profile.numeric_columns == ("age", "income", "late_payments", "credit_score")
        assert profile.categorical_columns == ("customer_id", "grade", "notes")
        assert set(profile.numeric_columns) | set(profile.categorical_columns) == set(profile.columns)
        assert not set(profile.numeric_columns) & set(profile.categorical_columns)
        assert profile.field_types["grade"] is FieldType.CATEGORICAL

    def test_missing_data(self):
        profile = build_profile(_loan_dataset())
        assert set(profile.missing_data) == {"notes", "credit_score"}
        assert profile.missing_data["notes"].count == 20
        assert profile.missing_data["notes"].display_percentage == "50.00"
        assert profile.missing_data["credit_score"].count == 1
        assert profile.missing_data["credit_score"].percentage == 2.5
        assert profile.data_quality == "Needs Attention"

    def test_numeric_stats(self):
        profile = build_profile(_loan_dataset())
        age = profile.num_stats["age"]
        assert age.count == 40
        assert age.min == 20 and age.max == 59
        assert age.median == 40
        assert profile.num_stats["credit_score"].count == 39

    def test_correlations(self):
        profile = build_profile(_loan_dataset())
        pairs = {(p.field_a, p.field_b): p for p in profile.correlations}
        assert ("age", "income") in pairs
        assert pairs[("age", "income")].coefficient == pytest.approx(1.0, abs=1e-3)
        assert pairs[("age", "credit_score")].coefficient == pytest.approx(-1.0)
        for pair in profile.correlations:
            assert abs(pair.coefficient) > 0.3

    def test_categorical_stats(self):
        profile = build_profile(_loan_dataset())
        grade = profile.cat_stats["grade"]
        assert grade[0][0] == Text("A") or grade[0][0] == Text("B")
        assert [count for _, count in grade] == sorted((c for _, c in grade), reverse=True)
        assert profile.cat_stats["notes"] == ((Text("ok"), 20),)
        assert len(profile.cat_stats["customer_id"]) == 5

    def test_clean_dataset_quality(self):
        ds = Dataset.from_records([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}])
        profile = build_profile(ds)
        assert profile.missing_data == {}
        assert profile.data_quality == "Excellent"
        assert profile.correlations == ()

    def test_idempotent(self):
        ds = _loan_dataset()
        first = ProfileBuilder().build(ds)
        second = ProfileBuilder().build(ds)
        assert first == second

    def test_profile_is_immutable(self):
        profile = build_profile(_loan_dataset())
        with pytest.raises(AttributeError):
            profile.record_count = 0  # type: ignore[misc]
        with pytest.raises(TypeError):
            profile.missing_data["x"] = None  # type: ignore[index]

    def test_all_empty_field(self):
        records = [{"v": i, "blank": ""} for i in range(5)]
        profile = build_profile(Dataset.from_records(records))
        assert profile.missing_data["blank"].count == 5
        assert profile.missing_data["blank"].display_percentage == "100.00"
        assert "blank" not in profile.num_stats
        assert profile.field_types["blank"] is FieldType.CATEGORICAL
        assert profile.cat_stats["blank"] == ()

    def test_all_empty_field_vacuous_numeric(self):
        records = [{"v": i, "blank": ""} for i in range(5)]
        cfg = ProfilerConfig(empty_sample_type=FieldType.NUMERIC)
        profile = build_profile(Dataset.from_records(records), cfg)
        assert "blank" in profile.numeric_columns
        assert "blank" not in profile.num_stats

    def test_config_limits_applied(self):
        cfg = ProfilerConfig(max_categorical_fields=1, top_categories=2)
        profile = build_profile(_loan_dataset(), cfg)
        assert list(profile.cat_stats) == ["customer_id"]
        assert len(profile.cat_stats["customer_id"]) == 2

    def test_returns_profile(self):
        assert isinstance(build_profile(_loan_dataset(12)), Profile)


# ======================================================================
# Cancellation
# ======================================================================

class TestCancellation:
    def test_cancel_event(self):
        event = threading.Event()
        event.set()
        with pytest.raises(ProfilingCancelled) as excinfo:
            ProfileBuilder().build(_loan_dataset(), cancel_event=event)
        assert excinfo.value.stage == "field classification"

    def test_unset_event_runs(self):
        profile = ProfileBuilder().build(_loan_dataset(), cancel_event=threading.Event())
        assert profile.record_count == 40

    def test_timeout(self, monkeypatch):
        readings = itertools.chain([0.0, 0.0], itertools.repeat(100.0))
        fake_time = SimpleNamespace(monotonic=lambda: next(readings), perf_counter=time.perf_counter)
        monkeypatch.setattr("eda_profiler.profiler.builder.time", fake_time)
        cfg = ProfilerConfig(timeout_seconds=1.0)
        with pytest.raises(ProfilingCancelled, match="timeout"):
            ProfileBuilder(cfg).build(_loan_dataset())
