"""Tests for eda_profiler.config."""

import pytest

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import ConfigError
from eda_profiler.models import FieldType


def test_defaults():
    cfg = ProfilerConfig()
    assert cfg.sample_size == 100
    assert cfg.max_numeric_fields == 10
    assert cfg.max_categorical_fields == 8
    assert cfg.correlation_threshold == 0.3
    assert cfg.min_pair_samples == 11
    assert cfg.max_correlations == 10
    assert cfg.top_categories == 5
    assert cfg.report_numeric_fields == 10
    assert cfg.report_categorical_fields == 4
    assert cfg.missing_tokens == ("NA",)
    assert cfg.empty_sample_type is FieldType.CATEGORICAL
    assert cfg.timeout_seconds is None


def test_immutable():
    cfg = ProfilerConfig()
    try:
        cfg.sample_size = 5  # type: ignore[misc]
        assert False, "Should have raised FrozenInstanceError"
    except AttributeError:
        pass


def test_custom_values():
    cfg = ProfilerConfig(sample_size=500, correlation_threshold=0.5)
    assert cfg.sample_size == 500
    assert cfg.correlation_threshold == 0.5
    # Ensure other defaults are unchanged
    assert cfg.min_pair_samples == 11


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sample_size": 0},
        {"top_categories": -1},
        {"correlation_threshold": 1.5},
        {"moderate_correlation_above": 0.8, "strong_correlation_above": 0.7},
        {"simple_imputation_below": 40.0},
        {"timeout_seconds": 0},
        {"empty_sample_type": "numeric"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigError):
        ProfilerConfig(**kwargs)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        ProfilerConfig(max_correlations=0)


class TestFromEnv:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("EDA_PROFILER_SAMPLE_SIZE", "250")
        monkeypatch.setenv("EDA_PROFILER_CORRELATION_THRESHOLD", "0.4")
        monkeypatch.setenv("EDA_PROFILER_MISSING_TOKENS", "NA, N/A ,null")
        monkeypatch.setenv("EDA_PROFILER_EMPTY_SAMPLE_TYPE", "NUMERIC")
        monkeypatch.setenv("EDA_PROFILER_TIMEOUT_SECONDS", "2.5")
        cfg = ProfilerConfig.from_env(dotenv=False)
        assert cfg.sample_size == 250
        assert cfg.correlation_threshold == 0.4
        assert cfg.missing_tokens == ("NA", "N/A", "null")
        assert cfg.empty_sample_type is FieldType.NUMERIC
        assert cfg.timeout_seconds == 2.5

    def test_explicit_overrides_win(self, monkeypatch):
        monkeypatch.setenv("EDA_PROFILER_SAMPLE_SIZE", "250")
        cfg = ProfilerConfig.from_env(dotenv=False, sample_size=42, timeout_seconds=None)
        assert cfg.sample_size == 42
        assert cfg.timeout_seconds is None

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("EDA_PROFILER_TOP_CATEGORIES", "five")
        with pytest.raises(ConfigError, match="EDA_PROFILER_TOP_CATEGORIES"):
            ProfilerConfig.from_env(dotenv=False)

    def test_timeout_none(self, monkeypatch):
        monkeypatch.setenv("EDA_PROFILER_TIMEOUT_SECONDS", "none")
        assert ProfilerConfig.from_env(dotenv=False).timeout_seconds is None
