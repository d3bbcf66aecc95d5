"""
eda_profiler — statistical profiling of tabular datasets.

Infers field types, accounts for missing values, summarises numeric
fields, finds significant pairwise correlations and tallies categorical
distributions, then renders the result as an EDA summary report.

Quick start::

    from eda_profiler import ProfileBuilder, read_dataset, render_text_report
    profile = ProfileBuilder().build(read_dataset("loans.xlsx"))
    print(render_text_report(profile))
"""

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import (
    ConfigError,
    EmptyDatasetError,
    ProfilerError,
    ProfilingCancelled,
    SourceReadError,
)
from eda_profiler.models import Dataset, FieldType
from eda_profiler.profiler.builder import Profile, ProfileBuilder, build_profile
from eda_profiler.profiler.source_readers import read_dataset
from eda_profiler.report import profile_to_dict, render_text_report

__all__ = [
    "ProfilerConfig",
    "ProfilerError",
    "EmptyDatasetError",
    "ProfilingCancelled",
    "ConfigError",
    "SourceReadError",
    "Dataset",
    "FieldType",
    "Profile",
    "ProfileBuilder",
    "build_profile",
    "read_dataset",
    "profile_to_dict",
    "render_text_report",
]
__version__ = "1.0.0"
