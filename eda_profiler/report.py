"""
Report rendering — turns a :class:`~eda_profiler.profiler.builder.Profile`
into the plain-text EDA summary, or into a JSON-ready dict.

Nothing is computed here beyond formatting: rounding of already-decided
values plus the two display labels (missing-data treatment and
correlation strength).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from eda_profiler.config import ProfilerConfig
from eda_profiler.models.values import Number, Text, Value
from eda_profiler.profiler.builder import Profile
from eda_profiler.profiler.correlation import CorrelationPair, correlation_strength
from eda_profiler.profiler.missingness import MissingStat, recommend_treatment

__all__ = [
    "treatment_label",
    "strength_label",
    "format_category_value",
    "format_number",
    "render_text_report",
    "profile_to_dict",
]

_RULE = "=" * 64
_MAX_CATEGORY_CHARS = 30

_NEXT_STEPS = (
    "Address missing data using recommended imputation strategies",
    "Perform feature engineering based on identified correlations",
    "Conduct outlier detection and treatment for numerical variables",
    "Encode categorical variables for model compatibility",
    "Split data into training and testing sets",
    "Begin predictive model development using identified risk indicators",
)


def treatment_label(stat: MissingStat, config: ProfilerConfig | None = None) -> str:
    cfg = config or ProfilerConfig()
    return recommend_treatment(
        stat,
        simple_below=cfg.simple_imputation_below,
        advanced_below=cfg.advanced_imputation_below,
    ).label


def strength_label(pair: CorrelationPair, config: ProfilerConfig | None = None) -> str:
    cfg = config or ProfilerConfig()
    return correlation_strength(
        pair.coefficient,
        moderate_above=cfg.moderate_correlation_above,
        strong_above=cfg.strong_correlation_above,
    ).value


def format_category_value(value: Value) -> str:
    """Category value as shown in reports, cut to 30 characters."""
    return str(value)[:_MAX_CATEGORY_CHARS]


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


# ---------------------------------------------------------------------------
# Text report
# ---------------------------------------------------------------------------

def _overview(profile: Profile) -> list[str]:
    return [
        "2. DATASET OVERVIEW",
        "",
        "Key Dataset Attributes:",
        f"- Number of records: {profile.record_count:,}",
        f"- Total variables: {len(profile.columns)}",
        f"- Numerical variables: {len(profile.numeric_columns)}",
        f"- Categorical variables: {len(profile.categorical_columns)}",
        f"- Data quality: {profile.data_quality}",
        "",
        "Numerical Variables:",
        ", ".join(profile.numeric_columns),
        "",
        "Categorical Variables:",
        ", ".join(profile.categorical_columns),
    ]


def _missing_section(profile: Profile, cfg: ProfilerConfig) -> list[str]:
    lines = ["3. MISSING DATA ANALYSIS", ""]
    if not profile.has_missing_data:
        lines.append("No missing values detected in the dataset.")
        return lines

    lines.append("The following variables contain missing values that require treatment before modeling:")
    lines.append("")
    for name, stat in profile.missing_data.items():
        lines.append(
            f"- {name}: {stat.count} missing ({stat.display_percentage}%) "
            f"- Recommended: {treatment_label(stat, cfg)}"
        )
    return lines


def _findings_section(profile: Profile, cfg: ProfilerConfig) -> list[str]:
    lines = [
        "4. KEY FINDINGS AND RISK INDICATORS",
        "",
        f"Descriptive Statistics (Top {cfg.report_numeric_fields} Numerical Variables):",
    ]
    for name, stats in list(profile.num_stats.items())[:cfg.report_numeric_fields]:
        lines += [
            "",
            f"{name}:",
            f"  - Count: {stats.count}",
            f"  - Mean: {stats.display_mean}",
            f"  - Median: {format_number(stats.median)}",
            f"  - Min: {format_number(stats.min)}",
            f"  - Max: {format_number(stats.max)}",
        ]

    if profile.correlations:
        lines += ["", "Significant Correlations:", ""]
        for pair in profile.correlations:
            lines.append(
                f"- {pair.field_a} ↔ {pair.field_b}: r = {pair.display_coefficient} "
                f"({strength_label(pair, cfg)})"
            )

    if profile.cat_stats:
        lines += ["", "Categorical Variable Distribution (Top Categories):"]
        for name, freq in list(profile.cat_stats.items())[:cfg.report_categorical_fields]:
            lines += ["", f"{name}:"]
            lines += [f"  - {format_category_value(value)}: {count}" for value, count in freq]
    return lines


def _conclusion_section(profile: Profile) -> list[str]:
    lines = [
        "5. CONCLUSION & NEXT STEPS",
        "",
        "Key Findings Summary:",
        f"- Dataset contains {profile.record_count:,} records with {len(profile.columns)} variables",
        f"- Identified {len(profile.numeric_columns)} numerical and "
        f"{len(profile.categorical_columns)} categorical features",
        f"- Missing data detected in {len(profile.missing_data)} variable(s), requiring treatment",
        f"- Found {len(profile.correlations)} significant correlations between variables",
        "",
        "Recommended Next Steps:",
    ]
    lines += [f"{i}. {step}" for i, step in enumerate(_NEXT_STEPS, 1)]
    return lines


def render_text_report(
    profile: Profile,
    *,
    config: ProfilerConfig | None = None,
    title: str | None = None,
    generated: date | None = None,
) -> str:
    """Render the plain-text EDA summary report for *profile*."""
    cfg = config or ProfilerConfig()
    title = title or (f"{profile.source} Analysis" if profile.source else "Dataset Analysis")
    generated = generated or date.today()

    sections = [
        [
            "EXPLORATORY DATA ANALYSIS (EDA) SUMMARY REPORT",
            title,
            f"Generated: {generated.isoformat()}",
        ],
        [
            "1. INTRODUCTION",
            "",
            "This report presents an exploratory data analysis of the dataset. It describes the "
            "dataset structure, identifies data quality issues, and surfaces patterns and "
            "relationships between variables as input for predictive modeling.",
        ],
        _overview(profile),
        _missing_section(profile, cfg),
        _findings_section(profile, cfg),
        _conclusion_section(profile),
        ["END OF REPORT"],
    ]
    blocks = ["\n".join(section) for section in sections]
    return ("\n\n" + _RULE + "\n\n").join(blocks) + "\n"


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------

def _json_number(value: float) -> int | float:
    if value.is_integer() and abs(value) < 1e16:
        return int(value)
    return value


def _json_value(value: Value) -> Any:
    if isinstance(value, Number):
        return value.raw if value.raw is not None else _json_number(value.value)
    if isinstance(value, Text):
        return value.value
    return None


def profile_to_dict(profile: Profile, config: ProfilerConfig | None = None) -> dict[str, Any]:
    """Plain ``dict`` view of *profile*, safe for ``json.dumps``.

    Correlation coefficients are rounded to 3 decimals and means to 2,
    matching the text report.
    """
    cfg = config or ProfilerConfig()
    return {
        "source": profile.source,
        "recordCount": profile.record_count,
        "columns": list(profile.columns),
        "dataTypes": {name: ft.value for name, ft in profile.field_types.items()},
        "numericColumns": list(profile.numeric_columns),
        "categoricalColumns": list(profile.categorical_columns),
        "dataQuality": profile.data_quality,
        "missingData": {
            name: {
                "count": stat.count,
                "percentage": stat.display_percentage,
                "treatment": treatment_label(stat, cfg),
            }
            for name, stat in profile.missing_data.items()
        },
        "numStats": {
            name: {
                "count": s.count,
                "mean": s.display_mean,
                "median": _json_number(s.median),
                "min": _json_number(s.min),
                "max": _json_number(s.max),
            }
            for name, s in profile.num_stats.items()
        },
        "correlations": [
            {
                "col1": pair.field_a,
                "col2": pair.field_b,
                "corr": pair.rounded_coefficient,
                "strength": strength_label(pair, cfg),
                "n": pair.sample_size,
            }
            for pair in profile.correlations
        ],
        "catStats": {
            name: [[_json_value(value), count] for value, count in freq]
            for name, freq in profile.cat_stats.items()
        },
    }
