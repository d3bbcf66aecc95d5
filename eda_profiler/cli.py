"""
eda-profiler CLI — profile a spreadsheet and print / save the EDA report.

Commands
--------
- ``profile`` — read a file, print the profile as tables, optionally write
  the text report (``--output``) or the profile as JSON (``--json``).
- ``report`` — read a file and write the text report only.

Usage::

    eda-profiler profile data/loans.xlsx
    eda-profiler profile data/loans.csv --json profile.json --sample-size 500
    eda-profiler report data/loans.xlsx --output EDA_Summary_Report.txt
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from eda_profiler.config import ProfilerConfig
from eda_profiler.errors import ProfilerError
from eda_profiler.profiler.builder import Profile, ProfileBuilder
from eda_profiler.profiler.source_readers import read_dataset
from eda_profiler.report import (
    format_category_value,
    format_number,
    profile_to_dict,
    render_text_report,
    strength_label,
    treatment_label,
)

console = Console()
logger = logging.getLogger("eda_profiler")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _load_profile(path: Path, sheet: str | None, cfg: ProfilerConfig) -> Profile:
    dataset = read_dataset(path, sheet=sheet, config=cfg)
    return ProfileBuilder(cfg).build(dataset)


# ── Console tables ───────────────────────────────────────────────────

def _print_profile(profile: Profile, cfg: ProfilerConfig) -> None:
    overview = Table(title=f"Dataset overview — {escape(profile.source or 'dataset')}")
    overview.add_column("Attribute")
    overview.add_column("Value", justify="right")
    overview.add_row("Records", f"{profile.record_count:,}")
    overview.add_row("Variables", str(len(profile.columns)))
    overview.add_row("Numerical", str(len(profile.numeric_columns)))
    overview.add_row("Categorical", str(len(profile.categorical_columns)))
    overview.add_row("Data quality", profile.data_quality)
    console.print(overview)

    if profile.has_missing_data:
        missing = Table(title="Missing data")
        missing.add_column("Variable")
        missing.add_column("Missing", justify="right")
        missing.add_column("%", justify="right")
        missing.add_column("Recommended treatment")
        for name, stat in profile.missing_data.items():
            missing.add_row(escape(name), str(stat.count), stat.display_percentage, treatment_label(stat, cfg))
        console.print(missing)
    else:
        console.print("[bold green]✓[/] No missing values detected")

    if profile.num_stats:
        numeric = Table(title="Descriptive statistics")
        for header in ("Variable", "Count", "Mean", "Median", "Min", "Max"):
            numeric.add_column(header, justify="left" if header == "Variable" else "right")
        for name, s in list(profile.num_stats.items())[:cfg.report_numeric_fields]:
            numeric.add_row(
                escape(name), str(s.count), s.display_mean,
                format_number(s.median), format_number(s.min), format_number(s.max),
            )
        console.print(numeric)

    if profile.correlations:
        corr = Table(title="Significant correlations")
        corr.add_column("Pair")
        corr.add_column("r", justify="right")
        corr.add_column("Strength")
        styles = {"strong": "red", "moderate": "dark_orange", "weak": "yellow"}
        for pair in profile.correlations:
            label = strength_label(pair, cfg)
            corr.add_row(
                f"{escape(pair.field_a)} ↔ {escape(pair.field_b)}",
                pair.display_coefficient,
                f"[{styles[label]}]{label}[/]",
            )
        console.print(corr)

    for name, freq in list(profile.cat_stats.items())[:cfg.report_categorical_fields]:
        cat = Table(title=f"Top categories — {escape(name)}")
        cat.add_column("Value")
        cat.add_column("Count", justify="right")
        for value, count in freq:
            cat.add_row(escape(format_category_value(value)), str(count))
        console.print(cat)


# ── Commands ─────────────────────────────────────────────────────────

@click.group()
@click.version_option(package_name="eda-profiler")
def main() -> None:
    """eda-profiler — statistical profiling and EDA reports for tabular files."""


@main.command("profile")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--sheet", default=None, help="Excel sheet name (default: first sheet).")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the text report here.")
@click.option("--json", "json_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the profile as JSON here.")
@click.option("--sample-size", type=int, default=None, help="Rows sampled for type classification.")
@click.option("--timeout", type=float, default=None, help="Abort profiling after this many seconds.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def profile_cmd(
    path: Path,
    sheet: str | None,
    output: Path | None,
    json_path: Path | None,
    sample_size: int | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Profile PATH and print the results."""
    _setup_logging(verbose)
    try:
        cfg = ProfilerConfig.from_env(sample_size=sample_size, timeout_seconds=timeout)
        profile = _load_profile(path, sheet, cfg)
    except ProfilerError as exc:
        console.print(f"[bold red]✗[/] {escape(str(exc))}")
        sys.exit(1)

    _print_profile(profile, cfg)

    if output is not None:
        output.write_text(render_text_report(profile, config=cfg), encoding="utf-8")
        console.print(f"[bold green]✓[/] Report saved to {output}")
    if json_path is not None:
        json_path.write_text(json.dumps(profile_to_dict(profile, cfg), indent=2), encoding="utf-8")
        console.print(f"[bold green]✓[/] Profile saved to {json_path}")


@main.command("report")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=Path("EDA_Summary_Report.txt"), show_default=True)
@click.option("--sheet", default=None, help="Excel sheet name (default: first sheet).")
@click.option("--title", default=None, help="Report subtitle.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def report_cmd(path: Path, output: Path, sheet: str | None, title: str | None, verbose: bool) -> None:
    """Write the EDA summary report for PATH."""
    _setup_logging(verbose)
    try:
        cfg = ProfilerConfig.from_env()
        profile = _load_profile(path, sheet, cfg)
    except ProfilerError as exc:
        console.print(f"[bold red]✗[/] {escape(str(exc))}")
        sys.exit(1)

    output.write_text(render_text_report(profile, config=cfg, title=title), encoding="utf-8")
    console.print(f"[bold green]✓[/] Report saved to {output}")


if __name__ == "__main__":
    main()
