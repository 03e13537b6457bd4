"""Report pipeline: load -> clean -> sort -> {keys, counts, durations}.

Each step takes the previous step's table and returns a new one, so
``build_report`` is a pure function of the raw table and the config.
``run_report`` adds the side effects: console tables, HTML figures, CSV
summaries and run metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import polars as pl
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from insolvency_eda import config as cfg
from insolvency_eda.config_loader import load_report_config
from insolvency_eda.config_models import ReportConfig
from insolvency_eda.duration import (
    DurationEstimate,
    cases_per_court,
    closed_cases,
    duration_box_by_court,
    duration_histogram,
    durations_by_court,
    estimate_durations,
)
from insolvency_eda.exploration import (
    counts_by_subject_figure,
    counts_over_time,
    counts_over_time_by_subject,
    counts_over_time_figure,
    filing_type_counts,
    filing_type_figure,
)
from insolvency_eda.keys import candidate_key_report, name_collisions, same_day_collisions
from insolvency_eda.load_clean import (
    CleaningSummary,
    LoadError,
    clean,
    load_raw,
    null_summary,
    sort_filings,
)
from insolvency_eda.report import console, render_table


@dataclass(frozen=True)
class ReportResult:
    cleaning: CleaningSummary
    filings: pl.DataFrame
    null_counts: pl.DataFrame
    key_report: pl.DataFrame
    name_collisions: pl.DataFrame
    same_day_collisions: pl.DataFrame
    type_counts: pl.DataFrame
    daily: pl.DataFrame
    daily_by_subject: pl.DataFrame
    durations: DurationEstimate
    top_courts: pl.DataFrame
    court_durations: pl.DataFrame


def build_report(raw: pl.DataFrame, config: ReportConfig) -> ReportResult:
    null_counts = null_summary(raw)
    cleaned, cleaning = clean(raw)
    filings = sort_filings(cleaned)

    durations = estimate_durations(
        closed_cases(filings, config.closing_subject),
        analysis_year=config.analysis_year,
        pivot=config.pivot,
    )

    return ReportResult(
        cleaning=cleaning,
        filings=filings,
        null_counts=null_counts,
        key_report=candidate_key_report(filings),
        name_collisions=name_collisions(filings),
        same_day_collisions=same_day_collisions(filings),
        type_counts=filing_type_counts(filings),
        daily=counts_over_time(filings),
        daily_by_subject=counts_over_time_by_subject(
            filings, [config.opening_subject, config.closing_subject]
        ),
        durations=durations,
        top_courts=cases_per_court(durations.frame, top_n=config.top_courts),
        court_durations=durations_by_court(
            durations.frame, min_cases=config.min_court_cases
        ),
    )


def render_report(result: ReportResult, out: Optional[Console] = None) -> None:
    out = out or console
    out.print("\n[bold]Insolvency Filings Report[/bold]")
    out.print(
        f"Rows raw: {result.cleaning.rows_raw:,} | "
        f"duplicates removed: {result.cleaning.duplicates_removed:,} | "
        f"without debtor name: {result.cleaning.incomplete_removed:,} | "
        f"rows clean: {result.cleaning.rows_clean:,}"
    )
    render_table(result.null_counts, "Missing values (raw)", out=out)
    render_table(result.key_report, "Candidate keys", out=out)
    render_table(result.name_collisions, "Same case under several names", out=out)
    render_table(result.same_day_collisions, "Same day, court, file number and subject", out=out)
    render_table(result.type_counts, "Filings by type", max_rows=None, out=out)
    out.print(
        f"Closed cases: {result.durations.frame.height:,} "
        f"(unparsed file numbers: {result.durations.unparsed:,})"
    )
    render_table(result.top_courts, "Closed cases per court", max_rows=None, out=out)


def write_artifacts(result: ReportResult, config: ReportConfig) -> list[Path]:
    written = [
        cfg.write_table(result.type_counts, "filing_type_counts.csv"),
        cfg.write_table(result.daily, "filings_per_day.csv"),
        cfg.write_table(result.key_report, "candidate_keys.csv"),
        cfg.write_table(result.durations.frame, "closed_case_durations.csv"),
        cfg.write_table(result.top_courts, "closed_cases_per_court.csv"),
        cfg.safe_write_figure(filing_type_figure(result.type_counts), "1_filing_types.html"),
        cfg.safe_write_figure(counts_over_time_figure(result.daily), "2_filings_per_day.html"),
        cfg.safe_write_figure(
            counts_by_subject_figure(result.daily_by_subject), "3_filings_per_day_by_subject.html"
        ),
        cfg.safe_write_figure(duration_histogram(result.durations.frame), "4_duration_histogram.html"),
        cfg.safe_write_figure(duration_box_by_court(result.court_durations), "5_duration_by_court.html"),
    ]

    cfg.write_metadata(
        {
            "version": cfg.VERSION,
            "timestamp": cfg.RUN_TS,
            "filings": config.filings,
            "config": config.model_dump(mode="json"),
            "cleaning": result.cleaning.as_dict(),
            "closed_cases": result.durations.frame.height,
            "unparsed_file_numbers": result.durations.unparsed,
            "filings_columns": result.filings.columns,
        }
    )
    return written


def run_report(config: ReportConfig, out: Optional[Console] = None) -> ReportResult:
    if config.output_dir is not None:
        cfg.set_output_paths(config.output_dir)

    raw = load_raw(config.filings, separator=config.separator, date_format=config.date_format)
    result = build_report(raw, config)
    render_report(result, out=out)
    write_artifacts(result, config)
    return result


def main(config_path: Optional[Path] = None) -> int:
    """Run the report with ``report.toml`` if present, else with defaults."""
    path = config_path or cfg.REPORT_CONFIG_FILE
    try:
        config = load_report_config(path) if path.exists() else ReportConfig()
        run_report(config)
    except (LoadError, ValidationError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1
    console.print(f"\n[bold]Report complete[/bold] Outputs: {cfg._get_run_dir()}")
    return 0
