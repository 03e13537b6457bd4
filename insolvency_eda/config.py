"""Shared configuration and helpers for the insolvency EDA report."""

import json
from datetime import datetime
from pathlib import Path

import polars as pl

from insolvency_eda import __version__

# -------------------------------------------------------------------
# Paths and versioning
# -------------------------------------------------------------------
# Project root (repo root) = parent of insolvency_eda/
PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = PROJECT_ROOT / "Data"
FILINGS_FILE = DATA_DIR / "insolvency_filings.csv"
REPORT_CONFIG_FILE = PROJECT_ROOT / "report.toml"

# Default paths (used when the report is run standalone)
REPORTS_DIR = PROJECT_ROOT / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"

VERSION = f"v{__version__}"
RUN_TS = datetime.now().strftime("%Y%m%d_%H%M%S")

# Set by set_output_paths() when the caller picks the output location
RUN_DIR = None


def set_output_paths(run_dir: Path) -> None:
    """Send all report artifacts of this run to ``run_dir``.

    When not called, falls back to the versioned reports/figures/ structure.
    """
    global RUN_DIR
    RUN_DIR = Path(run_dir)
    RUN_DIR.mkdir(parents=True, exist_ok=True)


def _get_run_dir() -> Path:
    """Get RUN_DIR, creating default if not set."""
    global RUN_DIR
    if RUN_DIR is None:
        FIGURES_DIR.mkdir(parents=True, exist_ok=True)
        RUN_DIR = FIGURES_DIR / f"{VERSION}_{RUN_TS}"
        RUN_DIR.mkdir(parents=True, exist_ok=True)
    return RUN_DIR


# -------------------------------------------------------------------
# Schema and null tokens
# -------------------------------------------------------------------
FILING_COLUMNS = [
    "date",
    "insolvency_court",
    "court_file_number",
    "subject",
    "name_debtor",
    "domicile_debtor",
]

NULL_TOKENS = ["", "NULL", "Null", "null", "NA", "N/A", "na", "NaN", "nan", "-", "--"]


def write_metadata(meta: dict) -> None:
    """Write run metadata into RUN_DIR/metadata.json."""
    meta_path = _get_run_dir() / "metadata.json"
    try:
        with open(meta_path, "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2, default=str)
    except OSError as e:
        print(f"[WARN] Metadata export error: {e}")


def write_table(df: pl.DataFrame, filename: str) -> Path:
    """Write a summary table as CSV into the run directory."""
    output_path = _get_run_dir() / filename
    df.write_csv(str(output_path))
    return output_path


def safe_write_figure(fig, filename: str) -> Path:
    """Write plotly figure to the run directory.

    Args:
        fig: Plotly figure object
        filename: HTML filename (e.g., "2_filings_over_time.html")

    Uses CDN for Plotly.js instead of embedding the full library.
    """
    output_path = _get_run_dir() / filename
    try:
        fig.write_html(
            str(output_path),
            include_plotlyjs="cdn",
            config={"displayModeBar": True, "displaylogo": False},
        )
    except Exception as e:
        raise RuntimeError(f"Failed to write {filename} to {output_path}: {e}")
    return output_path
