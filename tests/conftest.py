"""Pytest configuration and shared fixtures for the filings report tests.

Provides common fixtures for:
- Small filings tables with known duplicates and gaps
- CSV files on disk for the loader
- Report configs and redirected output directories
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Callable

import polars as pl
import pytest

from insolvency_eda import config as cfg
from insolvency_eda.config_models import ReportConfig

OPENING = "Eröffnungen"
CLOSING = "Entscheidungen im Verfahren"
OTHER = "Sicherungsmaßnahmen"


# Test markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line(
        "markers", "integration: Integration tests for the full report pipeline"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case and boundary condition tests"
    )
    config.addinivalue_line("markers", "failure: Failure scenario tests")


def filings(rows: list[tuple]) -> pl.DataFrame:
    """Build a typed filings table from six-tuples."""
    return pl.DataFrame(
        rows,
        schema={
            "date": pl.Date,
            "insolvency_court": pl.Utf8,
            "court_file_number": pl.Utf8,
            "subject": pl.Utf8,
            "name_debtor": pl.Utf8,
            "domicile_debtor": pl.Utf8,
        },
        orient="row",
    )


def scenario_rows() -> list[tuple]:
    """1,000 raw rows: 947 named filings, 3 without a name, 50 exact copies."""
    subjects = [OPENING, CLOSING, OTHER]
    distinct = []
    for i in range(950):
        distinct.append(
            (
                date(2020, 1, 1) + timedelta(days=i % 60),
                f"AG Court {i % 7}",
                f"{100 + i}/{i % 30:02d}",
                subjects[i % 3],
                None if i >= 947 else f"Firma {i} GmbH",
                None if i % 5 == 0 else f"Ort {i % 11}",
            )
        )
    return distinct + distinct[:50]


@pytest.fixture
def sample_filings() -> pl.DataFrame:
    """Eight raw filings: one exact duplicate, one without debtor name.

    Returns:
        Unsorted table with the six filing columns
    """
    return filings(
        [
            (date(2020, 3, 2), "AG Köln", "12/19", OPENING, "Alpha GmbH", "Köln"),
            (date(2020, 3, 1), "AG Bonn", "7/99", CLOSING, "Beta AG", None),
            (date(2020, 3, 2), "AG Köln", "12/19", OPENING, "Alpha GmbH", "Köln"),
            (date(2020, 3, 1), "AG Bonn", "8/05", CLOSING, None, "Bonn"),
            (date(2020, 3, 3), "AG Aachen", "3/20", OTHER, "Gamma KG", "Aachen"),
            (date(2020, 3, 1), "AG Bonn", "7/99", CLOSING, "Beta Aktiengesellschaft", None),
            (date(2020, 3, 4), "AG Köln", "12/19", CLOSING, "Alpha GmbH", "Köln"),
            (date(2020, 3, 3), "AG Aachen", "IN 4", CLOSING, "Delta eG", "Aachen"),
        ]
    )


@pytest.fixture
def scenario_filings() -> pl.DataFrame:
    return filings(scenario_rows())


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a filings table (or raw text) to a CSV file."""

    def _write(data, name: str = "filings.csv") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            data.write_csv(path)
        return path

    return _write


@pytest.fixture
def output_dir(tmp_path: Path):
    """Send report artifacts to a temporary run directory."""
    run_dir = tmp_path / "run"
    cfg.set_output_paths(run_dir)
    yield run_dir
    cfg.RUN_DIR = None


@pytest.fixture
def report_config(tmp_path: Path) -> ReportConfig:
    return ReportConfig(
        filings=tmp_path / "filings.csv",
        output_dir=tmp_path / "run",
        opening_subject=OPENING,
        closing_subject=CLOSING,
    )
