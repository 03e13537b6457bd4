"""Unit tests for report settings and output helpers."""

import json
from pathlib import Path

import polars as pl
import pytest
from pydantic import ValidationError

from insolvency_eda import config as cfg
from insolvency_eda.config_loader import load_report_config
from insolvency_eda.config_models import ReportConfig


@pytest.mark.unit
class TestReportConfig:
    def test_defaults(self):
        config = ReportConfig()

        assert config.analysis_year == 2020
        assert config.pivot == 20
        assert config.top_courts == 10
        assert config.min_court_cases == 100
        assert config.filings == cfg.FILINGS_FILE

    def test_load_toml_resolves_relative_paths(self, tmp_path):
        path = tmp_path / "report.toml"
        path.write_text(
            'filings = "data/filings.csv"\n'
            'output_dir = "out"\n'
            "analysis_year = 2024\n",
            encoding="utf-8",
        )

        config = load_report_config(path)

        assert config.filings == tmp_path / "data" / "filings.csv"
        assert config.output_dir == tmp_path / "out"
        assert config.analysis_year == 2024

    def test_load_json(self, tmp_path):
        path = tmp_path / "report.json"
        path.write_text(json.dumps({"filings": "/srv/filings.csv", "pivot": 30}), encoding="utf-8")

        config = load_report_config(path)

        assert config.filings == Path("/srv/filings.csv")
        assert config.pivot == 30
        assert config.output_dir is None

    @pytest.mark.failure
    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "report.yaml"
        path.write_text("pivot: 20\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported config format"):
            load_report_config(path)

    @pytest.mark.failure
    @pytest.mark.parametrize(
        "overrides",
        [
            {"pivot": 100},
            {"pivot": -1},
            {"top_courts": 0},
            {"separator": ";;"},
            {"opening_subject": "X", "closing_subject": "X"},
        ],
    )
    def test_invalid_settings(self, overrides):
        with pytest.raises(ValidationError):
            ReportConfig(**overrides)


@pytest.mark.unit
class TestOutputHelpers:
    def test_write_table_and_metadata(self, output_dir):
        path = cfg.write_table(pl.DataFrame({"subject": ["a"], "count": [1]}), "counts.csv")
        cfg.write_metadata({"rows": 1, "filings": Path("x.csv")})

        assert path == output_dir / "counts.csv"
        assert pl.read_csv(path).rows() == [("a", 1)]
        meta = json.loads((output_dir / "metadata.json").read_text(encoding="utf-8"))
        assert meta == {"rows": 1, "filings": "x.csv"}

    @pytest.mark.failure
    def test_figure_write_failure_raises(self, output_dir):
        class Broken:
            def write_html(self, *args, **kwargs):
                raise OSError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            cfg.safe_write_figure(Broken(), "broken.html")
