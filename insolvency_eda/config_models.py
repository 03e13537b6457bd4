from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from insolvency_eda.config import FILINGS_FILE


class ReportConfig(BaseModel):
    """Settings for one run of the filings report."""

    filings: Path = FILINGS_FILE
    output_dir: Optional[Path] = None
    separator: str = Field(",", min_length=1, max_length=1)
    date_format: str = "%Y-%m-%d"

    opening_subject: str = "Eröffnungen"
    closing_subject: str = "Entscheidungen im Verfahren"

    # Durations are counted up to the year the report was written
    analysis_year: int = Field(2020, ge=1900)
    pivot: int = Field(20, ge=0, le=99)

    top_courts: int = Field(10, ge=1)
    min_court_cases: int = Field(100, ge=0)

    @field_validator("closing_subject")
    @classmethod
    def _check_subjects_differ(cls, v: str, info):
        if v == info.data.get("opening_subject"):
            raise ValueError("opening_subject and closing_subject must differ")
        return v
