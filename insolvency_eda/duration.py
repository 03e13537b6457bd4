"""Module 4: Estimated duration of closed insolvency cases.

Court file numbers look like ``123/05``: the two digits after the slash
are the year the case was registered. A closed case's duration is the
number of years from that start year to the analysis year. The estimate
is a heuristic: file numbers without a ``/NN`` part keep a null duration
and are counted as unparsed instead of being dropped.
"""

import re
from dataclasses import dataclass
from typing import Optional

import plotly.express as px
import polars as pl

FILE_YEAR_PATTERN = r"/(\d{2})"
_FILE_YEAR_RE = re.compile(FILE_YEAR_PATTERN)

ANALYSIS_YEAR = 2020
PIVOT = 20


@dataclass(frozen=True)
class DurationEstimate:
    frame: pl.DataFrame
    unparsed: int

    @property
    def parsed(self) -> int:
        return self.frame.height - self.unparsed


def parse_file_year(court_file_number: Optional[str]) -> Optional[int]:
    """Two-digit year following the first slash, or None if there is none."""
    if court_file_number is None:
        return None
    match = _FILE_YEAR_RE.search(court_file_number)
    if match is None:
        return None
    return int(match.group(1))


def start_year(two_digit: int, pivot: int = PIVOT) -> int:
    """Map a two-digit year onto the calendar.

    Values above ``pivot`` belong to the 1900s, everything else to the
    2000s. With the default pivot 20 maps to 2020 and 21 to 1921.
    """
    if not 0 <= two_digit <= 99:
        raise ValueError(f"Expected a two-digit year, got {two_digit}")
    if two_digit > pivot:
        return 1900 + two_digit
    return 2000 + two_digit


def start_year_expr(two_digit: pl.Expr, pivot: int = PIVOT) -> pl.Expr:
    """Column version of :func:`start_year`; nulls stay null."""
    return pl.when(two_digit > pivot).then(two_digit + 1900).otherwise(two_digit + 2000)


def closed_cases(df: pl.DataFrame, closing_subject: str) -> pl.DataFrame:
    return df.filter(pl.col("subject") == closing_subject)


def estimate_durations(
    closed: pl.DataFrame, analysis_year: int = ANALYSIS_YEAR, pivot: int = PIVOT
) -> DurationEstimate:
    two_digit = (
        pl.col("court_file_number").str.extract(FILE_YEAR_PATTERN, 1).cast(pl.Int64)
    )
    frame = closed.select(
        "insolvency_court",
        "court_file_number",
        (pl.lit(analysis_year) - start_year_expr(two_digit, pivot))
        .cast(pl.Int64)
        .alias("duration"),
    )
    unparsed = frame["duration"].null_count()
    if unparsed:
        print(f"[WARN] {unparsed} closed cases without a /NN year in their file number")
    return DurationEstimate(frame=frame, unparsed=unparsed)


def cases_per_court(durations: pl.DataFrame, top_n: int = 10) -> pl.DataFrame:
    """Courts with the most closed cases, largest first."""
    return (
        durations.group_by("insolvency_court")
        .agg(pl.len().alias("count"))
        .sort(["count", "insolvency_court"], descending=[True, False], nulls_last=True)
        .head(top_n)
    )


def durations_by_court(durations: pl.DataFrame, min_cases: int = 100) -> pl.DataFrame:
    """Only the closed cases of courts with more than ``min_cases`` of them."""
    return durations.filter(pl.len().over("insolvency_court") > min_cases)


# --------------------------------------------------
# Figures
# --------------------------------------------------
def duration_histogram(durations: pl.DataFrame):
    fig = px.histogram(
        durations.to_pandas(),
        x="duration",
        title="Estimated Duration of Closed Cases",
        color_discrete_sequence=["indianred"],
    )
    fig.update_layout(xaxis_title="Years", yaxis_title="Cases")
    return fig


def duration_box_by_court(court_durations: pl.DataFrame):
    fig = px.box(
        court_durations.to_pandas(),
        x="insolvency_court",
        y="duration",
        color=None if court_durations.is_empty() else "insolvency_court",
        title="Estimated Duration by Court",
    )
    fig.update_layout(
        showlegend=False,
        xaxis={"categoryorder": "total descending", "tickangle": -45},
        xaxis_title="Insolvency Court",
        yaxis_title="Years",
    )
    return fig
