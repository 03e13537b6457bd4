"""Module 3: Filing counts by type and over time.

Responsibilities:
- Filing type distribution table.
- Daily filing counts, overall and for openings vs. closings.
- Scatter plots for both time series.

Inputs:
- Cleaned and sorted filings table from load_clean.
"""

from typing import Sequence

import plotly.express as px
import plotly.io as pio
import polars as pl

px.defaults.template = "plotly_white"
px.defaults.color_discrete_sequence = px.colors.qualitative.Set2
pio.templates.default = "plotly_white"


def filing_type_counts(df: pl.DataFrame) -> pl.DataFrame:
    return (
        df.group_by("subject")
        .agg(pl.len().alias("count"))
        .sort("subject", nulls_last=True)
    )


def counts_over_time(df: pl.DataFrame) -> pl.DataFrame:
    return df.group_by("date").agg(pl.len().alias("count")).sort("date")


def counts_over_time_by_subject(df: pl.DataFrame, subjects: Sequence[str]) -> pl.DataFrame:
    """Daily counts restricted to the given subjects (openings and closings)."""
    return (
        df.filter(pl.col("subject").is_in(list(subjects)))
        .group_by(["date", "subject"])
        .agg(pl.len().alias("count"))
        .sort(["date", "subject"])
    )


# --------------------------------------------------
# Figures
# --------------------------------------------------
def filing_type_figure(type_counts: pl.DataFrame):
    fig = px.bar(
        type_counts.to_pandas(),
        x="subject",
        y="count",
        color="subject",
        title="Filings by Type",
    )
    fig.update_layout(
        showlegend=False,
        xaxis_title="Subject",
        yaxis_title="Filings",
        xaxis_tickangle=-45,
    )
    return fig


def counts_over_time_figure(daily: pl.DataFrame):
    fig = px.scatter(
        daily.to_pandas(),
        x="date",
        y="count",
        title="Filings per Day",
    )
    fig.update_traces(marker=dict(size=6, opacity=0.7))
    fig.update_layout(xaxis_title="Date", yaxis_title="Filings")
    return fig


def counts_by_subject_figure(daily_by_subject: pl.DataFrame):
    fig = px.scatter(
        daily_by_subject.to_pandas(),
        x="date",
        y="count",
        color="subject",
        title="Openings vs. Decisions per Day",
    )
    fig.update_traces(marker=dict(size=6, opacity=0.7))
    fig.update_layout(xaxis_title="Date", yaxis_title="Filings", legend_title="Subject")
    return fig
