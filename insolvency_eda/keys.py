"""Module 2: Which fields identify a filing?

Read-only diagnostics over the cleaned table. Firm names are spelled
inconsistently and a court + file number pair legitimately recurs across
filings, so none of these checks feed back into cleaning.
"""

from typing import Optional, Sequence

import polars as pl

from insolvency_eda.config import FILING_COLUMNS

CASE_KEY = ["insolvency_court", "court_file_number"]
SAME_DAY_KEY = ["date", "insolvency_court", "court_file_number", "subject"]

DEFAULT_CANDIDATES = [
    ["name_debtor"],
    CASE_KEY,
    ["name_debtor", *CASE_KEY],
    SAME_DAY_KEY,
    FILING_COLUMNS,
]


def _collisions(df: pl.DataFrame, key: list[str]) -> pl.DataFrame:
    rest = [c for c in df.columns if c not in key]
    return (
        df.with_columns(pl.len().over(key).alias("group_size"))
        .filter(pl.col("group_size") > 1)
        .sort(key + rest, nulls_last=True)
    )


def name_collisions(df: pl.DataFrame) -> pl.DataFrame:
    """Cases that appear under more than one debtor name spelling.

    The table is first reduced to one row per distinct ``name_debtor``; every
    remaining row whose court and file number is shared with another row is
    returned together with the size of its group.
    """
    per_name = df.unique(subset=["name_debtor"], keep="first", maintain_order=True)
    return _collisions(per_name, CASE_KEY)


def same_day_collisions(df: pl.DataFrame) -> pl.DataFrame:
    """Filings sharing date, court, file number and subject."""
    return _collisions(df, SAME_DAY_KEY)


def candidate_key_report(
    df: pl.DataFrame, candidates: Optional[Sequence[Sequence[str]]] = None
) -> pl.DataFrame:
    """How close each candidate column set comes to identifying a filing."""
    rows = []
    for cols in candidates or DEFAULT_CANDIDATES:
        cols = list(cols)
        counts = df.group_by(cols).agg(pl.len().alias("n"))
        n_distinct = counts.height
        rows.append(
            {
                "key": ", ".join(cols),
                "n_rows": df.height,
                "n_distinct": n_distinct,
                "n_duplicated_keys": counts.filter(pl.col("n") > 1).height,
                "is_unique": n_distinct == df.height,
            }
        )
    return pl.DataFrame(
        rows,
        schema={
            "key": pl.Utf8,
            "n_rows": pl.Int64,
            "n_distinct": pl.Int64,
            "n_duplicated_keys": pl.Int64,
            "is_unique": pl.Boolean,
        },
    )
