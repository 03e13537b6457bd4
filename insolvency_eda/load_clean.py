"""Module 1: Load, clean and order the insolvency filings table.

Responsibilities:
- Read the filings CSV with robust null handling and a strict header check.
- Remove exact duplicate rows and rows without a debtor name.
- Null counts per column as a data-quality diagnostic.
- Deterministic ordering of the cleaned table.
"""

from dataclasses import dataclass
from pathlib import Path

import polars as pl

from insolvency_eda.config import FILING_COLUMNS, NULL_TOKENS

SORT_COLUMNS = FILING_COLUMNS


class LoadError(RuntimeError):
    """The filings file cannot be turned into a filings table."""


@dataclass(frozen=True)
class CleaningSummary:
    rows_raw: int
    duplicates_removed: int
    incomplete_removed: int
    rows_clean: int

    def as_dict(self) -> dict:
        return {
            "rows_raw": self.rows_raw,
            "duplicates_removed": self.duplicates_removed,
            "incomplete_removed": self.incomplete_removed,
            "rows_clean": self.rows_clean,
        }


# -------------------------------------------------------------------
# Loading
# -------------------------------------------------------------------
def _check_header(columns: list[str], path: Path) -> None:
    missing = [c for c in FILING_COLUMNS if c not in columns]
    unexpected = [c for c in columns if c not in FILING_COLUMNS]
    if missing or unexpected:
        raise LoadError(
            f"Header mismatch in {path}: missing={missing} unexpected={unexpected}"
        )


def load_raw(path: Path, separator: str = ",", date_format: str = "%Y-%m-%d") -> pl.DataFrame:
    """Read the filings file into a table with ``date`` as a calendar date.

    Every other column stays text. Any problem with the file, its header or
    its dates aborts with :class:`LoadError`.
    """
    path = Path(path)
    print(f"Loading filings from {path}")
    try:
        raw = pl.read_csv(
            path,
            separator=separator,
            null_values=NULL_TOKENS,
            infer_schema_length=0,
            encoding="utf8-lossy",
        )
    except (OSError, pl.exceptions.PolarsError) as e:
        raise LoadError(f"Cannot read {path}: {e}") from e

    _check_header(raw.columns, path)

    try:
        filings = raw.select(FILING_COLUMNS).with_columns(
            pl.col("date").str.strptime(pl.Date, date_format, strict=True)
        )
    except pl.exceptions.PolarsError as e:
        raise LoadError(f"Malformed date in {path} (expected {date_format}): {e}") from e

    print(f"Filings shape: {filings.shape}")
    return filings


def null_summary(df: pl.DataFrame) -> pl.DataFrame:
    """Null count per column, in column order."""
    return pl.DataFrame(
        {
            "column": df.columns,
            "nulls": [df[c].null_count() for c in df.columns],
        },
        schema={"column": pl.Utf8, "nulls": pl.Int64},
    )


# -------------------------------------------------------------------
# Cleaning
# -------------------------------------------------------------------
def deduplicate(df: pl.DataFrame) -> pl.DataFrame:
    """Keep the first occurrence of every distinct row, in original order."""
    return df.unique(keep="first", maintain_order=True)


def drop_incomplete(df: pl.DataFrame) -> pl.DataFrame:
    """Drop filings without a debtor name. A missing domicile is fine."""
    return df.filter(pl.col("name_debtor").is_not_null())


def clean(df: pl.DataFrame) -> tuple[pl.DataFrame, CleaningSummary]:
    deduped = deduplicate(df)
    complete = drop_incomplete(deduped)
    summary = CleaningSummary(
        rows_raw=df.height,
        duplicates_removed=df.height - deduped.height,
        incomplete_removed=deduped.height - complete.height,
        rows_clean=complete.height,
    )
    print(
        f"Removed {summary.duplicates_removed} duplicate and "
        f"{summary.incomplete_removed} incomplete rows -> {summary.rows_clean} filings"
    )
    return complete, summary


# -------------------------------------------------------------------
# Ordering
# -------------------------------------------------------------------
def sort_filings(df: pl.DataFrame) -> pl.DataFrame:
    """Total ascending order over all six columns, nulls last."""
    return df.sort(SORT_COLUMNS, nulls_last=True, maintain_order=True)
