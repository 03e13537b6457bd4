"""Console rendering of report tables."""

from typing import Optional

import polars as pl
from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console(legacy_windows=False)


def _cell(value) -> Text:
    # cells are plain text, never rich markup
    return Text("" if value is None else str(value))


def render_table(
    df: pl.DataFrame,
    title: str,
    max_rows: Optional[int] = 20,
    out: Optional[Console] = None,
) -> Table:
    """Print ``df`` as a rich table; at most ``max_rows`` rows are shown.

    Title and truncation note are printed as separate lines so narrow
    tables do not wrap them.
    """
    out = out or console
    table = Table(show_lines=False)
    for name, dtype in df.schema.items():
        table.add_column(name, justify="right" if dtype.is_numeric() else "left")

    shown = df if max_rows is None else df.head(max_rows)
    for row in shown.iter_rows():
        table.add_row(*(_cell(v) for v in row))

    out.print(Text(title, style="bold"))
    out.print(table)
    if max_rows is not None and df.height > max_rows:
        out.print(Text(f"{max_rows} of {df.height:,} rows", style="dim"))
    return table
