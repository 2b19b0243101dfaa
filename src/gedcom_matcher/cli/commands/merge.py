from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from gedcom_matcher.config import get_config
from gedcom_matcher.core.context import MatchContext
from gedcom_matcher.core.exceptions import MatcherError
from gedcom_matcher.core.pipeline import Pipeline
from gedcom_matcher.logging import get_logger, set_debug

# stdout carries the merged GEDCOM
console = Console(stderr=True)

OUTCOMES = ("found", "not_found", "ambiguous")


def stats_table(stats: Dict[str, Dict[str, int]]) -> Table:
    """One row per pass; the usual outcomes get their own columns."""
    table = Table(title="Reconciliation")
    table.add_column("Pass", style="bold")
    for outcome in OUTCOMES:
        table.add_column(outcome.replace("_", " ").title(), justify="right")
    table.add_column("Other")

    for name in sorted(stats):
        counts = stats[name]
        other = ", ".join(
            f"{key}={value}" for key, value in sorted(counts.items()) if key not in OUTCOMES
        )
        table.add_row(name, *(str(counts.get(o, 0)) for o in OUTCOMES), other)
    return table


def merge_command(
    old: Path = typer.Argument(..., exists=True, readable=True, help="Hand-curated original"),
    new: Path = typer.Argument(..., exists=True, readable=True, help="Re-imported file"),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the merged GEDCOM to a file instead of stdout",
    ),
    wrap: Optional[int] = typer.Option(
        None,
        "--wrap",
        min=20,
        help="Maximum output line length before CONC continuation",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-v",
        help="Log every candidate checked",
    ),
):
    """
    Carry identifiers and lost content from OLD into NEW and write the result.
    """
    config = get_config()
    if debug:
        set_debug(True)
    log = get_logger("gedcom_matcher.match")

    ctx = MatchContext(
        config=config,
        logger=log,
        old_path=str(old),
        new_path=str(new),
        output_path=str(out) if out else None,
        wrap_width=wrap or config.wrap_width,
        output_encoding=config.output_encoding,
        debug=debug,
    )

    try:
        Pipeline(ctx).run()
    except MatcherError as exc:
        console.print(f"[bold red]error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(stats_table(ctx.stats))
