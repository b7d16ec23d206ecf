"""rows / markets commands: fetch, transform and write the sheet."""

from __future__ import annotations

import sys

import typer

from marketsheet.ingestion.polymarket.gamma import GammaAPIError
from marketsheet.models import ORIGINAL_COLUMNS, STRUCTURED_COLUMNS
from marketsheet.pipeline.build import build_rows
from marketsheet.storage.export import export_rows, write_table


def _run(
    ctx: typer.Context,
    layout: str | None,
    category: str | None,
    limit: int | None,
    output: str | None,
    clock: str | None,
    timezone: str | None,
) -> None:
    if clock not in (None, "24h", "12h"):
        raise typer.BadParameter("must be 24h or 12h", param_hint="--clock")
    settings = ctx.obj["settings"]
    layout = layout or settings.layout
    if layout not in ("structured", "original"):
        raise typer.BadParameter("must be structured or original", param_hint="--layout")
    config = settings.run_config(selected_tag_filter=category, clock=clock, timezone=timezone)
    try:
        result = build_rows(
            config,
            settings.category_keywords,
            settings.gamma_api_base,
            limit=limit,
            layout=layout,
            timeout=settings.timeout_sec,
        )
    except GammaAPIError as e:
        typer.echo(f"Error fetching markets: {e}", err=True)
        raise typer.Exit(1)
    if result.message:
        typer.echo(result.message, err=True)
        return
    columns = ORIGINAL_COLUMNS if layout == "original" else STRUCTURED_COLUMNS
    if output:
        count = export_rows(result.rows, output, columns)
        typer.echo(f"Wrote {count} rows to {output}", err=True)
    else:
        write_table(result.rows, sys.stdout, columns)
    if result.skipped:
        typer.echo(f"Skipped {result.skipped} markets (see log).", err=True)


def rows(
    ctx: typer.Context,
    category: str | None = typer.Option(None, "--category", "-c", help="Category name (overrides config tag_filter)"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Max markets to fetch (clamped to config bounds)"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write .csv or .parquet instead of stdout"),
    clock: str | None = typer.Option(None, "--clock", help="24h or 12h"),
    layout: str | None = typer.Option(None, "--layout", help="structured or original (default from config [output] layout)"),
    timezone: str | None = typer.Option(None, "--timezone", "--tz", help="Timezone label (default from config)"),
) -> None:
    """Sheet rows in the configured layout (structured: one row per outcome side)."""
    _run(ctx, layout, category, limit, output, clock, timezone)


def markets(
    ctx: typer.Context,
    category: str | None = typer.Option(None, "--category", "-c", help="Category name (overrides config tag_filter)"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Max markets to fetch (clamped to config bounds)"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write .csv or .parquet instead of stdout"),
    clock: str | None = typer.Option(None, "--clock", help="24h or 12h"),
    timezone: str | None = typer.Option(None, "--timezone", "--tz", help="Timezone label (default from config)"),
) -> None:
    """Original layout: one descriptive row per market."""
    _run(ctx, "original", category, limit, output, clock, timezone)
