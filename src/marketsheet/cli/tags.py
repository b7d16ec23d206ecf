"""Tags subcommand: list, resolve."""

from __future__ import annotations

import typer

from marketsheet.ingestion.polymarket.gamma import GammaAPIError, fetch_tags
from marketsheet.ingestion.polymarket.tags import match_tag

app = typer.Typer(help="Official tag catalog lookups")


@app.command("list")
def list_tags(
    ctx: typer.Context,
    contains: str | None = typer.Option(None, "--contains", help="Only labels containing this text"),
) -> None:
    """List tags from the Gamma API."""
    settings = ctx.obj["settings"]
    try:
        tags = fetch_tags(settings.gamma_api_base, timeout=settings.timeout_sec)
    except GammaAPIError as e:
        typer.echo(f"Error fetching tags: {e}", err=True)
        raise typer.Exit(1)
    if contains:
        tags = [t for t in tags if contains.lower() in t.label.lower()]
    for t in tags:
        typer.echo(f"  {t.id or '-':>8}  {t.label}")
    typer.echo(f"Total: {len(tags)} tags")


@app.command("resolve")
def resolve(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name, e.g. Sports"),
) -> None:
    """Show which tag id a category name resolves to."""
    settings = ctx.obj["settings"]
    try:
        tags = fetch_tags(settings.gamma_api_base, timeout=settings.timeout_sec)
    except GammaAPIError as e:
        typer.echo(f"Error fetching tags: {e}", err=True)
        raise typer.Exit(1)
    tag = match_tag(name, tags, threshold=settings.tag_match_threshold)
    if tag is None:
        typer.echo(f"No tag matches '{name}'; keyword classification will be used.")
        raise typer.Exit(1)
    typer.echo(f"{name} -> {tag.id} ({tag.label})")
