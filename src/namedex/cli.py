"""CLI entry point for the name catalog browser.

Provides commands:
  - browse: Filter, search, sort and page through the catalog
  - stats: Whole-catalog element, luck and stroke statistics
  - show: Detailed view of one name (optionally saved for the detail view)
  - compare: Side-by-side comparison of 2-4 names (saved for the compare view)
  - hexagrams: Hexagram names available to --hexagram
  - tui: Launch the interactive terminal browser
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from namedex.catalog import CatalogStore
from namedex.config import BrowserConfig, load_config
from namedex.errors import DataIntegrityError
from namedex.handoff import HandoffStore
from namedex.models import CatalogEntry, FilterCategory, SortKey
from namedex.query import hexagram_names
from namedex.state import (
    AddToCompare,
    AdvancePage,
    BrowserState,
    Command,
    Handoff,
    SetHexagram,
    SetQuery,
    SetSort,
    ShowDetail,
    StartComparison,
    ToggleFilter,
    update,
)
from namedex.tui.widgets.stats import render_statistics

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="namedex - Browse, filter and compare the generated name catalog",
    rich_markup_mode="rich",
)
console = Console()


@app.callback()
def app_callback(
    ctx: typer.Context,
    catalog: Annotated[
        Path | None,
        typer.Option("--catalog", "-c", help="Path to the catalog JSON document"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to a JSON config file"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Resolve configuration shared by all commands."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    config = load_config(config_path)
    if catalog is not None:
        config.catalog_path = catalog
    ctx.obj = config


def get_config(ctx: typer.Context) -> BrowserConfig:
    """Type-safe accessor for BrowserConfig from Typer context."""
    if ctx.obj is None:
        return load_config()
    return ctx.obj


def load_state(config: BrowserConfig) -> BrowserState:
    """Load the catalog and build the initial browser state.

    A missing or unreadable catalog falls back to the built-in record with a
    warning. A malformed record aborts with exit code 1.
    """
    store = CatalogStore()
    try:
        asyncio.run(store.load(config.catalog_path))
        state = BrowserState.initial(
            store.entries,
            page_size=config.page_size,
            compare_limit=config.compare_limit,
        )
    except DataIntegrityError as e:
        console.print(f"[red]Catalog is malformed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    logger.debug("Catalog ready: %d entries from %s", len(state.catalog), config.catalog_path)
    if store.used_fallback:
        console.print(
            f"[yellow]Could not load {config.catalog_path}; "
            "using the built-in sample name.[/yellow]"
        )
    return state


def _run(state: BrowserState, commands: list[Command]) -> tuple[BrowserState, list[str], list[Handoff]]:
    messages: list[str] = []
    handoffs: list[Handoff] = []
    for command in commands:
        outcome = update(state, command)
        state = outcome.state
        if outcome.message:
            messages.append(outcome.message)
        if outcome.handoff is not None:
            handoffs.append(outcome.handoff)
    return state, messages, handoffs


def _save(config: BrowserConfig, handoff: Handoff) -> None:
    path = HandoffStore(config.handoff_dir).put(handoff.key, handoff.payload)
    console.print(f"[green]✓[/green] Saved {handoff.key} to {path}")


def _risk_label(entry: CatalogEntry) -> str:
    return "[yellow]risk[/yellow]" if entry.has_risk else "[green]none[/green]"


@app.command()
def browse(
    ctx: typer.Context,
    query: Annotated[
        str, typer.Option("--query", "-q", help="Search name, pinyin, meaning and hexagram text")
    ] = "",
    score: Annotated[
        list[str] | None,
        typer.Option("--score", help="Score range min-max (repeatable, OR-ed)"),
    ] = None,
    luck: Annotated[
        list[str] | None,
        typer.Option("--luck", help="Luck on any grid: auspicious, neutral, inauspicious (repeatable)"),
    ] = None,
    strokes: Annotated[
        list[str] | None,
        typer.Option("--strokes", help="Total stroke range min-max (repeatable, OR-ed)"),
    ] = None,
    hexagram: Annotated[
        str | None, typer.Option("--hexagram", help="Exact hexagram name")
    ] = None,
    sort: Annotated[
        SortKey, typer.Option("--sort", "-s", help="Result order")
    ] = SortKey.NONE,
    pages: Annotated[
        int, typer.Option("--pages", "-p", min=1, help="Number of pages to show")
    ] = 1,
) -> None:
    """Filter, search and sort the catalog.

    Filters in the same category are OR-ed; different categories are AND-ed.

    Examples:
      namedex browse --luck inauspicious
      namedex browse --score 90-100 --score 80-89 --sort score
      namedex browse -q li --strokes 16-20 --pages 2
    """
    config = get_config(ctx)
    state = load_state(config)

    commands: list[Command] = []
    for category, tokens in (
        (FilterCategory.SCORE, score),
        (FilterCategory.LUCK, luck),
        (FilterCategory.STROKES, strokes),
    ):
        for token in dict.fromkeys(tokens or []):
            commands.append(ToggleFilter(category, token))
    if hexagram:
        commands.append(SetHexagram(hexagram))
    if query:
        commands.append(SetQuery(query))
    if sort is not SortKey.NONE:
        commands.append(SetSort(sort))
    commands.extend(AdvancePage() for _ in range(pages - 1))

    state, _, _ = _run(state, commands)

    if not state.result:
        console.print("[yellow]No names match the given filters.[/yellow]")
        return

    filter_desc = ", ".join(state.filters.to_filter_strings()) or "none"
    table = Table(title=f"Names (filters: {filter_desc})", show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="bold green", no_wrap=True)
    table.add_column("Pinyin")
    table.add_column("Score", justify="right", style="yellow")
    table.add_column("Elements")
    table.add_column("Strokes", justify="right")
    table.add_column("Hexagram", style="blue")
    table.add_column("Total luck")
    table.add_column("Risk")

    for entry in state.visible:
        table.add_row(
            str(entry.id),
            entry.name,
            entry.pinyin,
            str(entry.compatibility.score),
            f"{entry.elements.first.element.value}/{entry.elements.second.element.value}",
            str(entry.total_stroke_count),
            entry.hexagram.name,
            entry.numerology.total.luck.value,
            _risk_label(entry),
        )

    console.print(table)
    console.print(f"\n[dim]Showing {len(state.visible)} of {state.total_count} name(s)[/dim]")
    if state.has_more:
        console.print(f"[dim]More available: --pages {state.cursor.page_count + 1}[/dim]")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show element, luck and stroke statistics over the whole catalog."""
    state = load_state(get_config(ctx))
    if state.statistics is None:
        console.print("[yellow]No statistics available.[/yellow]")
        return
    console.print(render_statistics(state.statistics))
    console.print(f"\n[dim]{len(state.catalog)} name(s) in catalog[/dim]")


@app.command()
def show(
    ctx: typer.Context,
    entry_id: Annotated[int, typer.Argument(help="Name id")],
    save: Annotated[
        bool, typer.Option("--save", help="Save the entry for the detail view")
    ] = False,
) -> None:
    """Show every annotation of one name."""
    config = get_config(ctx)
    state = load_state(config)
    entry = state.find(entry_id)
    if entry is None:
        console.print(f"[red]Error:[/red] No name with id {entry_id}")
        raise typer.Exit(code=1)

    grid_lines = "\n".join(
        f"  {label:<6} {grid.value:>3}  {grid.element.value:<6} {grid.luck.value}"
        for label, grid in zip(
            ("heaven", "person", "earth", "total"), entry.numerology.grids
        )
    )
    risks = "\n".join(f"  - {risk}" for risk in entry.risks) or "  none"
    body = (
        f"[bold]{entry.name}[/bold]  {entry.pinyin}\n"
        f"Characters: {entry.elements.first.character} "
        f"({entry.elements.first.stroke_count}, {entry.elements.first.element.value}, "
        f"{entry.elements.first.radical})  "
        f"{entry.elements.second.character} "
        f"({entry.elements.second.stroke_count}, {entry.elements.second.element.value}, "
        f"{entry.elements.second.radical})\n"
        f"Total strokes: {entry.total_stroke_count}\n"
        f"Zodiac: {entry.compatibility.zodiac_sign}  "
        f"Favorable roots: {', '.join(sorted(entry.compatibility.favorable_roots)) or '-'}  "
        f"Score: {entry.compatibility.score}\n"
        f"Numerology ({entry.numerology.five_element_summary}):\n{grid_lines}\n"
        f"Hexagram: {entry.hexagram.name} - {entry.hexagram.meaning}"
        f" ({entry.hexagram.derivation_note})\n"
        f"Symbolism: {entry.meaning.symbolism}\n"
        f"Interpretation: {entry.meaning.interpretation}\n"
        f"Risks:\n{risks}"
    )
    if entry.notes:
        body += f"\nNotes: {entry.notes}"
    console.print(Panel(body, title=f"Name #{entry.id}", border_style="green"))

    if save:
        _, _, handoffs = _run(state, [ShowDetail(entry_id)])
        for handoff in handoffs:
            _save(config, handoff)


@app.command()
def compare(
    ctx: typer.Context,
    entry_ids: Annotated[list[int], typer.Argument(help="2-4 name ids")],
) -> None:
    """Compare names side by side and save the id list for the compare view."""
    config = get_config(ctx)
    state = load_state(config)

    commands: list[Command] = [AddToCompare(i) for i in entry_ids]
    commands.append(StartComparison())
    state, messages, handoffs = _run(state, commands)

    if not handoffs:
        for message in messages:
            console.print(f"[yellow]{message}[/yellow]")
        raise typer.Exit(code=1)
    for message in messages:
        if message.startswith("Added"):
            continue
        console.print(f"[dim]{message}[/dim]")

    entries = [state.find(i) for i in state.selection.ids]
    table = Table(title="Comparison", show_header=True)
    table.add_column("", style="bold")
    for entry in entries:
        table.add_column(f"{entry.name} (#{entry.id})", style="green")
    rows = [
        ("Pinyin", lambda e: e.pinyin),
        ("Score", lambda e: str(e.compatibility.score)),
        ("Elements", lambda e: f"{e.elements.first.element.value}/{e.elements.second.element.value}"),
        ("Strokes", lambda e: str(e.total_stroke_count)),
        ("Auspicious grids", lambda e: f"{e.auspicious_grid_count}/4"),
        ("Total luck", lambda e: e.numerology.total.luck.value),
        ("Hexagram", lambda e: e.hexagram.name),
        ("Risks", lambda e: str(len(e.risks))),
    ]
    for label, value_of in rows:
        table.add_row(label, *(value_of(e) for e in entries))
    console.print(table)

    for handoff in handoffs:
        _save(config, handoff)


@app.command()
def hexagrams(ctx: typer.Context) -> None:
    """List hexagram names usable with browse --hexagram."""
    state = load_state(get_config(ctx))
    counts = Counter(entry.hexagram.name for entry in state.catalog)

    table = Table(title="Hexagrams", show_header=True)
    table.add_column("Hexagram", style="bold cyan")
    table.add_column("Names", justify="right", style="green")
    for name in hexagram_names(state.catalog):
        table.add_row(name, str(counts[name]))
    console.print(table)


@app.command()
def tui(ctx: typer.Context) -> None:
    """Launch the interactive terminal browser."""
    from namedex.tui import run_tui

    run_tui(config=get_config(ctx))


if __name__ == "__main__":
    app()
