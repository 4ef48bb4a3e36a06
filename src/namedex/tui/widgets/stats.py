"""Catalog statistics panel: the three aggregations as bar tables."""

from __future__ import annotations

from rich.console import Group
from rich.table import Table
from textual.widgets import Static

from namedex.aggregate import CatalogStatistics


def _bar(count: int, peak: int, width: int = 12) -> str:
    if peak <= 0:
        return ""
    return "█" * max(1, round(width * count / peak)) if count else ""


def _table(title: str, counts: dict) -> Table:
    table = Table(title=title, show_header=False, box=None, padding=(0, 1))
    table.add_column("Bucket", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_column("Bar", style="green")
    peak = max(counts.values(), default=0)
    for key, count in counts.items():
        label = getattr(key, "value", key)
        table.add_row(str(label), str(count), _bar(count, peak))
    return table


def render_statistics(stats: CatalogStatistics) -> Group:
    return Group(
        _table("Elements", stats.by_element),
        _table("Total-grid luck", stats.by_luck),
        _table("Stroke counts", stats.by_stroke_bucket),
    )


class StatsPanel(Static):
    """Whole-catalog statistics, independent of the active filters."""

    DEFAULT_CSS = """
    StatsPanel {
        width: 100%;
        height: auto;
        padding: 1;
    }
    """

    def __init__(self) -> None:
        super().__init__("No statistics", id="stats-panel")

    def show(self, stats: CatalogStatistics | None) -> None:
        if stats is None:
            self.update("No statistics")
            return
        self.update(render_statistics(stats))
