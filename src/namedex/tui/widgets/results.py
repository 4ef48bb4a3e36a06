"""Result cards for the current pagination window.

NameCard renders one catalog entry. ResultsList shows the window, the
total count, and a hint when more pages can be loaded.
"""

from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual import events
from textual.containers import VerticalScroll
from textual.widgets import Static

from namedex.models import CatalogEntry, LuckCategory
from namedex.tui.messages import CardSelected

LUCK_STYLES: dict[LuckCategory, str] = {
    LuckCategory.AUSPICIOUS: "green",
    LuckCategory.NEUTRAL: "yellow",
    LuckCategory.INAUSPICIOUS: "red",
}

ELEMENT_STYLES: dict[str, str] = {
    "metal": "white",
    "wood": "green",
    "water": "blue",
    "fire": "red",
    "earth": "yellow",
}


def render_card(entry: CatalogEntry, compared: bool = False) -> Text:
    """Build the Rich Text body of a name card."""
    display = Text()
    display.append(entry.name, style="bold green")
    display.append(f"  {entry.pinyin}", style="dim")
    display.append(f"   {entry.compatibility.score}", style="bold yellow")
    if compared:
        display.append("  [compare]", style="bold cyan")
    display.append("\n")

    for slot in (entry.elements.first, entry.elements.second):
        element = slot.element.value
        display.append(f"{slot.character}:{element} ", style=ELEMENT_STYLES.get(element, ""))
    display.append(f"{entry.total_stroke_count} strokes\n", style="dim")

    display.append(entry.meaning.interpretation + "\n")

    total_luck = entry.numerology.total.luck
    display.append(f"{entry.hexagram.name}  ", style="blue")
    display.append(f"● {total_luck.value}", style=LUCK_STYLES[total_luck])
    display.append(f"  {entry.auspicious_grid_count}/4 auspicious  ", style="dim")
    if entry.has_risk:
        display.append("risk flagged", style="yellow")
    else:
        display.append("no risk", style="green")
    return display


class NameCard(Static):
    """A single name card. Click or Enter posts CardSelected."""

    DEFAULT_CSS = """
    NameCard {
        padding: 1 2;
        margin: 0 0 1 0;
        background: $surface;
        border: solid $primary-background;
        height: auto;
    }
    NameCard:focus {
        border: solid $accent;
    }
    """

    can_focus = True

    def __init__(self, entry: CatalogEntry, compared: bool = False) -> None:
        self.entry = entry
        super().__init__(render_card(entry, compared))

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(CardSelected(self.entry.id))

    def on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.stop()
            self.post_message(CardSelected(self.entry.id))


class ResultsList(VerticalScroll):
    """Scrollable list of name cards for the visible window."""

    DEFAULT_CSS = """
    ResultsList {
        width: 100%;
        height: 1fr;
    }
    ResultsList .load-more-hint {
        text-align: center;
        color: $text-muted;
        text-style: italic;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="results-list")

    def update_results(
        self,
        visible: Sequence[CatalogEntry],
        total: int,
        has_more: bool,
        compared: Sequence[int] = (),
    ) -> None:
        """Replace the cards with ``visible``.

        Args:
            visible: Entries in the current window.
            total: Length of the full result.
            has_more: Whether a "load more" is actionable.
            compared: Ids currently in the compare list, marked on their cards.
        """
        self.remove_children()
        if not visible:
            self.mount(Static("No names match the current filters"))
            return
        self.mount(Static(f"Showing {len(visible)} of {total} names"))
        for entry in visible:
            self.mount(NameCard(entry, compared=entry.id in compared))
        if has_more:
            self.mount(Static("Ctrl+N: load more", classes="load-more-hint"))
