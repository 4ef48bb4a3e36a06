"""Filter panel widget for narrowing the name catalog.

Checkboxes for score ranges, luck values and stroke ranges, plus Select
dropdowns for the hexagram and the sort order. The panel renders from
the App's FilterState and reports every change as a message; it never
holds filter state of its own.
"""

from __future__ import annotations

from textual.containers import VerticalScroll
from textual.widgets import Checkbox, Select, Static

from namedex.filters import LUCK_VALUES, SCORE_RANGES, STROKE_RANGES, FilterState
from namedex.models import FilterCategory, SortKey
from namedex.tui.messages import FilterToggled, HexagramChosen, SortChosen
from namedex.tui.telemetry import get_telemetry

SORT_OPTIONS: list[tuple[str, str]] = [
    ("Score (high to low)", SortKey.SCORE.value),
    ("Strokes (low to high)", SortKey.STROKES.value),
    ("Name", SortKey.NAME.value),
]

_GROUPS: tuple[tuple[str, FilterCategory, tuple[str, ...]], ...] = (
    ("Score", FilterCategory.SCORE, SCORE_RANGES),
    ("Luck", FilterCategory.LUCK, LUCK_VALUES),
    ("Strokes", FilterCategory.STROKES, STROKE_RANGES),
)


class FilterPanel(VerticalScroll):
    """Filter checkboxes plus hexagram and sort selectors."""

    DEFAULT_CSS = """
    FilterPanel {
        height: 1fr;
        padding: 0 1;
        background: $surface;
    }
    FilterPanel .filter-header {
        text-style: bold;
        margin-top: 1;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="filter-panel")
        # checkbox id -> (category, token); ids must be identifiers, tokens are not
        self._tokens: dict[str, tuple[FilterCategory, str]] = {}

    def compose(self):
        for title, category, tokens in _GROUPS:
            yield Static(title, classes="filter-header")
            for index, token in enumerate(tokens):
                checkbox_id = f"filter-{category.value}-{index}"
                self._tokens[checkbox_id] = (category, token)
                yield Checkbox(token, id=checkbox_id)
        yield Static("Hexagram", classes="filter-header")
        yield Select([], allow_blank=True, prompt="Any hexagram", id="filter-hexagram")
        yield Static("Sort", classes="filter-header")
        yield Select(SORT_OPTIONS, allow_blank=True, prompt="Catalog order", id="sort-select")

    def set_hexagrams(self, names: list[str]) -> None:
        self.query_one("#filter-hexagram", Select).set_options(
            [(name, name) for name in names]
        )
        get_telemetry().log.info(f"filter panel hexagram options={len(names)}")

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        checkbox_id = event.checkbox.id or ""
        if checkbox_id not in self._tokens:
            return
        category, token = self._tokens[checkbox_id]
        self.post_message(FilterToggled(category.value, token, event.value))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        # Anything that is not one of our string options is the blank sentinel
        value = event.value if isinstance(event.value, str) else None
        if event.select.id == "filter-hexagram":
            self.post_message(HexagramChosen(value))
        elif event.select.id == "sort-select":
            self.post_message(SortChosen(value or SortKey.NONE.value))

    def sync(self, filters: FilterState) -> None:
        """Render checkbox state from ``filters`` without emitting messages."""
        for checkbox_id, (category, token) in self._tokens.items():
            checkbox = self.query_one(f"#{checkbox_id}", Checkbox)
            selected = token in filters.tokens(category)
            if checkbox.value != selected:
                with checkbox.prevent(Checkbox.Changed):
                    checkbox.value = selected

    def reset(self) -> None:
        """Clear every control, e.g. after ClearFilters."""
        self.sync(FilterState())
        hexagram = self.query_one("#filter-hexagram", Select)
        with hexagram.prevent(Select.Changed):
            hexagram.value = Select.NULL
