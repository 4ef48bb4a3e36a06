"""Custom Textual Message types for inter-widget communication.

Widgets post these to the App, which turns them into state commands and
re-renders. No direct widget-to-widget calls.
"""

from __future__ import annotations

from textual.message import Message


class QueryEdited(Message):
    """Fired by the search bar on every keystroke, or on Enter with immediate=True."""

    def __init__(self, text: str, immediate: bool = False) -> None:
        self.text = text
        self.immediate = immediate
        super().__init__()


class FilterToggled(Message):
    """Fired by the filter panel when a filter checkbox changes."""

    def __init__(self, category: str, token: str, selected: bool) -> None:
        self.category = category
        self.token = token
        self.selected = selected
        super().__init__()


class HexagramChosen(Message):
    """Fired when the hexagram selector changes; None means any hexagram."""

    def __init__(self, hexagram: str | None) -> None:
        self.hexagram = hexagram
        super().__init__()


class SortChosen(Message):
    """Fired when the sort selector changes."""

    def __init__(self, sort_key: str) -> None:
        self.sort_key = sort_key
        super().__init__()


class CardSelected(Message):
    """Fired when the user clicks or presses Enter on a name card."""

    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__()
