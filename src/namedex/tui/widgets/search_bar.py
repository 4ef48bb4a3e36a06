"""Search bar widget.

Every edit is posted as QueryEdited; the App feeds edits through the
RxPY debouncer so a burst of keystrokes becomes one recompute. Enter
skips the quiet period.
"""

from __future__ import annotations

from textual.widgets import Input

from namedex.tui.messages import QueryEdited
from namedex.tui.telemetry import get_telemetry


class SearchBar(Input):
    """Free-text search over name, pinyin, meaning and hexagram."""

    DEFAULT_CSS = """
    SearchBar {
        dock: top;
        height: 3;
        padding: 0 1;
        border-bottom: solid $primary;
    }
    """

    def __init__(self) -> None:
        super().__init__(
            placeholder="Search names, pinyin, meanings, hexagrams... (Ctrl+F)",
            id="search-bar",
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is not self:
            return
        event.stop()
        self.post_message(QueryEdited(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is not self:
            return
        event.stop()
        get_telemetry().log.info(f"search submitted query={event.value!r}")
        self.post_message(QueryEdited(event.value, immediate=True))

    def clear_silently(self) -> None:
        """Empty the input without posting a new query."""
        with self.prevent(Input.Changed):
            self.value = ""
