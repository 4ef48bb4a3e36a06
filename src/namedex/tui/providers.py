"""Command palette provider for the namedex TUI.

Registers the browser actions as fuzzy-searchable commands (Ctrl+P). The
same actions are listed when the palette opens with no input.
"""

from __future__ import annotations

from functools import partial

from textual.command import DiscoveryHit, Hit, Hits, Provider


class NamedexCommands(Provider):
    """Maps palette entries to App actions, with a one-line help each."""

    COMMANDS: dict[str, tuple[str, str]] = {
        "Search Names": ("focus_search", "Move focus to the search bar"),
        "Clear Search": ("clear_search", "Empty the search text"),
        "Reset Filters": ("reset_filters", "Clear filters, hexagram and search"),
        "Load More Names": ("load_more", "Append the next page of results"),
        "Add Focused Name to Compare": ("add_to_compare", "Up to 4 names"),
        "Remove Focused Name from Compare": ("remove_from_compare", "Drop it from the compare list"),
        "Start Comparison": ("start_comparison", "Save the compare list for the compare view"),
        "Toggle Statistics": ("toggle_stats", "Show or hide the statistics pane"),
    }

    async def discover(self) -> Hits:
        for name, (action, help_text) in self.COMMANDS.items():
            yield DiscoveryHit(name, partial(self.app.run_action, action), help=help_text)

    async def search(self, query: str) -> Hits:
        matcher = self.matcher(query)
        for name, (action, help_text) in self.COMMANDS.items():
            score = matcher.match(name)
            if score > 0:
                yield Hit(
                    score,
                    matcher.highlight(name),
                    partial(self.app.run_action, action),
                    help=help_text,
                )
