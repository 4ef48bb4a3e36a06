"""namedex TUI application.

Main Textual App with a three-pane layout (filters, name cards,
statistics). All widget messages become state commands handled by
``namedex.state.update``; the panes are re-rendered from the resulting
BrowserState. Search input goes through the RxPY debouncer.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from reactivex.scheduler.eventloop import AsyncIOScheduler
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from namedex.config import BrowserConfig
from namedex.debounce import QueryDebouncer
from namedex.handoff import HandoffStore
from namedex.models import CatalogEntry, FilterCategory, SortKey
from namedex.query import hexagram_names
from namedex.state import (
    AddToCompare,
    AdvancePage,
    BrowserState,
    ClearFilters,
    Command,
    Handoff,
    Outcome,
    RemoveFromCompare,
    SetHexagram,
    SetQuery,
    SetSort,
    ShowDetail,
    StartComparison,
    ToggleFilter,
    update,
)
from namedex.tui.messages import (
    CardSelected,
    FilterToggled,
    HexagramChosen,
    QueryEdited,
    SortChosen,
)
from namedex.tui.providers import NamedexCommands
from namedex.tui.telemetry import Telemetry, set_telemetry
from namedex.tui.widgets import FilterPanel, NameCard, ResultsList, SearchBar, StatsPanel


class NamedexApp(App):
    """Interactive name catalog browser."""

    TITLE = "Name Catalog"
    SUB_TITLE = "Filter, sort and compare generated names"
    COMMANDS = App.COMMANDS | {NamedexCommands}

    CSS = """
    #main {
        layout: horizontal;
        height: 1fr;
    }

    #filter-pane {
        width: 1fr;
        min-width: 24;
        max-width: 34;
        border-right: solid $primary;
    }

    #results-pane {
        width: 3fr;
        min-width: 40;
    }

    #stats-pane {
        width: 1fr;
        min-width: 28;
        border-left: solid $accent;
        overflow-y: auto;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: $primary-background;
        color: $text;
        padding: 0 1;
    }

    .hide-stats #stats-pane {
        display: none;
    }
    """

    BINDINGS = [
        ("ctrl+p", "command_palette", "Commands"),
        ("ctrl+f", "focus_search", "Search"),
        ("ctrl+n", "load_more", "More"),
        ("ctrl+t", "add_to_compare", "Compare +"),
        ("ctrl+o", "start_comparison", "Compare"),
        ("ctrl+r", "reset_filters", "Reset"),
        ("ctrl+b", "toggle_stats", "Stats"),
        ("escape", "clear_search", "Clear"),
    ]

    def __init__(
        self,
        catalog: Sequence[CatalogEntry] = (),
        config: BrowserConfig | None = None,
        handoff_store: HandoffStore | None = None,
        telemetry: Telemetry | None = None,
    ) -> None:
        """Initialize the browser over an already-loaded catalog.

        Args:
            catalog: Loaded catalog entries (fallback record included).
            config: Page size, debounce and compare limits. Defaults apply if None.
            handoff_store: Where detail/compare hand-offs are written. None
                disables hand-off writes (e.g., in tests).
            telemetry: OTel tracing facade. Defaults to no-op if not provided.
        """
        super().__init__()
        self.browser_config = config if config is not None else BrowserConfig()
        self.handoff_store = handoff_store
        self.telemetry = telemetry if telemetry is not None else Telemetry.noop()
        set_telemetry(self.telemetry)
        self.browser_state = BrowserState.initial(
            catalog,
            page_size=self.browser_config.page_size,
            compare_limit=self.browser_config.compare_limit,
        )
        self._debouncer: QueryDebouncer | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield SearchBar()
        with Horizontal(id="main"):
            with Vertical(id="filter-pane"):
                yield FilterPanel()
            with Vertical(id="results-pane"):
                yield ResultsList()
            with Vertical(id="stats-pane"):
                yield StatsPanel()
        yield Static("Ready | Ctrl+P: Commands", id="status-bar")
        yield Footer()

    async def on_mount(self) -> None:
        with self.telemetry.span("app.mount", catalog_size=len(self.browser_state.catalog)):
            self.query_one(FilterPanel).set_hexagrams(
                hexagram_names(self.browser_state.catalog)
            )
            self.query_one(StatsPanel).show(self.browser_state.statistics)
            self._render_state()
            self.telemetry.log.info("app mounted")

        scheduler = AsyncIOScheduler(asyncio.get_running_loop())
        self._debouncer = QueryDebouncer(
            self._apply_query,
            scheduler=scheduler,
            seconds=self.browser_config.debounce_seconds,
        )

    def on_unmount(self) -> None:
        if self._debouncer is not None:
            self._debouncer.dispose()
            self._debouncer = None

    # ------------------------------------------------------------------
    # Dispatch and rendering
    # ------------------------------------------------------------------

    def dispatch_command(self, command: Command) -> Outcome:
        """Run ``command`` through the reducer and re-render."""
        with self.telemetry.span("tui.dispatch", command=type(command).__name__) as span:
            outcome = update(self.browser_state, command)
            self.browser_state = outcome.state
            span.set_attribute("result.total", outcome.state.total_count)
            span.set_attribute("result.page_count", outcome.state.cursor.page_count)
            self.telemetry.log.info(
                f"dispatch command={command!r} total={outcome.state.total_count} "
                f"filters={outcome.state.filters.to_filter_strings()}"
            )
            if outcome.handoff is not None:
                self._write_handoff(outcome.handoff)
            if outcome.message:
                self.notify(outcome.message)
            self._render_state()
        return outcome

    def _write_handoff(self, handoff: Handoff) -> None:
        if self.handoff_store is None:
            return
        try:
            path = self.handoff_store.put(handoff.key, handoff.payload)
        except OSError as e:
            self.telemetry.log.error(f"handoff write failed key={handoff.key} error={e!r}")
            self.notify(f"Could not save {handoff.key}: {e}", severity="error")
            return
        self.notify(f"Saved {handoff.key} to {path}")

    def _render_state(self) -> None:
        state = self.browser_state
        self.query_one(ResultsList).update_results(
            state.visible,
            state.total_count,
            state.has_more,
            compared=state.selection.ids,
        )
        self.query_one("#status-bar", Static).update(self.status_text())

    def status_text(self) -> str:
        state = self.browser_state
        return (
            f"{state.total_count} names | page {state.cursor.page_count} | "
            f"compare {len(state.selection)}/{state.selection.limit} | Ctrl+P: Commands"
        )

    def _apply_query(self, text: str) -> None:
        if text == self.browser_state.query:
            return
        self.dispatch_command(SetQuery(text))

    # ------------------------------------------------------------------
    # Message handlers
    # ------------------------------------------------------------------

    def _cancel_pending_query(self) -> None:
        if self._debouncer is not None:
            self._debouncer.cancel()

    def on_query_edited(self, event: QueryEdited) -> None:
        if event.immediate or self._debouncer is None:
            self._cancel_pending_query()
            self._apply_query(event.text)
        else:
            self._debouncer.push(event.text)

    def on_filter_toggled(self, event: FilterToggled) -> None:
        category = FilterCategory(event.category)
        selected = event.token in self.browser_state.filters.tokens(category)
        if selected == event.selected:
            return
        self.dispatch_command(ToggleFilter(category, event.token))

    def on_hexagram_chosen(self, event: HexagramChosen) -> None:
        if event.hexagram == self.browser_state.filters.hexagram:
            return
        self.dispatch_command(SetHexagram(event.hexagram))

    def on_sort_chosen(self, event: SortChosen) -> None:
        sort_key = SortKey(event.sort_key)
        if sort_key == self.browser_state.sort_key:
            return
        self.dispatch_command(SetSort(sort_key))

    def on_card_selected(self, event: CardSelected) -> None:
        self.dispatch_command(ShowDetail(event.entry_id))

    # ------------------------------------------------------------------
    # Key binding actions
    # ------------------------------------------------------------------

    def _focused_entry_id(self) -> int | None:
        focused = self.focused
        if isinstance(focused, NameCard):
            return focused.entry.id
        return None

    def _focus_card(self, entry_id: int) -> None:
        for card in self.query(NameCard):
            if card.entry.id == entry_id:
                card.focus()
                return

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus()

    def action_clear_search(self) -> None:
        self._cancel_pending_query()
        self.query_one(SearchBar).clear_silently()
        self._apply_query("")

    def action_reset_filters(self) -> None:
        """Clear every filter and the search text; sort order is kept."""
        self._cancel_pending_query()
        self.query_one(FilterPanel).reset()
        self.query_one(SearchBar).clear_silently()
        self.dispatch_command(ClearFilters())

    def action_load_more(self) -> None:
        if not self.browser_state.has_more:
            self.notify("All matching names are shown")
            return
        self.dispatch_command(AdvancePage())

    def action_add_to_compare(self) -> None:
        entry_id = self._focused_entry_id()
        if entry_id is None:
            self.notify("Focus a name card first", severity="warning")
            return
        self.dispatch_command(AddToCompare(entry_id))
        self.call_after_refresh(self._focus_card, entry_id)

    def action_remove_from_compare(self) -> None:
        entry_id = self._focused_entry_id()
        if entry_id is None:
            self.notify("Focus a name card first", severity="warning")
            return
        self.dispatch_command(RemoveFromCompare(entry_id))
        self.call_after_refresh(self._focus_card, entry_id)

    def action_start_comparison(self) -> None:
        self.dispatch_command(StartComparison())

    def action_toggle_stats(self) -> None:
        self.toggle_class("hide-stats")
