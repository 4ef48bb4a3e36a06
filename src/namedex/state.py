"""Browser state, user commands, and the single update function.

Every user action is a typed command. ``update(state, command)`` is pure:
it returns an Outcome holding the next BrowserState, an optional message
for the user, and an optional hand-off blob for an external view. The
caller (CLI or TUI) renders the state and performs the hand-off write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Mapping, Sequence, Union

from namedex.aggregate import CatalogStatistics, summarize
from namedex.catalog import index_by_id
from namedex.errors import SelectionError
from namedex.filters import FilterState, build_predicate
from namedex.handoff import (
    COMPARE_LIST_KEY,
    SELECTED_NAME_KEY,
    compare_payload,
    detail_payload,
)
from namedex.models import CatalogEntry, FilterCategory, QueryResult, SortKey
from namedex.pagination import DEFAULT_PAGE_SIZE, PaginationCursor
from namedex.query import run_query
from namedex.selection import COMPARE_LIMIT, SelectionList

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetQuery:
    text: str


@dataclass(frozen=True)
class ToggleFilter:
    category: FilterCategory
    token: str


@dataclass(frozen=True)
class SetHexagram:
    name: str | None


@dataclass(frozen=True)
class SetSort:
    sort_key: SortKey


@dataclass(frozen=True)
class AdvancePage:
    pass


@dataclass(frozen=True)
class ClearFilters:
    pass


@dataclass(frozen=True)
class AddToCompare:
    entry_id: int


@dataclass(frozen=True)
class RemoveFromCompare:
    entry_id: int


@dataclass(frozen=True)
class StartComparison:
    pass


@dataclass(frozen=True)
class ShowDetail:
    entry_id: int


@dataclass(frozen=True)
class LoadCatalog:
    entries: tuple[CatalogEntry, ...]


Command = Union[
    SetQuery,
    ToggleFilter,
    SetHexagram,
    SetSort,
    AdvancePage,
    ClearFilters,
    AddToCompare,
    RemoveFromCompare,
    StartComparison,
    ShowDetail,
    LoadCatalog,
]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Handoff:
    """A blob to persist under a fixed key for another view."""

    key: str
    payload: object


@dataclass(frozen=True)
class BrowserState:
    """Complete browsing state; rendering is a projection of it."""

    catalog: tuple[CatalogEntry, ...] = ()
    filters: FilterState = field(default_factory=FilterState)
    query: str = ""
    sort_key: SortKey = SortKey.NONE
    result: QueryResult = ()
    cursor: PaginationCursor = field(default_factory=PaginationCursor)
    selection: SelectionList = field(default_factory=SelectionList)
    statistics: CatalogStatistics | None = None
    index: Mapping[int, CatalogEntry] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.catalog and not self.index:
            object.__setattr__(self, "index", index_by_id(self.catalog))

    @classmethod
    def initial(
        cls,
        catalog: Sequence[CatalogEntry],
        page_size: int = DEFAULT_PAGE_SIZE,
        compare_limit: int = COMPARE_LIMIT,
    ) -> BrowserState:
        """Build the startup state: unfiltered result, page 1, fresh statistics.

        Raises:
            DataIntegrityError: If two entries share an id.
        """
        catalog = tuple(catalog)
        state = cls(
            catalog=catalog,
            index=index_by_id(catalog),
            cursor=PaginationCursor(page_size=page_size),
            selection=SelectionList(limit=compare_limit),
            statistics=summarize(catalog),
        )
        return _requery(state)

    @property
    def visible(self) -> Sequence[CatalogEntry]:
        """The current pagination window."""
        return self.cursor.window(self.result)

    @property
    def total_count(self) -> int:
        return len(self.result)

    @property
    def has_more(self) -> bool:
        return self.cursor.has_more(self.total_count)

    def find(self, entry_id: int) -> CatalogEntry | None:
        return self.index.get(entry_id)


@dataclass(frozen=True)
class Outcome:
    state: BrowserState
    message: str | None = None
    handoff: Handoff | None = None


def _requery(state: BrowserState, **changes: object) -> BrowserState:
    """Apply ``changes`` and rebuild the result from the full catalog, back to page 1."""
    state = replace(state, **changes)
    predicate = build_predicate(state.filters, state.query)
    result = run_query(state.catalog, predicate, state.sort_key)
    return replace(state, result=result, cursor=state.cursor.reset())


def update(state: BrowserState, command: Command) -> Outcome:
    """Apply one user command and return the resulting Outcome.

    Raises:
        DataIntegrityError: If LoadCatalog carries two entries with one id.
    """
    if isinstance(command, SetQuery):
        return Outcome(_requery(state, query=command.text))

    if isinstance(command, ToggleFilter):
        return Outcome(
            _requery(state, filters=state.filters.toggle(command.category, command.token))
        )

    if isinstance(command, SetHexagram):
        return Outcome(_requery(state, filters=state.filters.with_hexagram(command.name)))

    if isinstance(command, SetSort):
        return Outcome(_requery(state, sort_key=SortKey(command.sort_key)))

    if isinstance(command, ClearFilters):
        return Outcome(_requery(state, filters=state.filters.cleared(), query=""))

    if isinstance(command, AdvancePage):
        return Outcome(replace(state, cursor=state.cursor.advance(state.total_count)))

    if isinstance(command, AddToCompare):
        entry = state.find(command.entry_id)
        if entry is None:
            return Outcome(state, message=f"Unknown name id {command.entry_id}")
        try:
            selection = state.selection.add(command.entry_id)
        except SelectionError as exc:
            return Outcome(state, message=str(exc))
        return Outcome(
            replace(state, selection=selection),
            message=f"Added {entry.name} to compare list ({len(selection)}/{selection.limit})",
        )

    if isinstance(command, RemoveFromCompare):
        return Outcome(replace(state, selection=state.selection.remove(command.entry_id)))

    if isinstance(command, StartComparison):
        try:
            ids = state.selection.start_comparison()
        except SelectionError as exc:
            return Outcome(state, message=str(exc))
        return Outcome(
            state,
            message=f"Comparing {len(ids)} names",
            handoff=Handoff(COMPARE_LIST_KEY, compare_payload(ids)),
        )

    if isinstance(command, ShowDetail):
        entry = state.find(command.entry_id)
        if entry is None:
            return Outcome(state, message=f"Unknown name id {command.entry_id}")
        return Outcome(state, handoff=Handoff(SELECTED_NAME_KEY, detail_payload(entry)))

    if isinstance(command, LoadCatalog):
        catalog = tuple(command.entries)
        index = index_by_id(catalog)
        selection = replace(
            state.selection, ids=tuple(i for i in state.selection.ids if i in index)
        )
        logger.info("Catalog replaced: %d entries", len(catalog))
        return Outcome(
            _requery(
                state,
                catalog=catalog,
                index=index,
                selection=selection,
                statistics=summarize(catalog),
            )
        )

    raise TypeError(f"Unsupported command: {command!r}")
