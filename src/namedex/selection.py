"""Bounded compare list."""

from __future__ import annotations

from dataclasses import dataclass, replace

from namedex.errors import AlreadySelected, InsufficientSelection, LimitExceeded

COMPARE_LIMIT = 4
MIN_COMPARE = 2


@dataclass(frozen=True)
class SelectionList:
    """Ordered, duplicate-free list of at most ``limit`` entry ids."""

    ids: tuple[int, ...] = ()
    limit: int = COMPARE_LIMIT

    def __post_init__(self) -> None:
        if not MIN_COMPARE <= self.limit <= COMPARE_LIMIT:
            raise ValueError(
                f"limit must be between {MIN_COMPARE} and {COMPARE_LIMIT}, got {self.limit}"
            )
        if len(self.ids) > self.limit:
            raise LimitExceeded(self.limit)

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self.ids

    def add(self, entry_id: int) -> SelectionList:
        """Return a list with ``entry_id`` appended.

        Raises:
            AlreadySelected: If the id is already present.
            LimitExceeded: If the list is full.
        """
        if entry_id in self.ids:
            raise AlreadySelected(entry_id)
        if len(self.ids) >= self.limit:
            raise LimitExceeded(self.limit)
        return replace(self, ids=self.ids + (entry_id,))

    def remove(self, entry_id: int) -> SelectionList:
        return replace(self, ids=tuple(i for i in self.ids if i != entry_id))

    def clear(self) -> SelectionList:
        return replace(self, ids=())

    def start_comparison(self) -> tuple[int, ...]:
        """Return the ids to hand to the comparison view.

        Raises:
            InsufficientSelection: If fewer than two ids are selected.
        """
        if len(self.ids) < MIN_COMPARE:
            raise InsufficientSelection(MIN_COMPARE, len(self.ids))
        return self.ids
