"""Exception taxonomy for the name catalog browser."""

from __future__ import annotations


class NamedexError(Exception):
    """Base class for all namedex errors."""


class LoadFailure(NamedexError):
    """Raised when the catalog document cannot be read or parsed.

    Recovered inside CatalogStore by substituting the fallback record.
    """


class MalformedRangeToken(NamedexError, ValueError):
    """Raised when a "min-max" filter token does not parse into two numbers."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Malformed range token: {token!r}")


class DataIntegrityError(NamedexError):
    """Raised when the catalog itself violates its contract.

    Covers records that fail schema validation, duplicate ids, and luck
    values outside the three recognized categories.
    """


class SelectionError(NamedexError):
    """Base class for rejected compare-list actions."""


class AlreadySelected(SelectionError):
    """The id is already in the compare list."""

    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__(f"Name {entry_id} is already in the compare list")


class LimitExceeded(SelectionError):
    """The compare list is full."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"At most {limit} names can be compared")


class InsufficientSelection(SelectionError):
    """Too few ids selected to start a comparison."""

    def __init__(self, required: int, selected: int) -> None:
        self.required = required
        self.selected = selected
        super().__init__(
            f"Select at least {required} names to compare ({selected} selected)"
        )
