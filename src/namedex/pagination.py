"""Pagination over an ordered result: a growing prefix, never a sliding page."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 9


def window(result: Sequence[T], page_size: int, page_count: int) -> Sequence[T]:
    """Return the first ``page_size * page_count`` items of ``result``."""
    if page_size < 1 or page_count < 1:
        raise ValueError(
            f"page_size and page_count must be positive (got {page_size}, {page_count})"
        )
    return result[: page_size * page_count]


@dataclass(frozen=True)
class PaginationCursor:
    """Visible-window cursor. Pages are only appended until reset()."""

    page_size: int = DEFAULT_PAGE_SIZE
    page_count: int = 1

    def __post_init__(self) -> None:
        if self.page_size < 1 or self.page_count < 1:
            raise ValueError(
                f"page_size and page_count must be positive "
                f"(got {self.page_size}, {self.page_count})"
            )

    @property
    def limit(self) -> int:
        return self.page_size * self.page_count

    def window(self, result: Sequence[T]) -> Sequence[T]:
        return window(result, self.page_size, self.page_count)

    def has_more(self, total: int) -> bool:
        """True if entries remain beyond the current window."""
        return self.limit < total

    def advance(self, total: int) -> PaginationCursor:
        """Append one page, or return self unchanged if nothing remains."""
        if not self.has_more(total):
            return self
        return replace(self, page_count=self.page_count + 1)

    def reset(self) -> PaginationCursor:
        return replace(self, page_count=1)
