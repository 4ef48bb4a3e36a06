"""Tests for the growing-prefix pagination window."""

from __future__ import annotations

import pytest

from namedex.pagination import DEFAULT_PAGE_SIZE, PaginationCursor, window


class TestWindow:
    def test_prefix_of_result(self):
        assert window(tuple(range(20)), 9, 1) == tuple(range(9))
        assert window(tuple(range(20)), 9, 2) == tuple(range(18))

    def test_short_result(self):
        assert window((1, 2, 3), 9, 1) == (1, 2, 3)

    def test_empty_result(self):
        assert window((), 9, 3) == ()

    @pytest.mark.parametrize("size,count", [(0, 1), (9, 0), (-1, 1)])
    def test_non_positive_rejected(self, size, count):
        with pytest.raises(ValueError):
            window((1,), size, count)


class TestPaginationCursor:
    def test_defaults(self):
        cursor = PaginationCursor()
        assert cursor.page_size == DEFAULT_PAGE_SIZE == 9
        assert cursor.page_count == 1

    def test_invalid_cursor_rejected(self):
        with pytest.raises(ValueError):
            PaginationCursor(page_size=0)

    def test_advance_grows_window(self):
        result = tuple(range(20))
        cursor = PaginationCursor().advance(len(result))
        assert cursor.page_count == 2
        assert len(cursor.window(result)) == 18
        assert cursor.has_more(len(result))

    def test_advance_stops_at_end(self):
        cursor = PaginationCursor()
        for _ in range(5):
            cursor = cursor.advance(20)
        assert cursor.page_count == 3
        assert not cursor.has_more(20)
        assert cursor.advance(20) is cursor

    def test_exact_multiple_has_no_more(self):
        assert not PaginationCursor(page_size=10).has_more(10)

    def test_reset(self):
        cursor = PaginationCursor(page_count=3).reset()
        assert cursor.page_count == 1
        assert cursor.page_size == DEFAULT_PAGE_SIZE

    def test_window_never_exceeds_limit(self):
        cursor = PaginationCursor(page_size=4, page_count=2)
        assert cursor.limit == 8
        assert len(cursor.window(tuple(range(100)))) == 8
