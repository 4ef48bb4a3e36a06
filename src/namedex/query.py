"""Query engine: filter the catalog with a predicate, then order the result.

Every recompute starts from the full catalog; there is no incremental
update. All orderings rely on Python's stable sort, so ties keep the
filter (catalog) order.
"""

from __future__ import annotations

import locale
import logging
from typing import Callable, Iterable

from namedex.filters import Predicate
from namedex.models import CatalogEntry, QueryResult, SortKey

logger = logging.getLogger(__name__)


def _order_by_score(entries: list[CatalogEntry]) -> list[CatalogEntry]:
    # reverse=True keeps equal scores in their original relative order
    return sorted(entries, key=lambda e: e.compatibility.score, reverse=True)


def _order_by_strokes(entries: list[CatalogEntry]) -> list[CatalogEntry]:
    return sorted(entries, key=lambda e: e.total_stroke_count)


def _order_by_name(entries: list[CatalogEntry]) -> list[CatalogEntry]:
    return sorted(entries, key=lambda e: locale.strxfrm(e.name))


COMPARATORS: dict[SortKey, Callable[[list[CatalogEntry]], list[CatalogEntry]]] = {
    SortKey.NONE: list,
    SortKey.SCORE: _order_by_score,
    SortKey.STROKES: _order_by_strokes,
    SortKey.NAME: _order_by_name,
}


def run_query(
    catalog: Iterable[CatalogEntry],
    predicate: Predicate,
    sort_key: SortKey | str = SortKey.NONE,
) -> QueryResult:
    """Filter ``catalog`` with ``predicate`` and order it by ``sort_key``.

    Args:
        catalog: Source entries in catalog order.
        predicate: Combined filter built by build_predicate().
        sort_key: Ordering to apply; SortKey.NONE keeps catalog order.

    Returns:
        Materialized tuple of matching entries. Empty when the catalog is empty.
    """
    sort_key = SortKey(sort_key)
    matched = [entry for entry in catalog if predicate(entry)]
    ordered = COMPARATORS[sort_key](matched)
    logger.debug("Query matched %d entries (sort=%s)", len(ordered), sort_key.value)
    return tuple(ordered)


def hexagram_names(catalog: Iterable[CatalogEntry]) -> list[str]:
    """Distinct hexagram names, sorted, for populating the hexagram selector."""
    return sorted({entry.hexagram.name for entry in catalog})
