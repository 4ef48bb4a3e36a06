"""Catalog statistics for the chart collaborators.

All counts run over the unfiltered catalog and never look at FilterState.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from namedex.errors import DataIntegrityError
from namedex.models import CatalogEntry, ElementCategory, LuckCategory

STROKE_BUCKETS: tuple[tuple[int, int], ...] = ((10, 15), (16, 20), (21, 25), (26, 30))


def bucket_label(low: int, high: int) -> str:
    return f"{low}-{high}"


def count_by_element(catalog: Iterable[CatalogEntry]) -> dict[ElementCategory, int]:
    """Count element categories per entry.

    The second character only counts when its element differs from the
    first, so a name is counted at most once per element.
    """
    counts: Counter[ElementCategory] = Counter()
    for entry in catalog:
        first = entry.elements.first.element
        second = entry.elements.second.element
        counts[first] += 1
        if second != first:
            counts[second] += 1
    return dict(counts)


def count_by_luck(catalog: Iterable[CatalogEntry]) -> dict[LuckCategory, int]:
    """Count entries by the luck of their ``total`` grid.

    Raises:
        DataIntegrityError: If a total grid carries an unrecognized luck value.
    """
    counts = {luck: 0 for luck in LuckCategory}
    for entry in catalog:
        luck = entry.numerology.total.luck
        try:
            counts[LuckCategory(luck)] += 1
        except ValueError:
            raise DataIntegrityError(
                f"entry {entry.id} has unrecognized luck value {luck!r}"
            ) from None
    return counts


def count_by_stroke_bucket(catalog: Iterable[CatalogEntry]) -> dict[str, int]:
    """Count entries per fixed inclusive stroke bucket; outliers are skipped."""
    counts = {bucket_label(low, high): 0 for low, high in STROKE_BUCKETS}
    for entry in catalog:
        strokes = entry.total_stroke_count
        for low, high in STROKE_BUCKETS:
            if low <= strokes <= high:
                counts[bucket_label(low, high)] += 1
                break
    return counts


@dataclass(frozen=True)
class CatalogStatistics:
    """The three aggregations, as plain category -> count mappings."""

    by_element: dict[ElementCategory, int]
    by_luck: dict[LuckCategory, int]
    by_stroke_bucket: dict[str, int]


def summarize(catalog: Iterable[CatalogEntry]) -> CatalogStatistics:
    entries = tuple(catalog)
    return CatalogStatistics(
        by_element=count_by_element(entries),
        by_luck=count_by_luck(entries),
        by_stroke_bucket=count_by_stroke_bucket(entries),
    )
