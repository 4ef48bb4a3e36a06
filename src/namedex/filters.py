"""Filter state and predicate construction.

A FilterState maps each active FilterCategory to the set of selected
tokens. Tokens inside one category are OR-ed; categories, the hexagram
constraint and the free-text query are AND-ed by build_predicate().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Mapping

from namedex.errors import MalformedRangeToken
from namedex.models import CatalogEntry, FilterCategory, LuckCategory
from namedex.schemas import parse_luck

logger = logging.getLogger(__name__)

Predicate = Callable[[CatalogEntry], bool]

# Fixed token sets offered by the filter panel.
SCORE_RANGES: tuple[str, ...] = ("90-100", "80-89", "70-79", "0-69")
STROKE_RANGES: tuple[str, ...] = ("10-15", "16-20", "21-25", "26-30")
LUCK_VALUES: tuple[str, ...] = tuple(luck.value for luck in LuckCategory)


@dataclass(frozen=True)
class FilterState:
    """Active filter selections.

    ``selections`` only holds non-empty categories; an absent category is
    unconstrained. ``hexagram`` is an exact-match constraint kept apart
    from the multi-valued categories.
    """

    selections: Mapping[FilterCategory, frozenset[str]] = field(default_factory=dict)
    hexagram: str | None = None

    def tokens(self, category: FilterCategory) -> frozenset[str]:
        return self.selections.get(category, frozenset())

    def toggle(self, category: FilterCategory | str, token: str) -> FilterState:
        """Select ``token`` if absent, deselect it if present.

        A category left with no tokens is removed so it stops constraining.
        """
        category = FilterCategory(category)
        current = self.tokens(category)
        updated = current - {token} if token in current else current | {token}
        selections = dict(self.selections)
        if updated:
            selections[category] = updated
        else:
            selections.pop(category, None)
        return replace(self, selections=selections)

    def with_hexagram(self, name: str | None) -> FilterState:
        return replace(self, hexagram=name or None)

    def cleared(self) -> FilterState:
        return FilterState()

    def is_empty(self) -> bool:
        """Return True if no category and no hexagram is constraining."""
        return not self.selections and self.hexagram is None

    def to_filter_strings(self) -> list[str]:
        """Render active selections as 'category:token' strings."""
        filters: list[str] = []
        for category in FilterCategory:
            for token in sorted(self.tokens(category)):
                filters.append(f"{category.value}:{token}")
        if self.hexagram is not None:
            filters.append(f"hexagram:{self.hexagram}")
        return filters


def parse_range(token: str) -> tuple[float, float]:
    """Parse an inclusive ``"min-max"`` token.

    Raises:
        MalformedRangeToken: If the token is not two numbers joined by '-'.
    """
    parts = token.split("-")
    if len(parts) != 2:
        raise MalformedRangeToken(token)
    try:
        low, high = float(parts[0]), float(parts[1])
    except ValueError:
        raise MalformedRangeToken(token) from None
    return low, high


def _range_predicate(
    tokens: frozenset[str], value_of: Callable[[CatalogEntry], int]
) -> Predicate:
    ranges: list[tuple[float, float]] = []
    for token in tokens:
        try:
            ranges.append(parse_range(token))
        except MalformedRangeToken as exc:
            # An unparsable range excludes entries instead of failing the query
            logger.warning("Ignoring filter token: %s", exc)

    def matches(entry: CatalogEntry) -> bool:
        value = value_of(entry)
        return any(low <= value <= high for low, high in ranges)

    return matches


def _luck_predicate(tokens: frozenset[str]) -> Predicate:
    wanted: set[LuckCategory] = set()
    for token in tokens:
        try:
            wanted.add(parse_luck(token))
        except ValueError:
            logger.warning("Ignoring unrecognized luck token %r", token)

    def matches(entry: CatalogEntry) -> bool:
        return any(grid.luck in wanted for grid in entry.numerology.grids)

    return matches


def _text_predicate(query: str) -> Predicate:
    def matches(entry: CatalogEntry) -> bool:
        fields = (
            entry.name,
            entry.pinyin,
            entry.meaning.symbolism,
            entry.meaning.interpretation,
            entry.hexagram.name,
        )
        return any(query in text.lower() for text in fields)

    return matches


def build_predicate(filter_state: FilterState, query_text: str = "") -> Predicate:
    """Combine the free-text query and every active filter into one predicate.

    Args:
        filter_state: Active category selections and hexagram constraint.
        query_text: Raw search input; lower-cased and trimmed here. Empty
            matches every entry.

    Returns:
        A pure predicate over CatalogEntry.
    """
    checks: list[Predicate] = []

    query = query_text.strip().lower()
    if query:
        checks.append(_text_predicate(query))

    score_tokens = filter_state.tokens(FilterCategory.SCORE)
    if score_tokens:
        checks.append(_range_predicate(score_tokens, lambda e: e.compatibility.score))

    luck_tokens = filter_state.tokens(FilterCategory.LUCK)
    if luck_tokens:
        checks.append(_luck_predicate(luck_tokens))

    stroke_tokens = filter_state.tokens(FilterCategory.STROKES)
    if stroke_tokens:
        checks.append(_range_predicate(stroke_tokens, lambda e: e.total_stroke_count))

    if filter_state.hexagram is not None:
        hexagram = filter_state.hexagram
        checks.append(lambda e: e.hexagram.name == hexagram)

    def predicate(entry: CatalogEntry) -> bool:
        return all(check(entry) for check in checks)

    return predicate
