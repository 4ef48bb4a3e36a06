"""Data models and enums for the name catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ElementCategory(str, Enum):
    """One of the five traditional elemental classes."""

    METAL = "metal"
    WOOD = "wood"
    WATER = "water"
    FIRE = "fire"
    EARTH = "earth"


class LuckCategory(str, Enum):
    """Luck rating attached to a numerology grid."""

    AUSPICIOUS = "auspicious"
    NEUTRAL = "neutral"
    INAUSPICIOUS = "inauspicious"


class FilterCategory(str, Enum):
    """Multi-valued filter categories held in a FilterState."""

    SCORE = "score"
    LUCK = "luck"
    STROKES = "strokes"


class SortKey(str, Enum):
    """Result orderings offered by the query engine."""

    NONE = "none"
    SCORE = "score"
    STROKES = "strokes"
    NAME = "name"


@dataclass(frozen=True, slots=True)
class CharacterSlot:
    """One character of a generated name."""

    character: str
    stroke_count: int
    element: ElementCategory
    radical: str


@dataclass(frozen=True, slots=True)
class NameElements:
    """The two character slots of a name, in display order."""

    first: CharacterSlot
    second: CharacterSlot


@dataclass(frozen=True, slots=True)
class Compatibility:
    """Zodiac compatibility annotation."""

    zodiac_sign: str
    favorable_roots: frozenset[str]
    score: int  # 0-100


@dataclass(frozen=True, slots=True)
class Grid:
    """A single numerology grid value with its element and luck rating."""

    value: int
    element: ElementCategory
    luck: LuckCategory


@dataclass(frozen=True, slots=True)
class Numerology:
    """The four numerology grids plus the five-element summary string."""

    heaven: Grid
    person: Grid
    earth_grid: Grid
    total: Grid
    five_element_summary: str = ""

    @property
    def grids(self) -> tuple[Grid, Grid, Grid, Grid]:
        return (self.heaven, self.person, self.earth_grid, self.total)


@dataclass(frozen=True, slots=True)
class Hexagram:
    """Descriptive hexagram annotation, opaque to the query engine."""

    name: str
    meaning: str
    derivation_note: str = ""


@dataclass(frozen=True, slots=True)
class Meaning:
    """Free-text symbolism and interpretation of a name."""

    symbolism: str
    interpretation: str


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One annotated candidate name. Immutable once loaded."""

    id: int
    name: str
    pinyin: str
    elements: NameElements
    compatibility: Compatibility
    numerology: Numerology
    hexagram: Hexagram
    meaning: Meaning
    total_stroke_count: int
    risks: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""

    @property
    def has_risk(self) -> bool:
        """True when at least one risk note is flagged."""
        return len(self.risks) > 0

    @property
    def auspicious_grid_count(self) -> int:
        """Number of the four grids rated auspicious."""
        return sum(
            1 for grid in self.numerology.grids if grid.luck is LuckCategory.AUSPICIOUS
        )


# QueryResult is always a materialized tuple, never a lazy view.
QueryResult = tuple[CatalogEntry, ...]
