"""Shared pytest fixtures for the namedex test suite.

Provides a CatalogEntry factory, a 20-entry sample catalog with known
score/stroke/luck distributions, and helpers that write catalog JSON
documents to a temporary directory.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from namedex.models import (
    CatalogEntry,
    CharacterSlot,
    Compatibility,
    ElementCategory,
    Grid,
    Hexagram,
    LuckCategory,
    Meaning,
    NameElements,
    Numerology,
)
from namedex.schemas import entry_to_document

HEXAGRAMS = ("乾为天", "坤为地", "水雷屯")
ELEMENT_CYCLE = (
    ElementCategory.METAL,
    ElementCategory.WOOD,
    ElementCategory.WATER,
    ElementCategory.FIRE,
    ElementCategory.EARTH,
)
# Entries whose total grid is inauspicious in the sample catalog
INAUSPICIOUS_IDS = (4, 11, 17)


def make_entry(
    entry_id: int = 1,
    name: str = "李明轩",
    pinyin: str = "li ming xuan",
    score: int = 80,
    strokes: int = 18,
    first_element: ElementCategory = ElementCategory.WOOD,
    second_element: ElementCategory = ElementCategory.WATER,
    total_luck: LuckCategory = LuckCategory.AUSPICIOUS,
    other_luck: LuckCategory = LuckCategory.AUSPICIOUS,
    hexagram: str = "乾为天",
    symbolism: str = "明亮开阔",
    interpretation: str = "聪慧通达",
    risks: tuple[str, ...] = (),
) -> CatalogEntry:
    """Build a CatalogEntry with sensible defaults for tests."""
    return CatalogEntry(
        id=entry_id,
        name=name,
        pinyin=pinyin,
        elements=NameElements(
            first=CharacterSlot(name[1:2] or "明", 8, first_element, "日部"),
            second=CharacterSlot(name[2:3] or "轩", 10, second_element, "车部"),
        ),
        compatibility=Compatibility(
            zodiac_sign="龙",
            favorable_roots=frozenset({"日", "水"}),
            score=score,
        ),
        numerology=Numerology(
            heaven=Grid(8, ElementCategory.METAL, other_luck),
            person=Grid(15, ElementCategory.EARTH, other_luck),
            earth_grid=Grid(18, ElementCategory.METAL, other_luck),
            total=Grid(25, ElementCategory.EARTH, total_luck),
            five_element_summary="金土金",
        ),
        hexagram=Hexagram(hexagram, "自强不息", "总笔画18"),
        meaning=Meaning(symbolism, interpretation),
        total_stroke_count=strokes,
        risks=risks,
    )


def sample_catalog() -> tuple[CatalogEntry, ...]:
    """Twenty entries; ids 1..20 in catalog order.

    - score: 60 + 2*id (62..100)
    - strokes: 10 + id (11..30)
    - total grid inauspicious for INAUSPICIOUS_IDS, every other grid auspicious
    - hexagram cycles through HEXAGRAMS
    """
    entries = []
    for i in range(1, 21):
        entries.append(
            make_entry(
                entry_id=i,
                name=f"王{chr(0x4E00 + i)}{chr(0x4E80 + i)}",
                pinyin=f"wang name{i:02d}",
                score=60 + 2 * i,
                strokes=10 + i,
                first_element=ELEMENT_CYCLE[i % 5],
                second_element=ELEMENT_CYCLE[(i + 1) % 5],
                total_luck=(
                    LuckCategory.INAUSPICIOUS if i in INAUSPICIOUS_IDS else LuckCategory.AUSPICIOUS
                ),
                hexagram=HEXAGRAMS[i % 3],
                risks=("谐音需注意",) if i % 7 == 0 else (),
            )
        )
    return tuple(entries)


@pytest.fixture
def catalog() -> tuple[CatalogEntry, ...]:
    """The 20-entry sample catalog."""
    return sample_catalog()


@pytest.fixture
def write_catalog(tmp_path: Path):
    """Return a function that writes a catalog document and returns its path.

    Accepts either CatalogEntry objects or raw record dicts.
    """

    def _write(records, name: str = "catalog.json") -> Path:
        docs = [
            entry_to_document(r) if isinstance(r, CatalogEntry) else r for r in records
        ]
        path = tmp_path / name
        path.write_text(json.dumps({"names": docs}, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def catalog_file(write_catalog, catalog) -> Path:
    """Sample catalog written to disk."""
    return write_catalog(catalog)
