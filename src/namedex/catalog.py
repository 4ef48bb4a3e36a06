"""Catalog store: the immutable source catalog loaded once at startup.

Loading reads the JSON document off the event loop with
``asyncio.to_thread()``. Any read or parse failure is recovered by
substituting the built-in fallback record, so downstream components never
see an empty catalog. Records that parse but violate the data contract
raise DataIntegrityError instead of being masked by the fallback.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Iterable

from namedex.errors import DataIntegrityError, LoadFailure
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
from namedex.schemas import parse_document

logger = logging.getLogger(__name__)


def fallback_entry() -> CatalogEntry:
    """Return the single built-in record used when the catalog cannot load."""
    return CatalogEntry(
        id=1,
        name="李垣岩",
        pinyin="li yuan yan",
        elements=NameElements(
            first=CharacterSlot("垣", 9, ElementCategory.EARTH, "土部"),
            second=CharacterSlot("岩", 8, ElementCategory.EARTH, "山部"),
        ),
        compatibility=Compatibility(
            zodiac_sign="蛇",
            favorable_roots=frozenset({"山", "土"}),
            score=95,
        ),
        numerology=Numerology(
            heaven=Grid(8, ElementCategory.METAL, LuckCategory.AUSPICIOUS),
            person=Grid(16, ElementCategory.EARTH, LuckCategory.AUSPICIOUS),
            earth_grid=Grid(17, ElementCategory.METAL, LuckCategory.AUSPICIOUS),
            total=Grid(24, ElementCategory.FIRE, LuckCategory.AUSPICIOUS),
            five_element_summary="金土金",
        ),
        hexagram=Hexagram(
            name="山地剥卦",
            meaning="厚积薄发",
            derivation_note="总笔画17÷8余1→乾卦",
        ),
        meaning=Meaning(
            symbolism="垣表坚固，岩喻稳重",
            interpretation="象征意志坚定、根基深厚",
        ),
        total_stroke_count=17,
        risks=(),
        notes="岩书写需注意结构规范",
    )


def read_catalog_file(path: Path) -> tuple[CatalogEntry, ...]:
    """Read and validate a catalog document from disk.

    Raises:
        LoadFailure: If the file is missing, unreadable, or not a catalog document.
        DataIntegrityError: If a record violates the data contract.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise LoadFailure(f"cannot read catalog {path}: {exc}") from exc
    return parse_document(data)


def index_by_id(entries: Iterable[CatalogEntry]) -> dict[int, CatalogEntry]:
    """Map id to entry.

    Raises:
        DataIntegrityError: If two entries share an id.
    """
    by_id: dict[int, CatalogEntry] = {}
    for entry in entries:
        if entry.id in by_id:
            raise DataIntegrityError(f"duplicate catalog id {entry.id}")
        by_id[entry.id] = entry
    return by_id


class CatalogStore:
    """Holds the immutable source catalog and an id index.

    Usage::

        store = CatalogStore()
        await store.load(Path("resources/data-complete.json"))
        entries = store.entries
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self._entries: tuple[CatalogEntry, ...] = ()
        self._by_id: dict[int, CatalogEntry] = {}
        self.used_fallback = False
        self.replace(entries)

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: int) -> CatalogEntry | None:
        """Look up an entry by id."""
        return self._by_id.get(entry_id)

    def replace(self, entries: Iterable[CatalogEntry]) -> None:
        """Replace the whole catalog.

        Raises:
            DataIntegrityError: If two entries share an id.
        """
        entries = tuple(entries)
        self._by_id = index_by_id(entries)
        self._entries = entries

    async def load(self, path: Path) -> tuple[CatalogEntry, ...]:
        """Load the catalog from ``path``, falling back on LoadFailure.

        The file is read in a worker thread. Awaited once at startup.

        Raises:
            DataIntegrityError: If the document parses but a record is invalid.
        """
        try:
            entries = await asyncio.to_thread(read_catalog_file, path)
        except LoadFailure as exc:
            return self._install_fallback(exc)
        return self._install(entries)

    def _install(self, entries: tuple[CatalogEntry, ...]) -> tuple[CatalogEntry, ...]:
        self.replace(entries)
        self.used_fallback = False
        logger.info("Catalog loaded: %d entries", len(self._entries))
        return self._entries

    def _install_fallback(self, exc: LoadFailure) -> tuple[CatalogEntry, ...]:
        logger.warning("Catalog load failed, using fallback record: %s", exc)
        self.replace((fallback_entry(),))
        self.used_fallback = True
        return self._entries
