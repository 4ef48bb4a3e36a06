"""Pydantic models for the catalog JSON document.

The document keeps the field names the name generator emits
(``tian_ge``, ``zong_ge``, ``total_strokes``...). Each record is validated
strictly: element and luck tokens must belong to their controlled
vocabulary, either as the English enum value or as the source character.
Validated records are converted to the frozen dataclasses in
``namedex.models``; the reverse conversion produces the hand-off blob.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

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

ELEMENT_TOKENS: dict[str, ElementCategory] = {
    "金": ElementCategory.METAL,
    "木": ElementCategory.WOOD,
    "水": ElementCategory.WATER,
    "火": ElementCategory.FIRE,
    "土": ElementCategory.EARTH,
}

LUCK_TOKENS: dict[str, LuckCategory] = {
    "吉": LuckCategory.AUSPICIOUS,
    "半吉": LuckCategory.NEUTRAL,
    "凶": LuckCategory.INAUSPICIOUS,
}


def parse_element(value: object) -> ElementCategory:
    """Map an element token to its ElementCategory.

    Raises:
        ValueError: If the token is outside the five-element vocabulary.
    """
    if isinstance(value, ElementCategory):
        return value
    if isinstance(value, str):
        token = value.strip()
        if token in ELEMENT_TOKENS:
            return ELEMENT_TOKENS[token]
        try:
            return ElementCategory(token.lower())
        except ValueError:
            pass
    raise ValueError(f"unrecognized element token {value!r}")


def parse_luck(value: object) -> LuckCategory:
    """Map a luck token to its LuckCategory.

    Only the three canonical values are accepted. Loose spellings are
    rejected rather than guessed.

    Raises:
        ValueError: If the token is not one of the recognized luck values.
    """
    if isinstance(value, LuckCategory):
        return value
    if isinstance(value, str):
        token = value.strip()
        if token in LUCK_TOKENS:
            return LUCK_TOKENS[token]
        try:
            return LuckCategory(token.lower())
        except ValueError:
            pass
    raise ValueError(f"unrecognized luck token {value!r}")


class _SourceModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CharacterSchema(_SourceModel):
    character: str = Field(alias="char")
    stroke_count: int = Field(alias="strokes", ge=0)
    element: ElementCategory
    radical: str = ""

    @field_validator("element", mode="before")
    @classmethod
    def normalize_element(cls, v: object) -> ElementCategory:
        return parse_element(v)


class ElementsSchema(_SourceModel):
    first: CharacterSchema = Field(alias="character1")
    second: CharacterSchema = Field(alias="character2")


class CompatibilitySchema(_SourceModel):
    zodiac_sign: str = Field(alias="zodiac")
    favorable_roots: list[str] = Field(default_factory=list)
    score: int = Field(ge=0, le=100)


class GridSchema(_SourceModel):
    value: int
    element: ElementCategory
    luck: LuckCategory

    @field_validator("element", mode="before")
    @classmethod
    def normalize_element(cls, v: object) -> ElementCategory:
        return parse_element(v)

    @field_validator("luck", mode="before")
    @classmethod
    def normalize_luck(cls, v: object) -> LuckCategory:
        return parse_luck(v)


class NumerologySchema(_SourceModel):
    heaven: GridSchema = Field(alias="tian_ge")
    person: GridSchema = Field(alias="ren_ge")
    earth_grid: GridSchema = Field(alias="di_ge")
    total: GridSchema = Field(alias="zong_ge")
    five_element_summary: str = Field(default="", alias="san_cai")


class HexagramSchema(_SourceModel):
    name: str
    meaning: str = ""
    derivation_note: str = Field(default="", alias="calculation")


class MeaningSchema(_SourceModel):
    symbolism: str = ""
    interpretation: str = ""


class EntrySchema(_SourceModel):
    """A single catalog record in source document shape."""

    id: int
    name: str
    pinyin: str
    elements: ElementsSchema
    compatibility: CompatibilitySchema
    numerology: NumerologySchema
    hexagram: HexagramSchema
    meaning: MeaningSchema
    risks: list[str] = Field(default_factory=list)
    notes: str = ""
    total_stroke_count: int = Field(alias="total_strokes", ge=0)

    @field_validator("notes", mode="before")
    @classmethod
    def null_notes(cls, v: object) -> object:
        return "" if v is None else v

    def to_entry(self) -> CatalogEntry:
        """Convert to the immutable CatalogEntry dataclass."""
        return CatalogEntry(
            id=self.id,
            name=self.name,
            pinyin=self.pinyin,
            elements=NameElements(
                first=_character(self.elements.first),
                second=_character(self.elements.second),
            ),
            compatibility=Compatibility(
                zodiac_sign=self.compatibility.zodiac_sign,
                favorable_roots=frozenset(self.compatibility.favorable_roots),
                score=self.compatibility.score,
            ),
            numerology=Numerology(
                heaven=_grid(self.numerology.heaven),
                person=_grid(self.numerology.person),
                earth_grid=_grid(self.numerology.earth_grid),
                total=_grid(self.numerology.total),
                five_element_summary=self.numerology.five_element_summary,
            ),
            hexagram=Hexagram(
                name=self.hexagram.name,
                meaning=self.hexagram.meaning,
                derivation_note=self.hexagram.derivation_note,
            ),
            meaning=Meaning(
                symbolism=self.meaning.symbolism,
                interpretation=self.meaning.interpretation,
            ),
            total_stroke_count=self.total_stroke_count,
            risks=tuple(self.risks),
            notes=self.notes,
        )

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "EntrySchema":
        """Build the source-shaped record for a CatalogEntry."""

        def character(slot: CharacterSlot) -> CharacterSchema:
            return CharacterSchema(
                character=slot.character,
                stroke_count=slot.stroke_count,
                element=slot.element,
                radical=slot.radical,
            )

        def grid(g: Grid) -> GridSchema:
            return GridSchema(value=g.value, element=g.element, luck=g.luck)

        return cls(
            id=entry.id,
            name=entry.name,
            pinyin=entry.pinyin,
            elements=ElementsSchema(
                first=character(entry.elements.first),
                second=character(entry.elements.second),
            ),
            compatibility=CompatibilitySchema(
                zodiac_sign=entry.compatibility.zodiac_sign,
                favorable_roots=sorted(entry.compatibility.favorable_roots),
                score=entry.compatibility.score,
            ),
            numerology=NumerologySchema(
                heaven=grid(entry.numerology.heaven),
                person=grid(entry.numerology.person),
                earth_grid=grid(entry.numerology.earth_grid),
                total=grid(entry.numerology.total),
                five_element_summary=entry.numerology.five_element_summary,
            ),
            hexagram=HexagramSchema(
                name=entry.hexagram.name,
                meaning=entry.hexagram.meaning,
                derivation_note=entry.hexagram.derivation_note,
            ),
            meaning=MeaningSchema(
                symbolism=entry.meaning.symbolism,
                interpretation=entry.meaning.interpretation,
            ),
            risks=list(entry.risks),
            notes=entry.notes,
            total_stroke_count=entry.total_stroke_count,
        )


def _character(schema: CharacterSchema) -> CharacterSlot:
    return CharacterSlot(
        character=schema.character,
        stroke_count=schema.stroke_count,
        element=schema.element,
        radical=schema.radical,
    )


def _grid(schema: GridSchema) -> Grid:
    return Grid(value=schema.value, element=schema.element, luck=schema.luck)


def entry_to_document(entry: CatalogEntry) -> dict:
    """Serialize an entry to the JSON-ready source document shape."""
    return EntrySchema.from_entry(entry).model_dump(by_alias=True, mode="json")


def parse_document(data: object) -> tuple[CatalogEntry, ...]:
    """Validate a parsed ``{"names": [...]}`` document into catalog entries.

    Args:
        data: Result of ``json.loads`` on the catalog file.

    Returns:
        Entries in document order.

    Raises:
        LoadFailure: If the document does not have a ``names`` list.
        DataIntegrityError: If any record fails validation.
    """
    if not isinstance(data, dict) or not isinstance(data.get("names"), list):
        raise LoadFailure("catalog document has no 'names' list")

    entries: list[CatalogEntry] = []
    for index, record in enumerate(data["names"]):
        try:
            entries.append(EntrySchema.model_validate(record).to_entry())
        except ValidationError as exc:
            raise DataIntegrityError(
                f"catalog record #{index} is malformed: {exc}"
            ) from exc
    return tuple(entries)
