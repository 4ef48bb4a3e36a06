"""Tests for whole-catalog statistics."""

from __future__ import annotations

from dataclasses import replace

import pytest

from namedex.aggregate import (
    count_by_element,
    count_by_luck,
    count_by_stroke_bucket,
    summarize,
)
from namedex.errors import DataIntegrityError
from namedex.models import ElementCategory, LuckCategory

from conftest import make_entry


class TestCountByElement:
    def test_sample_catalog(self, catalog):
        counts = count_by_element(catalog)
        assert counts == {element: 8 for element in ElementCategory}

    def test_same_element_counted_once(self):
        entry = make_entry(
            first_element=ElementCategory.EARTH, second_element=ElementCategory.EARTH
        )
        assert count_by_element([entry]) == {ElementCategory.EARTH: 1}

    def test_absent_categories_omitted(self):
        counts = count_by_element([make_entry()])
        assert counts == {ElementCategory.WOOD: 1, ElementCategory.WATER: 1}

    def test_empty(self):
        assert count_by_element([]) == {}


class TestCountByLuck:
    def test_sample_catalog(self, catalog):
        assert count_by_luck(catalog) == {
            LuckCategory.AUSPICIOUS: 17,
            LuckCategory.NEUTRAL: 0,
            LuckCategory.INAUSPICIOUS: 3,
        }

    def test_only_total_grid_counts(self):
        entry = make_entry(other_luck=LuckCategory.INAUSPICIOUS)
        assert count_by_luck([entry])[LuckCategory.INAUSPICIOUS] == 0

    def test_unrecognized_luck_raises(self):
        entry = make_entry()
        bad_total = replace(entry.numerology.total, luck="大吉")
        bad = replace(entry, numerology=replace(entry.numerology, total=bad_total))
        with pytest.raises(DataIntegrityError, match="大吉"):
            count_by_luck([bad])


class TestCountByStrokeBucket:
    def test_sample_catalog(self, catalog):
        assert count_by_stroke_bucket(catalog) == {
            "10-15": 5,
            "16-20": 5,
            "21-25": 5,
            "26-30": 5,
        }

    def test_bounds_inclusive(self):
        entries = [make_entry(entry_id=i, strokes=s) for i, s in enumerate((10, 15, 16, 30))]
        counts = count_by_stroke_bucket(entries)
        assert counts["10-15"] == 2
        assert counts["16-20"] == 1
        assert counts["26-30"] == 1

    def test_outliers_skipped(self):
        entries = [make_entry(entry_id=1, strokes=9), make_entry(entry_id=2, strokes=31)]
        assert sum(count_by_stroke_bucket(entries).values()) == 0


class TestSummarize:
    def test_accepts_iterator(self, catalog):
        stats = summarize(iter(catalog))
        assert sum(stats.by_luck.values()) == 20
        assert sum(stats.by_stroke_bucket.values()) == 20
        assert sum(stats.by_element.values()) == 40
