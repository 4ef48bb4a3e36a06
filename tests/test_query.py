"""Tests for the query engine: filtering, ordering and recompute properties."""

from __future__ import annotations

import pytest

from namedex.filters import FilterState, build_predicate
from namedex.models import SortKey
from namedex.query import COMPARATORS, hexagram_names, run_query

from conftest import INAUSPICIOUS_IDS, make_entry


def everything(entry):
    return True


class TestRunQuery:
    def test_none_keeps_catalog_order(self, catalog):
        result = run_query(catalog, everything)
        assert [e.id for e in result] == list(range(1, 21))

    def test_result_is_tuple(self, catalog):
        assert isinstance(run_query(catalog, everything), tuple)

    def test_empty_catalog(self):
        assert run_query((), everything, SortKey.SCORE) == ()

    def test_score_descending(self, catalog):
        result = run_query(catalog, everything, SortKey.SCORE)
        scores = [e.compatibility.score for e in result]
        assert scores == sorted(scores, reverse=True)
        assert result[0].id == 20

    def test_strokes_ascending(self, catalog):
        reversed_catalog = tuple(reversed(catalog))
        result = run_query(reversed_catalog, everything, SortKey.STROKES)
        assert [e.id for e in result] == list(range(1, 21))

    def test_sort_key_accepts_string(self, catalog):
        result = run_query(catalog, everything, "score")
        assert result[0].id == 20

    def test_unknown_sort_key_rejected(self, catalog):
        with pytest.raises(ValueError):
            run_query(catalog, everything, "popularity")

    def test_score_ties_keep_catalog_order(self):
        entries = [
            make_entry(entry_id=1, score=80),
            make_entry(entry_id=2, score=90),
            make_entry(entry_id=3, score=80),
            make_entry(entry_id=4, score=90),
        ]
        result = run_query(entries, everything, SortKey.SCORE)
        assert [e.id for e in result] == [2, 4, 1, 3]

    def test_stroke_ties_keep_catalog_order(self):
        entries = [make_entry(entry_id=i, strokes=20) for i in (5, 3, 9)]
        result = run_query(entries, everything, SortKey.STROKES)
        assert [e.id for e in result] == [5, 3, 9]

    def test_name_sort_is_deterministic(self):
        entries = [
            make_entry(entry_id=1, name="王明轩"),
            make_entry(entry_id=2, name="李明轩"),
            make_entry(entry_id=3, name="王明轩"),
        ]
        first = run_query(entries, everything, SortKey.NAME)
        second = run_query(list(first), everything, SortKey.NAME)
        assert [e.name for e in first] == [e.name for e in second]
        ids_for_wang = [e.id for e in first if e.name == "王明轩"]
        assert ids_for_wang == [1, 3]

    def test_every_sort_key_has_comparator(self):
        assert set(COMPARATORS) == set(SortKey)


class TestQueryProperties:
    def test_recompute_is_idempotent(self, catalog):
        filters = FilterState().toggle("score", "80-89").toggle("score", "90-100")
        predicate = build_predicate(filters, "wang")
        assert run_query(catalog, predicate, SortKey.SCORE) == run_query(
            catalog, predicate, SortKey.SCORE
        )

    def test_resorting_sorted_result_is_identity(self, catalog):
        for key in SortKey:
            result = run_query(catalog, everything, key)
            assert run_query(result, everything, key) == result

    def test_result_is_subset_of_catalog(self, catalog):
        predicate = build_predicate(FilterState().toggle("strokes", "21-25"))
        result = run_query(catalog, predicate, SortKey.NAME)
        assert set(result) <= set(catalog)
        assert all(21 <= e.total_stroke_count <= 25 for e in result)

    def test_filter_then_sort_independent_of_prior_order(self, catalog):
        predicate = build_predicate(FilterState().toggle("luck", "inauspicious"))
        forward = run_query(catalog, predicate, SortKey.STROKES)
        backward = run_query(tuple(reversed(catalog)), predicate, SortKey.STROKES)
        assert forward == backward
        assert [e.id for e in forward] == list(INAUSPICIOUS_IDS)

    def test_removing_a_filter_restores_wider_result(self, catalog):
        narrow = FilterState().toggle("score", "90-100")
        wide = narrow.toggle("score", "90-100")
        assert len(run_query(catalog, build_predicate(narrow))) == 6
        assert len(run_query(catalog, build_predicate(wide))) == 20


class TestHexagramNames:
    def test_distinct_and_sorted(self, catalog):
        names = hexagram_names(catalog)
        assert names == sorted({"乾为天", "坤为地", "水雷屯"})

    def test_empty(self):
        assert hexagram_names(()) == []
