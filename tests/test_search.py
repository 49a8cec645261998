"""Tests for search data."""

from conftest import make_entry
from yomichan_kindle.search import (
    SearchData,
    build_search_data,
    iteration_mark_variants,
    search_terms,
)


class TestIterationMark:
    def test_doubled_kanji(self):
        assert iteration_mark_variants("民民") == ["民々"]

    def test_one_variant_per_pair(self):
        assert iteration_mark_variants("人人人") == ["人々人", "人人々"]

    def test_kana_doubles_ignored(self):
        assert iteration_mark_variants("たみたみ") == []
        assert iteration_mark_variants("ここ") == []

    def test_unified_compatibility_ideograph(self):
        assert iteration_mark_variants("\ufa0e\ufa0e") == ["\ufa0e々"]

    def test_no_doubles(self):
        assert iteration_mark_variants("書く") == []
        assert iteration_mark_variants("") == []


class TestSearchTerms:
    def test_term_reading_variant(self):
        assert search_terms(make_entry("民民", "たみたみ")) == ["民民", "たみたみ", "民々"]

    def test_kana_entry_deduplicated(self):
        assert search_terms(make_entry("ひらがな", "ひらがな")) == ["ひらがな"]

    def test_empty_reading_dropped(self):
        assert search_terms(make_entry("猫")) == ["猫"]


class TestBuildSearchData:
    def test_inflections_per_term(self):
        data = build_search_data(make_entry("書く", "かく", "v5"))
        assert [d.term for d in data] == ["書く", "かく"]
        assert "書か" in [i.value for i in data[0].inflections]
        assert "かか" in [i.value for i in data[1].inflections]

    def test_reading_uses_headword_for_special_verbs(self):
        data = build_search_data(make_entry("行く", "いく", "v5"))
        reading = [i.value for i in data[1].inflections]
        assert "いっ" in reading
        assert "いい" not in reading

    def test_no_inflection_class(self):
        data = build_search_data(make_entry("民民", "たみたみ"))
        assert all(d.inflections == [] for d in data)

    def test_forms(self):
        data = build_search_data(make_entry("見る", "みる", "v1"))[0]
        assert data.forms[0] == "見る"
        assert set(data.forms[1:]) == {"見", "見れ", "見ろ", "見よ"}

    def test_forms_without_inflections(self):
        assert SearchData("猫").forms == ["猫"]
