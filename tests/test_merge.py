"""Tests for merging entries with identical bodies."""

from conftest import make_entry
from yomichan_kindle.entry import assemble_entry
from yomichan_kindle.inflections import Inflection
from yomichan_kindle.merge import merge_entries, merge_search_data
from yomichan_kindle.search import SearchData


def test_identical_bodies_merge():
    entries = [
        assemble_entry(make_entry("書く", "かく", "v5", frequency=5, definitions=["to write"])),
        assemble_entry(make_entry("描く", "かく", "v5", frequency=12, definitions=["to write"])),
    ]
    merged = merge_entries(entries)
    assert len(merged) == 1
    entry = merged[0]
    assert entry.headwords == ["書く", "描く"]
    assert entry.frequency == 12
    assert [d.term for d in entry.search_data] == ["書く", "かく", "描く"]
    assert len(entry.forms) == len(set(entry.forms))


def test_different_bodies_stay_separate():
    entries = [
        assemble_entry(make_entry("書く", definitions=["to write"])),
        assemble_entry(make_entry("欠く", definitions=["to lack"])),
    ]
    assert len(merge_entries(entries)) == 2


def test_sorted_by_frequency():
    entries = [
        assemble_entry(make_entry("a", frequency=1, definitions=["1"])),
        assemble_entry(make_entry("b", frequency=3, definitions=["3"])),
        assemble_entry(make_entry("c", frequency=2, definitions=["2"])),
    ]
    assert [e.headwords[0] for e in merge_entries(entries)] == ["b", "c", "a"]


def test_sort_is_stable():
    entries = [
        assemble_entry(make_entry("a", frequency=1, definitions=["1"])),
        assemble_entry(make_entry("b", frequency=1, definitions=["2"])),
        assemble_entry(make_entry("c", frequency=1, definitions=["3"])),
    ]
    assert [e.headwords[0] for e in merge_entries(entries)] == ["a", "b", "c"]


def test_single_entry_unchanged():
    entry = assemble_entry(make_entry("書く", definitions=["to write"]))
    assert merge_entries([entry]) == [entry]


def test_empty():
    assert merge_entries([]) == []


def test_merge_search_data_unions_inflections():
    merged = merge_search_data([
        [SearchData("かく", [Inflection("未然形", "かか"), Inflection("連用形", "かき")])],
        [SearchData("かく", [Inflection("未然形", "かか"), Inflection("音便形", "かい")])],
    ])
    assert len(merged) == 1
    assert [i.value for i in merged[0].inflections] == ["かか", "かき", "かい"]


def test_merge_does_not_mutate_inputs():
    first = SearchData("かく", [Inflection("未然形", "かか")])
    merge_search_data([[first], [SearchData("かく", [Inflection("連用形", "かき")])]])
    assert [i.value for i in first.inflections] == ["かか"]
