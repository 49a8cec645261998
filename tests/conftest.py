import json

import pytest

from yomichan_kindle.yomichan import DictionaryEntry, Text


def write_term_bank(directory, rows, name="term_bank_1.json"):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(json.dumps(rows, ensure_ascii=False), encoding='utf-8')
    return path


@pytest.fixture
def dictionary_dir(tmp_path):
    """A small unpacked Yomichan dictionary."""
    directory = tmp_path / "dict"
    write_term_bank(directory, [
        ["書く", "かく", "", "v5", 10, ["to write\nto compose"], 1, ""],
        ["見る", "みる", "", "v1", 20, ["to see"], 2, ""],
        ["高い", "たかい", "", "adj-i", 5, [{"type": "text", "text": "high"}], 3, ""],
    ])
    write_term_bank(directory, [
        ["民民", "たみたみ", "", "", 1, ["people"], 4, ""],
    ], name="term_bank_2.json")
    (directory / "index.json").write_text('{"title": "test"}', encoding='utf-8')
    return directory


def make_entry(term, reading="", inflection_class="", frequency=0, definitions=None, sequence=0):
    return DictionaryEntry(
        term=term,
        reading=reading,
        inflection_class=inflection_class,
        frequency=frequency,
        definitions=[Text(d) for d in (definitions or [])],
        sequence=sequence,
    )
