"""Tests for kana utilities."""

import pytest

from yomichan_kindle.kana import (
    KANA_TABLE,
    Dan,
    convert_to_dan,
    is_kanji,
    to_hiragana,
    to_katakana,
)


class TestKanaConversion:
    def test_to_hiragana(self):
        assert to_hiragana("カタカナ") == "かたかな"
        assert to_hiragana("ヴァ") == "ゔぁ"

    def test_to_katakana(self):
        assert to_katakana("ひらがな") == "ヒラガナ"

    def test_non_kana_passes_through(self):
        assert to_hiragana("漢字abc１ー") == "漢字abc１ー"
        assert to_katakana("漢字abc１ー") == "漢字abc１ー"

    def test_mixed(self):
        assert to_hiragana("書クコト") == "書くこと"
        assert to_katakana("書くこと") == "書クコト"

    @pytest.mark.parametrize("text", ["", "ひらがな", "カタカナ", "混ぜたテキスト", "ラーメン屋", "abc"])
    def test_round_trip_is_idempotent(self, text):
        assert to_hiragana(to_katakana(text)) == to_hiragana(text)


class TestConvertToDan:
    def test_shift(self):
        assert convert_to_dan("く", Dan.A) == "か"
        assert convert_to_dan("く", Dan.I) == "き"
        assert convert_to_dan("ぶ", Dan.E) == "べ"
        assert convert_to_dan("る", Dan.O) == "ろ"

    def test_every_row_and_column(self):
        for row in KANA_TABLE:
            assert len(row) == 5
            for column, mora in enumerate(row):
                for dan in Dan:
                    result = convert_to_dan(mora, dan)
                    assert any(mora in r and r[dan.value] == result for r in KANA_TABLE)
                assert convert_to_dan(mora, Dan(column)) == mora

    def test_table_rows(self):
        assert len(KANA_TABLE) == 15

    @pytest.mark.parametrize("mora", ["", "かき", "a", "書", "ん", "っ"])
    def test_no_match(self, mora):
        assert convert_to_dan(mora, Dan.A) is None


def test_is_kanji():
    assert is_kanji("民")
    assert not is_kanji("々")
    assert not is_kanji("か")
    assert not is_kanji("民民")


def test_is_kanji_unified_compatibility_ideographs():
    assert is_kanji("\ufa0e")
    assert is_kanji("\ufa29")
    assert not is_kanji("\uf900")
    assert not is_kanji("\ufa10")
