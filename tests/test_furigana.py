"""
Tests for furigana.py - reading alignment.
"""

import pytest

from kotoba.characters import to_kana, to_kanji
from kotoba.furigana import (
    build_blocks,
    coalesce_blocks,
    reading_alternation,
    to_furigana,
    unverified_furigana,
)


@pytest.fixture
def readings():
    return {
        "気": {"き", "け", "いき"},
        "毒": {"どく"},
        "今": {"こん", "きん", "いま"},
        "日": {"にち", "じつ", "ひ", "び", "か"},
        "特": {"とく"},
        "急": {"きゅう", "いそ"},
        "食": {"しょく", "じき", "く", "た"},
        "茶": {"ちゃ", "さ"},
    }


class TestToFurigana:
    """Tests for to_furigana."""

    def test_kanji_and_kana_mixed(self, readings):
        assert to_furigana("気の毒", "きのどく", readings) == "気[き]の 毒[どく]"

    def test_okurigana(self, readings):
        assert to_furigana("食べる", "たべる", readings) == "食[た]べる"

    def test_sound_change_uses_wildcard(self, readings):
        assert to_furigana("特急", "とっきゅう", readings) == "特[とっ]急[きゅう]"

    def test_compound_reading_coalesces(self, readings):
        assert to_furigana("今日", "きょう", readings) == "今日[きょう]"

    def test_kana_prefix(self, readings):
        assert to_furigana("お茶", "おちゃ", readings) == "お 茶[ちゃ]"

    def test_kana_word(self, readings):
        assert to_furigana("たべる", "たべる", readings) == "たべる"

    def test_unalignable(self, readings):
        assert to_furigana("たべる", "のむ", readings) is None

    def test_empty_input(self, readings):
        assert to_furigana("", "き", readings) is None
        assert to_furigana("気", "", readings) is None

    @pytest.mark.parametrize("kanji,kana", [
        ("気の毒", "きのどく"),
        ("特急", "とっきゅう"),
        ("今日", "きょう"),
        ("食べる", "たべる"),
        ("お茶", "おちゃ"),
        ("毒気", "どっけ"),
        ("日日", "ひび"),
        ("今日は", "きょうは"),
        ("たべる", "たべる"),
        ("テスト", "テスト"),
    ])
    def test_projections_restore_input(self, readings, kanji, kana):
        furigana = to_furigana(kanji, kana, readings)
        assert to_kanji(furigana) == kanji
        assert to_kana(furigana) == kana


class TestBlocks:
    """Tests for the block helpers."""

    def test_alternation_is_deterministic(self):
        assert reading_alternation({"き", "いき", "け"}) == "いき|き|け"

    def test_unknown_characters_are_literal(self, readings):
        blocks = build_blocks("気の", readings)
        assert [b.is_kanji for b in blocks] == [True, False]

    def test_coalesce(self, readings):
        blocks = coalesce_blocks(build_blocks("今日は", readings))
        assert [b.text for b in blocks] == ["今日", "は"]
        assert len(blocks[0].parts) == 2

    def test_unverified(self):
        assert unverified_furigana("今日", "きょう") == "今日[きょう]"
