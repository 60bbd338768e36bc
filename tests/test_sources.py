"""
Tests for the dictionary source adapters.
"""

import json
import zipfile

import pytest

from conftest import write_archive
from kotoba.sources import (
    DICTIONARY_SHAPES,
    EXAMPLE_SHAPES,
    FrequencyEntry,
    JitendexWord,
    JmnedictWord,
    KanjidicKanji,
    UnrecognizedSourceRecord,
    classify_record,
    parse_bank,
    parse_directory,
    parse_zipfile,
)
from kotoba.sources.glossary import get_example, get_glossary, get_text, is_glossary
from kotoba.sources.tags import JMNEDICT_TAGS, remap_tag, remap_tags


# =============================================================================
# Record shapes
# =============================================================================

class TestClassifyRecord:
    """Tests for record shape recognition."""

    def test_term(self, jmnedict_record):
        record = classify_record(jmnedict_record, DICTIONARY_SHAPES)
        assert isinstance(record, JmnedictWord)

    def test_frequency(self, frequency_record):
        record = classify_record(frequency_record, DICTIONARY_SHAPES)
        assert isinstance(record, FrequencyEntry)
        assert record.kana == "たべる"
        assert record.value == 5
        assert record.tags == {"JLPT-N5"}

    def test_kanji(self, kanjidic_records):
        record = classify_record(kanjidic_records[0], DICTIONARY_SHAPES)
        assert isinstance(record, KanjidicKanji)

    def test_unknown_record_raises(self):
        raw = ["食べる", "たべる", "v1"]
        with pytest.raises(UnrecognizedSourceRecord) as exc_info:
            classify_record(raw, DICTIONARY_SHAPES)
        assert exc_info.value.record == raw
        assert "Failed to convert" in str(exc_info.value)

    def test_bool_is_not_an_int(self, jmnedict_record):
        raw = list(jmnedict_record)
        raw[4] = True
        with pytest.raises(UnrecognizedSourceRecord):
            classify_record(raw, DICTIONARY_SHAPES)

    def test_example_shapes_only_accept_terms(self, frequency_record):
        with pytest.raises(UnrecognizedSourceRecord):
            classify_record(frequency_record, EXAMPLE_SHAPES)


class TestKanjidicKanji:
    """Tests for KANJIDIC records."""

    def test_fields(self):
        raw = ["亜", "ア", "つ.ぐ", "jouyou", ["Asia", "rank next", "Asia"], {"strokes": "7", "jlpt": "1"}]
        kanji = KanjidicKanji.from_raw(raw).to_kanji()
        assert kanji.kanji == "亜"
        assert kanji.onyomi == {"ア"}
        assert kanji.kunyomi == {"つ.ぐ"}
        assert kanji.meaning == ["Asia", "rank next"]
        assert kanji.strokes == 7
        assert kanji.tags == {"JLPT-N1"}

    def test_missing_stats(self):
        raw = ["唖", "ア アク", "おし", "", ["mute"], {}]
        record = KanjidicKanji.from_raw(raw)
        assert record.strokes is None
        assert record.tags == set()


class TestTermRecords:
    """Tests for JMnedict and Jitendex term rows."""

    def test_jmnedict_columns(self, jmnedict_record):
        word = JmnedictWord.from_raw(jmnedict_record)
        assert word.kanji == "食べる"
        assert word.kana == "たべる"
        assert word.tags == {"v1", "vt"}
        assert word.frequency == {"ichi", "news1", "jlpt-N5"}
        assert word.meaning == ["to eat", "to live on"]
        assert word.order == 100
        assert word.word_id == 1358280

    def test_jitendex_columns(self, jitendex_record):
        word = JitendexWord.from_raw(jitendex_record)
        assert word.tags == {"v1", "vt"}
        assert word.frequency == {"★"}
        assert word.meaning == ["to eat"]

    def test_jitendex_example(self, jitendex_record):
        word = JitendexWord.from_raw(jitendex_record)
        assert word.examples == [("魚[さかな]を<b> 食[た]べる</b>", "I eat fish.")]


# =============================================================================
# Glossary flattening
# =============================================================================

class TestGlossary:
    """Tests for glossary flattening."""

    def test_plain_strings(self):
        assert get_glossary(["to eat", ["to live on"]]) == ["to eat", "to live on"]

    def test_strings_outside_glossary_are_ignored(self):
        item = {"type": "structured-content", "content": [
            {"tag": "span", "content": "note"},
            {"tag": "ul", "data": {"content": "glossary"}, "content": ["a", {"tag": "li", "content": "b"}]},
        ]}
        assert get_glossary(item) == ["a", "b"]

    def test_examples_node_turns_collection_off(self):
        item = {"type": "structured-content", "content": {
            "tag": "div", "data": {"content": "glossary"}, "content": [
                "meaning",
                {"tag": "div", "data": {"content": "examples"}, "content": "sentence"},
            ],
        }}
        assert get_glossary(item) == ["meaning"]

    def test_single_child_example_has_no_translation(self):
        item = {"type": "structured-content", "content": {
            "tag": "div", "data": {"content": "example-sentence"}, "content": "文です。",
        }}
        assert get_example(item) == [("文です。", "")]

    def test_ruby_text(self):
        node = {"tag": "ruby", "content": ["毒", {"tag": "rt", "content": "どく"}]}
        assert get_text(node) == " 毒[どく]"

    def test_is_glossary(self):
        assert is_glossary("text")
        assert is_glossary([{"type": "structured-content", "content": "x"}])
        assert not is_glossary(5)
        assert not is_glossary({"content": "x"})


class TestTags:
    """Tests for tag normalization."""

    def test_remap(self):
        assert remap_tag("v5r", JMNEDICT_TAGS) == "v5る"
        assert remap_tag("adj-i", JMNEDICT_TAGS) == "adj-い"

    def test_unknown_tag_kept(self):
        assert remap_tag("news1", JMNEDICT_TAGS) == "news1"

    def test_numeric_and_empty_dropped(self):
        assert remap_tag("12", JMNEDICT_TAGS) is None
        assert remap_tag("-3.5", JMNEDICT_TAGS) is None
        assert remap_tag("", JMNEDICT_TAGS) is None

    def test_remap_tags(self):
        assert remap_tags("v5k-s  vi 0", JMNEDICT_TAGS) == {"v5く-s", "vi"}


# =============================================================================
# Banks and archives
# =============================================================================

class TestBanks:
    """Tests for bank and archive parsing."""

    def test_parse_bank(self, jmnedict_record, frequency_record):
        text = json.dumps([jmnedict_record, frequency_record], ensure_ascii=False)
        records = parse_bank(text, DICTIONARY_SHAPES)
        assert [type(r) for r in records] == [JmnedictWord, FrequencyEntry]

    def test_parse_bank_requires_array(self):
        with pytest.raises(ValueError):
            parse_bank('{"a": 1}', DICTIONARY_SHAPES)

    def test_parse_zipfile_skips_other_members(self, tmp_path, kanjidic_records):
        path = write_archive(tmp_path / "kanji.zip", {
            "kanji_bank_1.json": kanjidic_records,
            "tag_bank_1.json": [["jouyou", "misc", 0, "jouyou kanji", 0]],
        })
        records = parse_zipfile(path, DICTIONARY_SHAPES)
        assert len(records) == len(kanjidic_records)
        assert all(isinstance(r, KanjidicKanji) for r in records)

    def test_parse_zipfile_unknown_record(self, tmp_path):
        path = write_archive(tmp_path / "bad.zip", {"term_bank_1.json": [["?"]]})
        with pytest.raises(UnrecognizedSourceRecord):
            parse_zipfile(path, DICTIONARY_SHAPES)

    def test_parse_zipfile_malformed_bank(self, tmp_path):
        path = tmp_path / "broken.zip"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("term_bank_2.json", "{not json")
        with pytest.raises(ValueError, match="term_bank_2.json"):
            parse_zipfile(path, DICTIONARY_SHAPES)

    def test_parse_zipfile_not_an_archive(self, tmp_path):
        path = tmp_path / "plain.zip"
        path.write_text("plain text", "utf-8")
        with pytest.raises(zipfile.BadZipFile, match="plain.zip"):
            parse_zipfile(path, DICTIONARY_SHAPES)

    def test_parse_directory(self, dictionary_dir):
        records = parse_directory(dictionary_dir, DICTIONARY_SHAPES)
        kinds = {type(r) for r in records}
        assert kinds == {KanjidicKanji, JmnedictWord, FrequencyEntry}

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_directory(tmp_path / "missing", DICTIONARY_SHAPES)
