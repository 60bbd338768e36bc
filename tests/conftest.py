"""
Shared fixtures for the kotoba test suite.
"""

import json
import zipfile

import pytest


# =============================================================================
# Raw dictionary records
# =============================================================================

@pytest.fixture
def kanjidic_records():
    """KANJIDIC kanji bank rows for the characters used in the tests."""
    return [
        ["気", "キ ケ", "いき", "jouyou", ["spirit", "mind"], {"strokes": "6", "jlpt": "4"}],
        ["毒", "ドク", "", "jouyou", ["poison"], {"strokes": "8", "jlpt": "2"}],
        ["食", "ショク ジキ", "く.う た.べる", "jouyou", ["eat", "food"], {"strokes": "9", "jlpt": "5"}],
        ["作", "サク サ", "つく.る", "jouyou", ["make"], {"strokes": "7", "jlpt": "4"}],
        ["日", "ニチ ジツ", "ひ -び -か", "jouyou", ["day", "sun"], {"strokes": "4", "jlpt": "5"}],
        ["今", "コン キン", "いま", "jouyou", ["now"], {"strokes": "4", "jlpt": "5"}],
    ]


@pytest.fixture
def jmnedict_record():
    """A JMdict style term row with plain string glossary."""
    return ["食べる", "たべる", "v1 vt", "v1", 100, ["to eat", "to live on"], 1358280, "ichi news1 N5"]


@pytest.fixture
def frequency_record():
    return ["食べる", "freq", {"reading": "たべる", "frequency": {"value": 5, "displayValue": "N5"}}]


@pytest.fixture
def jitendex_record():
    """A Jitendex term row with structured content and one example sentence."""
    glossary = [{
        "type": "structured-content",
        "content": [
            {
                "tag": "ul",
                "data": {"content": "glossary"},
                "content": [{"tag": "li", "content": "to eat"}],
            },
            {
                "tag": "div",
                "data": {"content": "extra-info"},
                "content": {
                    "tag": "div",
                    "data": {"content": "example-sentence"},
                    "content": [
                        {
                            "tag": "div",
                            "data": {"content": "example-sentence-a"},
                            "content": [
                                {"tag": "ruby", "content": ["魚", {"tag": "rt", "content": "さかな"}]},
                                "を",
                                {
                                    "tag": "span",
                                    "data": {"content": "example-keyword"},
                                    "content": [
                                        {"tag": "ruby", "content": ["食", {"tag": "rt", "content": "た"}]},
                                        "べる",
                                    ],
                                },
                            ],
                        },
                        {
                            "tag": "div",
                            "data": {"content": "example-sentence-b"},
                            "content": [
                                "I eat fish.",
                                {"tag": "span", "data": {"content": "attribution-footnote"}, "content": "[1]"},
                            ],
                        },
                    ],
                },
            },
        ],
    }]
    return ["食べる", "たべる", "★", "v1 vt", 5, glossary, 1358280, ""]


# =============================================================================
# Dictionary archives
# =============================================================================

def write_archive(path, banks):
    """Write a dictionary zip archive with the given ``{member: rows}`` banks."""
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("index.json", json.dumps({"title": "test", "revision": "1"}))
        for name, rows in banks.items():
            archive.writestr(name, json.dumps(rows, ensure_ascii=False))
    return path


@pytest.fixture
def dictionary_dir(tmp_path, kanjidic_records, jmnedict_record, frequency_record):
    """Directory holding one main dictionary archive."""
    directory = tmp_path / "dictionaries"
    directory.mkdir()
    write_archive(directory / "kanjidic.zip", {"kanji_bank_1.json": kanjidic_records})
    write_archive(
        directory / "words.zip",
        {
            "term_bank_1.json": [
                jmnedict_record,
                ["気の毒", "きのどく", "adj-na n", "", 50, ["pitiful"], 1220540, "ichi news2 N3"],
                ["今日", "きょう", "n adv", "", 80, ["today"], 1579110, "ichi news1 N5"],
                ["２日", "ふつか", "n", "", 10, ["second day of the month"], 1600001, "N5"],
            ],
            "term_meta_bank_1.json": [
                frequency_record,
                ["気の毒", "freq", {"reading": "きのどく", "frequency": {"value": 3, "displayValue": "N3"}}],
                ["今日", "freq", {"reading": "きょう", "frequency": {"value": 5, "displayValue": "N5"}}],
                ["２日", "freq", {"reading": "ふつか", "frequency": {"value": 5, "displayValue": "N5"}}],
            ],
        },
    )
    return directory


@pytest.fixture
def examples_dir(tmp_path, jitendex_record):
    """Directory holding one example sentence archive."""
    directory = tmp_path / "examples"
    directory.mkdir()
    write_archive(directory / "jitendex.zip", {"term_bank_1.json": [jitendex_record]})
    return directory
