"""
Dictionary source adapters.

Record shapes accepted per input directory:

- ``DICTIONARY_SHAPES``: the main dictionaries (JMnedict terms, JLPT
  frequency lists, KANJIDIC).
- ``EXAMPLE_SHAPES``: the example sentence dictionary (Jitendex terms).

Shapes are tried in order, so the term shape comes first.
"""

from kotoba.sources.bank import parse_bank, parse_directory, parse_zipfile
from kotoba.sources.base import (
    SourceRecord,
    UnrecognizedSourceRecord,
    classify_record,
    classify_records,
)
from kotoba.sources.frequency import FrequencyEntry
from kotoba.sources.kanjidic import KanjidicKanji
from kotoba.sources.terms import JitendexWord, JmnedictWord, TermEntry

DICTIONARY_SHAPES = (JmnedictWord, FrequencyEntry, KanjidicKanji)
EXAMPLE_SHAPES = (JitendexWord,)

__all__ = [
    "DICTIONARY_SHAPES",
    "EXAMPLE_SHAPES",
    "FrequencyEntry",
    "JitendexWord",
    "JmnedictWord",
    "KanjidicKanji",
    "SourceRecord",
    "TermEntry",
    "UnrecognizedSourceRecord",
    "classify_record",
    "classify_records",
    "parse_bank",
    "parse_directory",
    "parse_zipfile",
]
