"""
Term bank records.

Both word dictionaries ship the same eight element tuple::

    [kanji, kana, tags, rules, order, glossary, id, term_tags]

but fill the tag columns differently. JMnedict keeps the part of speech in
column 2 and the frequency markers (``news12k``, ``ichi``) in column 7;
Jitendex keeps the frequency markers (``★``) in column 2 and the part of
speech in column 3.
"""

from dataclasses import dataclass, field
from typing import Any, List, Set, Tuple

from kotoba.entry import Example, Glossary
from kotoba.merge import LexiconBuilder
from kotoba.sources.base import SourceRecord, is_int, is_str
from kotoba.sources.glossary import get_example, get_glossary, is_glossary
from kotoba.sources.tags import JITENDEX_TAGS, JMNEDICT_TAGS, remap_tags


@dataclass
class TermEntry(SourceRecord):
    """Common part of the term bank records."""
    kanji: str
    kana: str
    tags: Set[str] = field(default_factory=set)
    order: int = 0
    meaning: List[str] = field(default_factory=list)
    examples: List[Tuple[str, str]] = field(default_factory=list)
    word_id: int = 0
    frequency: Set[str] = field(default_factory=set)

    @classmethod
    def matches(cls, raw: Any) -> bool:
        return (
            isinstance(raw, list)
            and len(raw) == 8
            and is_str(raw[0]) and is_str(raw[1]) and is_str(raw[2]) and is_str(raw[3])
            and is_int(raw[4])
            and is_glossary(raw[5])
            and is_int(raw[6])
            and is_str(raw[7])
        )

    def convert_word_data(self, lexicon: LexiconBuilder) -> None:
        lexicon.add_word(
            self.kanji,
            self.kana,
            self.word_id,
            Glossary(self.order, set(self.tags), list(self.meaning)),
            frequency=self.frequency,
            examples=[Example(jp, en) for jp, en in self.examples],
        )


class JmnedictWord(TermEntry):
    """A JMdict/JMnedict term with romaji conjugation tags."""

    @classmethod
    def from_raw(cls, raw: list) -> "JmnedictWord":
        return cls(
            kanji=raw[0],
            kana=raw[1],
            tags=remap_tags(raw[2], JMNEDICT_TAGS),
            order=raw[4],
            meaning=get_glossary(raw[5]),
            examples=get_example(raw[5]),
            word_id=raw[6],
            frequency=remap_tags(raw[7], JMNEDICT_TAGS),
        )


class JitendexWord(TermEntry):
    """A Jitendex term with structured glossaries and example sentences."""

    @classmethod
    def from_raw(cls, raw: list) -> "JitendexWord":
        return cls(
            kanji=raw[0],
            kana=raw[1],
            tags=remap_tags(raw[3], JITENDEX_TAGS),
            order=raw[4],
            meaning=get_glossary(raw[5]),
            examples=get_example(raw[5]),
            word_id=raw[6],
            frequency=remap_tags(raw[2], JITENDEX_TAGS),
        )
