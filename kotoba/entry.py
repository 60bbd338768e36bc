"""
Lexicon record types for Kotoba.

Words and kanji are assembled by the source adapters during a single
ingestion pass and written out as a snapshot afterwards.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from kotoba.characters import plain_reading


# ============================================================================
# Word Data Classes
# ============================================================================

@dataclass(frozen=True)
class Example:
    """An example sentence with its translation. Hashable, compared by value."""
    japanese: str
    english: str = ""


@dataclass
class Glossary:
    """
    One sense block of a word.

    Attributes:
        order: Relative priority within the word (signed, used for tie-breaks only).
        tags: Sense-specific tags (part of speech, usage notes).
        meaning: Ordered meanings.
    """
    order: int
    tags: Set[str] = field(default_factory=set)
    meaning: List[str] = field(default_factory=list)


@dataclass
class Word:
    """A lexicon entry keyed by its furigana spelling."""
    word_id: int
    furigana: str
    glossary: List[Glossary] = field(default_factory=list)
    frequency: Set[str] = field(default_factory=set)
    examples: Set[Example] = field(default_factory=set)

    def get_all_tags(self) -> Set[str]:
        """Return the frequency tags together with the tags of every glossary entry."""
        out = set(self.frequency)
        for glossary in self.glossary:
            out.update(glossary.tags)
        return out

    def sort_glossary(self) -> None:
        """Order glossary entries by descending priority."""
        self.glossary.sort(key=lambda g: -g.order)


# ============================================================================
# Kanji Data Classes
# ============================================================================

@dataclass
class Kanji:
    """
    Information about a kanji character.

    Readings are kept as written in KANJIDIC (``-ち.らす``, ``ひと-``);
    ``readings()`` derives the plain hiragana forms used for alignment.
    """
    kanji: str
    onyomi: Set[str] = field(default_factory=set)
    kunyomi: Set[str] = field(default_factory=set)
    meaning: List[str] = field(default_factory=list)
    strokes: Optional[int] = None
    tags: Set[str] = field(default_factory=set)

    def readings(self) -> Set[str]:
        """
        Return all readings as plain hiragana.

        Prefix/suffix markers and okurigana are removed and katakana on'yomi
        are folded to hiragana. Malformed reading strings are skipped.
        """
        out = set()
        for reading in (*self.onyomi, *self.kunyomi):
            plain = plain_reading(reading)
            if plain:
                out.add(plain)
        return out

    def merge(self, other: "Kanji") -> None:
        """
        Fold another record for the same character into this one.

        Sets are unioned, meanings extended without duplicates and the stroke
        count overwritten when the other record carries one.
        """
        self.onyomi.update(other.onyomi)
        self.kunyomi.update(other.kunyomi)
        self.tags.update(other.tags)
        _extend_unique(self.meaning, other.meaning)
        if other.strokes is not None:
            self.strokes = other.strokes


def _extend_unique(target: List[str], items: Iterable[str]) -> None:
    seen = set(target)
    for item in items:
        if item not in seen:
            seen.add(item)
            target.append(item)
