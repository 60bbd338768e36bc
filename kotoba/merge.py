"""
Merge engine for Kotoba.

Folds the records of every dictionary source into one record per spelling.
Conversion runs in two passes over the same record list:

1. Kanji pass: every record contributes its kanji character data.
2. Word pass: every record contributes word data. New words are aligned
   against the readings collected in the first pass.

During the passes words are keyed by ``(kanji, kana)``; ``finish`` projects
them to their furigana spelling.
"""

import logging
from typing import Dict, Iterable, Optional, Sequence, Set, Tuple

from kotoba.entry import Example, Glossary, Kanji, Word
from kotoba.furigana import to_furigana, unverified_furigana

logger = logging.getLogger(__name__)

# Fraction of records between two progress messages
PROGRESS_STEP = 0.05


class LexiconBuilder:
    """
    Accumulator for one ingestion run.

    Attributes:
        kanji: Kanji records by character.
        words: Word records by ``(kanji, kana)``.
        unverified: Keys whose furigana fell back to the unverified form.
    """

    def __init__(self, kanji: Optional[Dict[str, Kanji]] = None):
        self.kanji: Dict[str, Kanji] = dict(kanji) if kanji else {}
        self.words: Dict[Tuple[str, str], Word] = {}
        self.unverified: Set[Tuple[str, str]] = set()
        self._readings: Optional[Dict[str, Set[str]]] = None

    # -------------------------------------------------------------------------
    # Kanji
    # -------------------------------------------------------------------------

    def add_kanji(self, kanji: Kanji) -> None:
        """Insert a kanji record or fold it into the existing one."""
        existing = self.kanji.get(kanji.kanji)
        if existing is None:
            self.kanji[kanji.kanji] = kanji
        else:
            existing.merge(kanji)
        self._readings = None

    def kanji_readings(self) -> Dict[str, Set[str]]:
        """Plain hiragana readings per character, as used by the aligner."""
        if self._readings is None:
            self._readings = {}
            for char, kanji in self.kanji.items():
                readings = kanji.readings()
                if readings:
                    self._readings[char] = readings
        return self._readings

    # -------------------------------------------------------------------------
    # Words
    # -------------------------------------------------------------------------

    def align(self, kanji: str, kana: str) -> str:
        """Furigana for a new word, falling back to ``kanji[kana]``."""
        furigana = to_furigana(kanji, kana, self.kanji_readings())
        if furigana is None:
            logger.debug(f"Failed to align: {kanji} {kana}")
            self.unverified.add((kanji, kana))
            return unverified_furigana(kanji, kana)
        return furigana

    def add_word(
        self,
        kanji: str,
        kana: str,
        word_id: int,
        glossary: Glossary,
        frequency: Iterable[str] = (),
        examples: Iterable[Example] = (),
    ) -> Word:
        """
        Contribute a dictionary sense to the word ``(kanji, kana)``.

        An existing word takes the new id, gains the glossary entry and the
        union of frequency tags and examples. A new word is aligned and
        inserted.
        """
        key = (kanji, kana)
        word = self.words.get(key)

        if word is not None:
            word.word_id = word_id
            word.glossary.append(glossary)
            word.frequency.update(frequency)
            word.examples.update(examples)
            return word

        word = Word(
            word_id=word_id,
            furigana=self.align(kanji, kana),
            glossary=[glossary],
            frequency=set(frequency),
            examples=set(examples),
        )
        self.words[key] = word
        return word

    def add_frequency(self, kanji: str, kana: str, tags: Iterable[str]) -> Word:
        """
        Attach frequency tags to ``(kanji, kana)``.

        Words unknown so far are created with id 0 and no glossary.
        """
        key = (kanji, kana)
        word = self.words.get(key)

        if word is not None:
            word.frequency.update(tags)
            return word

        word = Word(
            word_id=0,
            furigana=self.align(kanji, kana),
            frequency=set(tags),
        )
        self.words[key] = word
        return word

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def finish(self) -> Dict[str, Word]:
        """
        Sort glossaries and key the words by furigana.

        Later words with the same furigana replace earlier ones.
        """
        out: Dict[str, Word] = {}
        for word in self.words.values():
            word.sort_glossary()
            out[word.furigana] = word

        if self.unverified:
            logger.info(f"{len(self.unverified)} words kept unverified furigana")
            for kanji, kana in sorted(self.unverified):
                logger.debug(f"Unverified furigana: {kanji} {kana} -> {kanji}[{kana}]")
        return out


# =============================================================================
# Conversion passes
# =============================================================================

def _progress(records: Sequence, label: str):
    """Yield the records, logging progress every 5%."""
    total = len(records)
    step = max(1, int(total * PROGRESS_STEP))

    for index, record in enumerate(records, 1):
        yield record
        if index % step == 0 or index == total:
            logger.info(f"{label}: {index * 100 // total}% ({index}/{total})")


def convert_kanji_data(records: Sequence, lexicon: LexiconBuilder) -> None:
    """Run the kanji pass over every record."""
    for record in _progress(records, "Converting kanji"):
        record.convert_kanji_data(lexicon)


def convert_words(records: Sequence, lexicon: LexiconBuilder) -> None:
    """Run the word pass over every record."""
    for record in _progress(records, "Converting words"):
        record.convert_word_data(lexicon)


def convert_data(records: Sequence) -> Tuple[Dict[str, Kanji], Dict[str, Word]]:
    """
    Fold parsed dictionary records into kanji and word tables.

    Args:
        records: Classified source records.

    Returns:
        Tuple of (kanji by character, words by furigana).
    """
    lexicon = LexiconBuilder()
    convert_kanji_data(records, lexicon)
    logger.info(f"Collected {len(lexicon.kanji)} kanji")

    convert_words(records, lexicon)
    words = lexicon.finish()
    logger.info(f"Collected {len(words)} words")

    return lexicon.kanji, words


def convert_word_data(kanji: Dict[str, Kanji], records: Sequence) -> Dict[str, Word]:
    """
    Run only the word pass against an existing kanji table.

    Used for sources whose records carry no kanji data of their own, such
    as the example sentence dictionary.
    """
    lexicon = LexiconBuilder(kanji)
    convert_words(records, lexicon)
    return lexicon.finish()
