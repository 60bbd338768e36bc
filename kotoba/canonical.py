"""
Canonicalization of the merged lexicon.

Several dictionary entries often share a written form (``生物`` as
``生[せい]物[ぶつ]`` and ``生[なま]物[もの]``). The conflict resolver keeps one
record per written form, picked by a lexicographic priority key:

1. JLPT level (lower number wins, missing is worst)
2. newsNk frequency band (lower wins, missing is worst)
3. number of example sentences (more wins)
4. number of glossary entries (more wins)
5. smallest glossary order (lower wins, missing is worst)

Ties keep the record seen first.
"""

import logging
import math
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from kotoba import settings
from kotoba.characters import has_numerals, to_kanji
from kotoba.entry import Kanji, Word
from kotoba.merge import convert_data, convert_word_data
from kotoba.settings import FilterConfig
from kotoba.sources import DICTIONARY_SHAPES, EXAMPLE_SHAPES, parse_directory

logger = logging.getLogger(__name__)

_JLPT_TAG_PATTERN = re.compile(r"^JLPT-N(\d+)$")
_NEWS_TAG_PATTERN = re.compile(r"^news(\d+)k$")

PriorityKey = Tuple[float, float, int, int, float]


# =============================================================================
# Rank extraction
# =============================================================================

def _min_tag_number(tags: Iterable[str], pattern: "re.Pattern") -> Optional[int]:
    numbers = [int(m.group(1)) for m in map(pattern.match, tags) if m]
    return min(numbers) if numbers else None


def get_jlpt_level(word: Word) -> Optional[int]:
    """
    Return the JLPT level of a word.

    Args:
        word: Lexicon word.

    Returns:
        The smallest N among the word's ``JLPT-N{N}`` tags, or None.

    Example:
        >>> get_jlpt_level(Word(0, "犬[いぬ]", frequency={"JLPT-N5"}))
        5
    """
    return _min_tag_number(word.get_all_tags(), _JLPT_TAG_PATTERN)


def get_newsnk(word: Word) -> Optional[int]:
    """Return the smallest N among the word's ``news{N}k`` tags, or None."""
    return _min_tag_number(word.get_all_tags(), _NEWS_TAG_PATTERN)


def priority_key(word: Word) -> PriorityKey:
    """Sort key of a word among records with the same written form; lower wins."""
    jlpt = get_jlpt_level(word)
    news = get_newsnk(word)
    orders = [glossary.order for glossary in word.glossary]

    return (
        jlpt if jlpt is not None else math.inf,
        news if news is not None else math.inf,
        -len(word.examples),
        -len(word.glossary),
        min(orders) if orders else math.inf,
    )


# =============================================================================
# Filters
# =============================================================================

def filter_overlapping(words: Dict[str, Word]) -> Dict[str, Word]:
    """
    Keep one word per written form.

    Args:
        words: Words by furigana.

    Returns:
        The surviving words, keyed by furigana.
    """
    kept: Dict[str, Word] = {}
    keys: Dict[str, PriorityKey] = {}

    for furigana, word in words.items():
        written = to_kanji(furigana)
        key = priority_key(word)

        if written not in kept or key < keys[written]:
            kept[written] = word
            keys[written] = key

    return {word.furigana: word for word in kept.values()}


def filter_words(word: Word, config: FilterConfig = settings.DEFAULT_FILTER) -> bool:
    """
    Decide whether a word belongs in the study lexicon.

    Words without glossary and counter/number entries (full-width digits,
    ``〇``) are dropped. Of the rest, the configured JLPT levels are kept, and
    the compound levels only when the word is tagged as a compound.
    """
    if not word.glossary:
        return False

    if has_numerals(word.furigana):
        return False

    tags = word.get_all_tags()
    levels = {int(m.group(1)) for m in map(_JLPT_TAG_PATTERN.match, tags) if m}

    if config.compound_tag in tags and levels & config.compound_levels:
        return True

    return bool(levels & config.levels)


def attach_examples(words: Dict[str, Word], examples: Dict[str, Word]) -> int:
    """
    Replace the examples of each word by those of the example source.

    Returns:
        Number of words that received examples.
    """
    count = 0
    for furigana, word in words.items():
        source = examples.get(furigana)
        if source is not None:
            word.examples = set(source.examples)
            count += 1
    return count


# =============================================================================
# Pipeline
# =============================================================================

def build_lexicon(
    dictionaries: Union[str, Path] = settings.DICTIONARIES_DIR,
    examples: Optional[Union[str, Path]] = settings.EXAMPLES_DIR,
    config: FilterConfig = settings.DEFAULT_FILTER,
) -> Tuple[Dict[str, Kanji], Dict[str, Word]]:
    """
    Run the full ingestion pipeline.

    Args:
        dictionaries: Directory with the main dictionary archives.
        examples: Directory with the example sentence archives, or None.
        config: Level filter.

    Returns:
        Tuple of (kanji by character, words by furigana).

    Raises:
        UnrecognizedSourceRecord: If an archive holds an unknown record.
    """
    records = parse_directory(dictionaries, DICTIONARY_SHAPES)
    kanji, words = convert_data(records)

    example_words: Dict[str, Word] = {}
    if examples is not None:
        logger.info("Parsing examples")
        example_records = parse_directory(examples, EXAMPLE_SHAPES)
        example_words = convert_word_data(kanji, example_records)

    logger.info("Filtering words...")
    before = len(words)
    words = {key: word for key, word in words.items() if filter_words(word, config)}
    words = filter_overlapping(words)

    attached = attach_examples(words, example_words)
    logger.info(f"Attached examples to {attached} words")

    ratio = len(words) / before * 100 if before else 0.0
    logger.info(f"Filtered {len(words)}/{before} ({ratio:.1f}%)")

    return kanji, words
