"""
Character handling and kana conversion for Kotoba.

Provides katakana to hiragana folding, parsing of KANJIDIC reading strings
and helpers for the bracketed furigana notation used throughout the lexicon
(``気[き]の 毒[どく]``).
"""

import re
from typing import Optional, Tuple

# ============================================================================
# Regular Expressions
# ============================================================================

# Full-width digits and the kanji zero, which mark counter/number entries
NUMERAL_REGEX = r"〇|０|１|２|３|４|５|６|７|８|９"
_NUMERAL_PATTERN = re.compile(NUMERAL_REGEX)

# One furigana block: optional separating space, base text, bracketed reading
FURIGANA_REGEX = r" ?(?P<kanji>[^\s\[\]]+?)\[(?P<kana>[^\s\[\]]+?)\]"
_FURIGANA_PATTERN = re.compile(FURIGANA_REGEX)

# Reading strings as written in KANJIDIC: [prefix-]reading[.okurigana][-suffix]
KANJI_READING_REGEX = (
    r"^(?:(?P<prefix>[^\-. \t]*)-)?"
    r"(?P<reading>[^\-. \t]+)"
    r"(?:\.(?P<okurigana>[^\-. \t]+))?"
    r"(?:-(?P<suffix>[^\-. \t]*))?$"
)
_KANJI_READING_PATTERN = re.compile(KANJI_READING_REGEX)

_HTML_TAG_PATTERN = re.compile(r"<[^<>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s")


def has_numerals(text: str) -> bool:
    """Check if text contains full-width digits or 〇."""
    return bool(_NUMERAL_PATTERN.search(text))


# ============================================================================
# Kana Conversion
# ============================================================================

# Katakana with a hiragana counterpart sit 0x60 code points above it
KATAKANA_OFFSET = 0x60
KATAKANA_FOLDABLE = ("ァ", "ヶ")
KATAKANA_ITERATION = "ヽヾ"


def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.

    Small kana, voiced kana and iteration marks are folded as well. Characters
    with no hiragana counterpart (ー, ヷ, non-kana) are returned unchanged.

    Example:
        >>> as_hiragana("ドク")
        'どく'
    """
    first, last = KATAKANA_FOLDABLE
    result = []
    for char in text:
        if first <= char <= last or char in KATAKANA_ITERATION:
            result.append(chr(ord(char) - KATAKANA_OFFSET))
        else:
            result.append(char)

    return ''.join(result)


# ============================================================================
# Kanji Readings
# ============================================================================

def split_kanji_reading(
    reading: str,
) -> Optional[Tuple[Optional[str], str, Optional[str], Optional[str]]]:
    """
    Split a KANJIDIC reading into prefix, reading, okurigana and suffix.

    A leading ``-`` marks a suffix-only reading (the prefix is then ``''``),
    a trailing ``-`` a prefix-only reading, and ``.`` separates the reading
    from its okurigana.

    Args:
        reading: Reading string such as ``ち.らす``, ``-ち.らす`` or ``ひと-``.

    Returns:
        Tuple of (prefix, reading, okurigana, suffix), or None if the string
        does not follow the format.

    Examples:
        >>> split_kanji_reading("ち.らす")
        (None, 'ち', 'らす', None)
        >>> split_kanji_reading("ひと-")
        (None, 'ひと', None, '')
    """
    match = _KANJI_READING_PATTERN.match(reading)
    if not match:
        return None

    return (
        match.group('prefix'),
        match.group('reading'),
        match.group('okurigana'),
        match.group('suffix'),
    )


def plain_reading(reading: str) -> Optional[str]:
    """Return the bare hiragana reading of a KANJIDIC reading string."""
    parts = split_kanji_reading(reading)
    if parts is None:
        return None
    return as_hiragana(parts[1])


# ============================================================================
# Furigana Notation
# ============================================================================

def to_kana(furigana: str) -> str:
    """
    Reconstruct the kana reading of a furigana string.

    Example:
        >>> to_kana("気[き]の 毒[どく]")
        'きのどく'
    """
    return _FURIGANA_PATTERN.sub(r"\g<kana>", furigana)


def to_kanji(furigana: str) -> str:
    """
    Reconstruct the written form of a furigana string.

    Example:
        >>> to_kanji("気[き]の 毒[どく]")
        '気の毒'
    """
    return _FURIGANA_PATTERN.sub(r"\g<kanji>", furigana)


def strip_html(text: str) -> str:
    """Remove any HTML tags from a string."""
    return _HTML_TAG_PATTERN.sub("", text)


def strip_whitespace(text: str) -> str:
    """Remove all whitespace from a string."""
    return _WHITESPACE_PATTERN.sub("", text)
