"""
Tag normalization for dictionary records.

JMnedict style banks spell conjugation classes in romaji (``v5r``, ``adj-i``);
the lexicon uses the kana spelling of the ending instead (``v5る``, ``adj-い``)
so that the inflection generator can read the ending straight off the tag.
"""

from typing import Mapping, Optional, Set

JMNEDICT_TAGS = {
    # JLPT levels
    "N5": "jlpt-N5",
    "N4": "jlpt-N4",
    "N3": "jlpt-N3",
    "N2": "jlpt-N2",
    "N1": "jlpt-N1",

    # Adjectives
    "adj-i": "adj-い",
    "adj-ix": "adj-いx",
    "adj-ku": "adj-く",
    "adj-na": "adj-な",
    "adj-no": "adj-の",
    "adj-to": "adj-と",
    "adj-kari": "adj-かり",
    "adj-shiku": "adj-しく",
    "adj-taru": "adj-たる",
    "adj-nari": "adj-なり",
    "i-adjective": "い-adjective",
    "i-adj": "い-adj",
    "ix-adj": "いx-adj",
    "ku-adj": "く-adj",
    "na-adj": "な-adj",
    "no-adj": "の-adj",
    "to-adj": "と-adj",
    "kari-adj": "かり-adj",
    "shiku-adj": "しく-adj",
    "taru-adj": "たる-adj",
    "tari-adj": "なり-adj",

    # Adverbs
    "adv-to": "adv-と",
    "to-adv": "と-adv",

    # Irregular verbs
    "vr": "vり",
    "vk": "vくる",
    "vs": "vする",
    "vz": "vずる",
    "vn": "vぬ-i",
    "vs-i": "vする-i",
    "vs-s": "vする-s",

    # Yodan verbs
    "v4k": "v4く",
    "v4s": "v4す",
    "v4t": "v4つ",
    "v4n": "v4ぬ",
    "v4h": "v4ふ",
    "v4m": "v4む",
    "v4r": "v4る",
    "v4g": "v4ぐ",
    "v4b": "v4ぶ",

    # Godan verbs
    "v5u": "v5う",
    "v5k": "v5く",
    "v5s": "v5す",
    "v5t": "v5つ",
    "v5n": "v5ぬ",
    "v5m": "v5む",
    "v5r": "v5る",
    "v5g": "v5ぐ",
    "v5b": "v5ぶ",
    "v5u-s": "v5う-s",
    "v5k-s": "v5く-s",
    "v5r-i": "v5る-i",
    "v5aru": "v5ある",
    "v5uru": "v5うる",
}

JITENDEX_TAGS = {
    "N5": "JLPT-N5",
    "N4": "JLPT-N4",
    "N3": "JLPT-N3",
    "N2": "JLPT-N2",
    "N1": "JLPT-N1",
}


def _is_number(tag: str) -> bool:
    try:
        float(tag)
    except ValueError:
        return False
    return True


def remap_tag(tag: str, table: Mapping[str, str]) -> Optional[str]:
    """
    Normalize one tag.

    Args:
        tag: Raw tag as found in the bank.
        table: Replacement table; tags not in it are kept as they are.

    Returns:
        The normalized tag, or None for empty and numeric tags (scores).

    Examples:
        >>> remap_tag("v5r", JMNEDICT_TAGS)
        'v5る'
        >>> remap_tag("12", JMNEDICT_TAGS) is None
        True
    """
    if not tag or _is_number(tag):
        return None
    return table.get(tag, tag)


def remap_tags(text: str, table: Mapping[str, str]) -> Set[str]:
    """Normalize a space separated tag string into a set."""
    out = set()
    for tag in text.split(" "):
        remapped = remap_tag(tag, table)
        if remapped is not None:
            out.add(remapped)
    return out
