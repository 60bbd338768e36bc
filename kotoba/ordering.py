"""
Ordering of new cards in the study deck.

New cards are introduced level by level (N5 first, words without a level
last). Within a level, words sharing the same kanji are grouped so they are
learned together, and groups are ordered by the stroke count of their most
complex shared kanji. Kana-only words are spread evenly between the groups.
"""

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from kotoba import settings
from kotoba.anki import AnkiConnect, deck_query
from kotoba.entry import Kanji
from kotoba.models import AnkiNote

logger = logging.getLogger(__name__)

JLPT_LEVELS = (1, 2, 3, 4, 5)

# Stroke count used for unknown characters
UNKNOWN_STROKES = 255


def get_jlpt_level(note: AnkiNote) -> Optional[int]:
    """Highest JLPT level (smallest N) among the note's tags, or None."""
    for level in JLPT_LEVELS:
        if f"JLPT-N{level}" in note.tags:
            return level
    return None


def split_by_jlpt_level(notes: Sequence[AnkiNote]) -> List[List[AnkiNote]]:
    """
    Split notes by JLPT level.

    Returns:
        Six lists: index 0 holds notes without a level, index N the N level.
    """
    out: List[List[AnkiNote]] = [[] for _ in range(len(JLPT_LEVELS) + 1)]
    for note in notes:
        out[get_jlpt_level(note) or 0].append(note)
    return out


def _word(note: AnkiNote) -> str:
    return note.fields.get(settings.FIELD_WORD, "")


def get_kanji(note: AnkiNote, kanji: Mapping[str, Kanji]) -> str:
    """Known kanji of the note's word, sorted."""
    return "".join(sorted(char for char in _word(note) if char in kanji))


def group_by_kanji(notes: Sequence[AnkiNote], kanji: Mapping[str, Kanji]) -> Dict[str, List[AnkiNote]]:
    """
    Group notes by their set of kanji.

    Kana-only notes end up under the empty key. Each group is sorted by word.
    """
    groups: Dict[str, List[AnkiNote]] = {}
    for note in notes:
        groups.setdefault(get_kanji(note, kanji), []).append(note)

    return {key: sorted(group, key=_word) for key, group in groups.items()}


def _strokes(kanji: Mapping[str, Kanji], char: str) -> int:
    entry = kanji.get(char)
    if entry is None or entry.strokes is None:
        return UNKNOWN_STROKES
    return entry.strokes


def _group_sort_key(key: str, shared: Set[str], kanji: Mapping[str, Kanji]) -> str:
    """
    Sort key of a kanji group.

    Groups are ordered by the most complex kanji they share with other
    groups, then by number of kanji and total stroke count.
    """
    total = sum(k.strokes or 0 for k in (kanji.get(char) for char in key) if k is not None)

    common = sorted((char for char in key if char in shared), key=lambda c: (_strokes(kanji, c), c))
    pivot = common[-1] if common else " "

    return f"{_strokes(kanji, pivot):03}{pivot}{len(key):03}{total:04}"


def order_groups(
    groups: Dict[str, List[AnkiNote]],
    kanji: Mapping[str, Kanji],
) -> Tuple[List[AnkiNote], List[List[AnkiNote]]]:
    """
    Order the kanji groups of one level.

    Returns:
        Tuple of (kana-only notes, ordered kanji groups).
    """
    groups = dict(groups)
    kana = groups.pop("", [])

    counts = Counter(char for key in groups for char in key)
    shared = {char for char, count in counts.items() if count > 1}

    ordered = sorted(groups, key=lambda key: _group_sort_key(key, shared, kanji))
    return kana, [groups[key] for key in ordered]


def interleave(kana: Sequence[AnkiNote], groups: Sequence[Sequence[AnkiNote]]) -> List[AnkiNote]:
    """Spread the kana notes evenly between the kanji groups."""
    kana = list(kana)
    if not groups:
        return kana

    out: List[AnkiNote] = []
    fill = len(kana) / len(groups)
    pending = 0.0

    for group in groups:
        out.extend(group)

        pending += fill
        while pending >= 1.0 and kana:
            out.append(kana.pop(0))
            pending -= 1.0

    out.extend(kana)
    return out


def sort_notes(notes: Sequence[AnkiNote], kanji: Mapping[str, Kanji]) -> List[AnkiNote]:
    """Put notes in study order: N5 first, notes without a level last."""
    out: List[AnkiNote] = []
    for level in reversed(split_by_jlpt_level(notes)):
        kana, groups = order_groups(group_by_kanji(level, kanji), kanji)
        out.extend(interleave(kana, groups))
    return out


def apply_order(anki: AnkiConnect, kanji: Mapping[str, Kanji]) -> int:
    """
    Reorder the new cards of the study deck.

    Only new, unsuspended and unburied cards are touched; their due value is
    set to the position of their note in study order.

    Returns:
        Number of cards updated.
    """
    query = deck_query()
    logger.info("Fetching anki info")
    notes = anki.notes_info(anki.find_notes(query))
    active = set(anki.find_cards(f"{query} is:new -is:suspended -is:buried"))

    logger.info("Sorting cards")
    ordered = sort_notes(notes, kanji)

    logger.info("Applying sorted list to anki")
    total = len(ordered)
    step = max(1, total // 20)
    updated = 0

    for index, note in enumerate(ordered):
        if index % step == 0:
            logger.info(f"  {index * 100 // total:>3}% Notes")

        for card in note.cards:
            if card in active:
                anki.set_specific_value_of_card(card, ["due"], [index + 1])
                updated += 1

    return updated
