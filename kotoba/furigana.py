"""
Furigana reconstruction for Kotoba.

Aligns a written form with its kana reading character by character, using
the known readings of each kanji, and renders the result in bracket notation:
every run of kanji is followed by the kana it consumes (``気[き]の 毒[どく]``).

The search is a bounded backtracking over block boundaries:

1. Match the reading against the concatenation of per-character reading
   alternations.
2. Retry with exactly one kanji block replaced by an unconstrained ``(.+)``,
   trying each block from left to right (irregular or sound-changed readings
   such as 特急 → とっきゅう).
3. Coalesce adjacent blocks of the same kind and repeat 1-2 at the coarser
   granularity (compound readings such as 今日 → きょう).

The first success wins, so the output is deterministic.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence, Set

WILDCARD = "(.+)"


@dataclass
class Block:
    """
    A run of characters aligned as a unit.

    Attributes:
        text: Written characters covered by the block.
        is_kanji: True if the characters have known readings.
        parts: One regex (without capture group) per covered character.
    """
    text: str
    is_kanji: bool
    parts: List[str] = field(default_factory=list)

    @property
    def pattern(self) -> str:
        """Capturing regex for the whole block."""
        if len(self.parts) == 1:
            return f"({self.parts[0]})"
        return "(" + "".join(f"(?:{part})" for part in self.parts) + ")"


def reading_alternation(readings: Iterable[str]) -> str:
    """
    Build a regex alternation from a set of readings.

    Longer readings come first, ties broken lexicographically, so the same
    reading set always yields the same pattern.
    """
    ordered = sorted({r for r in readings if r}, key=lambda r: (-len(r), r))
    return "|".join(re.escape(r) for r in ordered)


def build_blocks(kanji: str, kanji_readings: Mapping[str, Set[str]]) -> List[Block]:
    """
    Create one block per character of the written form.

    Characters without known readings match themselves literally.
    """
    blocks = []
    for char in kanji:
        readings = kanji_readings.get(char)
        alternation = reading_alternation(readings) if readings else ""
        if alternation:
            blocks.append(Block(char, True, [alternation]))
        else:
            blocks.append(Block(char, False, [re.escape(char)]))
    return blocks


def coalesce_blocks(blocks: Sequence[Block]) -> List[Block]:
    """Merge adjacent blocks of the same kind into single blocks."""
    out: List[Block] = []
    for block in blocks:
        if out and out[-1].is_kanji == block.is_kanji:
            last = out[-1]
            out[-1] = Block(last.text + block.text, last.is_kanji, last.parts + block.parts)
        else:
            out.append(Block(block.text, block.is_kanji, list(block.parts)))
    return out


def render_blocks(blocks: Sequence[Block], readings: Sequence[str]) -> str:
    """
    Render aligned blocks in bracket notation.

    A kanji block that follows a literal block is separated by one space.
    """
    out = []
    preceded_by_kanji = True

    for block, reading in zip(blocks, readings):
        if block.is_kanji:
            if not preceded_by_kanji:
                out.append(" ")
            out.append(f"{block.text}[{reading}]")
        else:
            out.append(block.text)
        preceded_by_kanji = block.is_kanji

    return "".join(out)


def match_blocks(kana: str, blocks: Sequence[Block]) -> Optional[str]:
    """
    Try to align the reading against the given blocks.

    Index 0 is the exact attempt; index ``i`` replaces block ``i - 1`` by a
    wildcard, which is only allowed for kanji blocks.

    Returns:
        Rendered furigana, or None if no placement matches.
    """
    for wildcard_index in range(len(blocks) + 1):
        if wildcard_index != 0 and not blocks[wildcard_index - 1].is_kanji:
            continue

        pattern = "".join(
            WILDCARD if i + 1 == wildcard_index else block.pattern
            for i, block in enumerate(blocks)
        )

        match = re.fullmatch(pattern, kana)
        if match:
            return render_blocks(blocks, match.groups())

    return None


def to_furigana(
    kanji: str,
    kana: str,
    kanji_readings: Mapping[str, Set[str]],
) -> Optional[str]:
    """
    Convert a written form into its furigana representation.

    Args:
        kanji: Written form of the word (e.g., "気の毒").
        kana: Kana reading of the whole word (e.g., "きのどく").
        kanji_readings: Known hiragana readings per kanji character.

    Returns:
        Furigana string such as "気[き]の 毒[どく]", or None if the reading
        cannot be split over the written form.

    Example:
        >>> readings = {'気': {'き', 'け'}, '毒': {'どく'}}
        >>> to_furigana("気の毒", "きのどく", readings)
        '気[き]の 毒[どく]'
    """
    if not kanji or not kana:
        return None

    blocks = build_blocks(kanji, kanji_readings)

    result = match_blocks(kana, blocks)
    if result is not None:
        return result

    return match_blocks(kana, coalesce_blocks(blocks))


def unverified_furigana(kanji: str, kana: str) -> str:
    """Fallback notation used when alignment fails: the whole word over the whole reading."""
    return f"{kanji}[{kana}]"
