"""
KANJIDIC kanji bank records.

Shape: ``[char, onyomi, kunyomi, tags, meanings, stats]`` where the readings
are space separated strings and ``stats`` maps names such as ``strokes`` or
``jlpt`` to string values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from kotoba.entry import Kanji
from kotoba.merge import LexiconBuilder
from kotoba.sources.base import SourceRecord, is_str, split_tags


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass
class KanjidicKanji(SourceRecord):
    """One character of a KANJIDIC bank."""
    kanji: str
    onyomi: Set[str] = field(default_factory=set)
    kunyomi: Set[str] = field(default_factory=set)
    meaning: List[str] = field(default_factory=list)
    stats: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def matches(cls, raw: Any) -> bool:
        return (
            isinstance(raw, list)
            and len(raw) == 6
            and is_str(raw[0]) and len(raw[0]) == 1
            and is_str(raw[1]) and is_str(raw[2]) and is_str(raw[3])
            and isinstance(raw[4], list) and all(is_str(m) for m in raw[4])
            and isinstance(raw[5], dict) and all(is_str(v) for v in raw[5].values())
        )

    @classmethod
    def from_raw(cls, raw: list) -> "KanjidicKanji":
        meaning: List[str] = []
        for item in raw[4]:
            if item not in meaning:
                meaning.append(item)
        return cls(
            kanji=raw[0],
            onyomi=set(split_tags(raw[1])),
            kunyomi=set(split_tags(raw[2])),
            meaning=meaning,
            stats=dict(raw[5]),
        )

    @property
    def strokes(self) -> Optional[int]:
        return _parse_int(self.stats.get("strokes"))

    @property
    def jlpt(self) -> Optional[int]:
        return _parse_int(self.stats.get("jlpt"))

    @property
    def tags(self) -> Set[str]:
        jlpt = self.jlpt
        return {f"JLPT-N{jlpt}"} if jlpt is not None else set()

    def to_kanji(self) -> Kanji:
        return Kanji(
            kanji=self.kanji,
            onyomi=set(self.onyomi),
            kunyomi=set(self.kunyomi),
            meaning=list(self.meaning),
            strokes=self.strokes,
            tags=self.tags,
        )

    def convert_kanji_data(self, lexicon: LexiconBuilder) -> None:
        lexicon.add_kanji(self.to_kanji())
