"""
Frequency list records (JLPT level lists).

Shape: ``[kanji, "freq", {"reading": kana, "frequency": {"value": N,
"displayValue": "N"}}]``. The value is the JLPT level of the word.
"""

from dataclasses import dataclass
from typing import Any, Set

from kotoba.merge import LexiconBuilder
from kotoba.sources.base import SourceRecord, is_int, is_str

FREQUENCY_MARKER = "freq"


@dataclass
class FrequencyEntry(SourceRecord):
    """Level information for one ``(kanji, kana)`` pair."""
    kanji: str
    kana: str
    value: int
    display_value: str = ""

    @classmethod
    def matches(cls, raw: Any) -> bool:
        if not (isinstance(raw, list) and len(raw) == 3):
            return False
        kanji, marker, data = raw
        if not (is_str(kanji) and marker == FREQUENCY_MARKER and isinstance(data, dict)):
            return False
        frequency = data.get("frequency")
        return (
            is_str(data.get("reading"))
            and isinstance(frequency, dict)
            and is_int(frequency.get("value"))
        )

    @classmethod
    def from_raw(cls, raw: list) -> "FrequencyEntry":
        data = raw[2]
        frequency = data["frequency"]
        return cls(
            kanji=raw[0],
            kana=data["reading"],
            value=frequency["value"],
            display_value=str(frequency.get("displayValue", frequency["value"])),
        )

    @property
    def tags(self) -> Set[str]:
        return {f"JLPT-N{self.value}"}

    def convert_word_data(self, lexicon: LexiconBuilder) -> None:
        lexicon.add_frequency(self.kanji, self.kana, self.tags)
