"""
Common interface of the dictionary source adapters.

Dictionary banks are JSON arrays of positional tuples. Each adapter class
recognizes one tuple shape and knows how to fold it into a LexiconBuilder,
in two passes: kanji data first, word data second (word alignment needs
the readings collected in the first pass).
"""

import json
from typing import Any, List, Sequence, Type

from kotoba.merge import LexiconBuilder


class UnrecognizedSourceRecord(ValueError):
    """A dictionary record matches none of the known shapes."""

    def __init__(self, record: Any):
        self.record = record
        preview = record[:2] if isinstance(record, list) else record
        super().__init__(
            f"Failed to convert: {json.dumps(preview, ensure_ascii=False)}\n"
            f"{json.dumps(record, ensure_ascii=False, indent=2)}"
        )


class SourceRecord:
    """
    Base class for one parsed dictionary record.

    Subclasses implement ``matches`` and ``from_raw`` for their tuple shape and
    override the conversion hooks they contribute to.
    """

    @classmethod
    def matches(cls, raw: Any) -> bool:
        """Return True if the raw JSON value has this record's shape."""
        raise NotImplementedError

    @classmethod
    def from_raw(cls, raw: list) -> "SourceRecord":
        """Build the record from a raw JSON value that ``matches``."""
        raise NotImplementedError

    def convert_kanji_data(self, lexicon: LexiconBuilder) -> None:
        """Contribute kanji character data. Most records have none."""

    def convert_word_data(self, lexicon: LexiconBuilder) -> None:
        """Contribute word data. Most records have none."""


def is_str(value: Any) -> bool:
    return isinstance(value, str)


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def split_tags(text: str) -> List[str]:
    """Split a space separated tag string, dropping empty items."""
    return [tag for tag in text.split(" ") if tag]


def classify_record(raw: Any, shapes: Sequence[Type[SourceRecord]]) -> SourceRecord:
    """
    Match a raw record against the given shapes in order.

    Args:
        raw: One element of a dictionary bank.
        shapes: Candidate record classes, most specific first.

    Returns:
        The parsed record.

    Raises:
        UnrecognizedSourceRecord: If no shape matches. Skipping the record
            would silently leave the lexicon incomplete.
    """
    for shape in shapes:
        if shape.matches(raw):
            return shape.from_raw(raw)
    raise UnrecognizedSourceRecord(raw)


def classify_records(raw_records: Sequence[Any], shapes: Sequence[Type[SourceRecord]]) -> List[SourceRecord]:
    """Classify every raw record, aborting on the first unknown one."""
    return [classify_record(raw, shapes) for raw in raw_records]
