"""
Pydantic models for the data Kotoba reads and writes.

These models are used for:
- The lexicon snapshot documents (``wordlist.json`` and ``kanjilist.json``)
- Responses of the Tatoeba sentence search API
- Notes returned by AnkiConnect

Sets in the in-memory records are written as sorted lists so that snapshots
diff cleanly between runs.

Usage:
    from kotoba.models import WordModel

    model = WordModel.from_word(word)
    data = model.model_dump()
    word = WordModel.model_validate(data).to_word()
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from kotoba.entry import Example, Glossary, Kanji, Word


# =============================================================================
# Snapshot Models
# =============================================================================

class ExampleModel(BaseModel):
    """An example sentence pair."""
    japanese: str = Field(..., description="Japanese sentence in furigana notation")
    english: str = Field("", description="Translation, empty if unknown")


class GlossaryModel(BaseModel):
    """One sense block of a word."""
    order: int = Field(0, description="Relative priority of the sense")
    tags: List[str] = Field(default_factory=list, description="Sense tags, sorted")
    meaning: List[str] = Field(default_factory=list, description="Meanings in order")


class WordModel(BaseModel):
    """
    Serialized form of a lexicon word.

    The furigana spelling doubles as the key of the word list document.
    """
    word_id: int = Field(0, description="Dictionary sequence number")
    furigana: str = Field(..., description="Spelling in bracket furigana notation")
    glossary: List[GlossaryModel] = Field(default_factory=list)
    frequency: List[str] = Field(default_factory=list, description="Frequency tags, sorted")
    examples: List[ExampleModel] = Field(default_factory=list)

    @classmethod
    def from_word(cls, word: Word) -> "WordModel":
        """Create a WordModel from a Word record."""
        examples = sorted(word.examples, key=lambda e: (e.japanese, e.english))
        return cls(
            word_id=word.word_id,
            furigana=word.furigana,
            glossary=[
                GlossaryModel(order=g.order, tags=sorted(g.tags), meaning=list(g.meaning))
                for g in word.glossary
            ],
            frequency=sorted(word.frequency),
            examples=[ExampleModel(japanese=e.japanese, english=e.english) for e in examples],
        )

    def to_word(self) -> Word:
        """Convert back into a Word record."""
        return Word(
            word_id=self.word_id,
            furigana=self.furigana,
            glossary=[Glossary(g.order, set(g.tags), list(g.meaning)) for g in self.glossary],
            frequency=set(self.frequency),
            examples={Example(e.japanese, e.english) for e in self.examples},
        )


class KanjiModel(BaseModel):
    """Serialized form of a kanji record."""
    kanji: str = Field(..., min_length=1, max_length=1)
    onyomi: List[str] = Field(default_factory=list)
    kunyomi: List[str] = Field(default_factory=list)
    meaning: List[str] = Field(default_factory=list)
    strokes: Optional[int] = Field(None, description="Stroke count if known")
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_kanji(cls, kanji: Kanji) -> "KanjiModel":
        """Create a KanjiModel from a Kanji record."""
        return cls(
            kanji=kanji.kanji,
            onyomi=sorted(kanji.onyomi),
            kunyomi=sorted(kanji.kunyomi),
            meaning=list(kanji.meaning),
            strokes=kanji.strokes,
            tags=sorted(kanji.tags),
        )

    def to_kanji(self) -> Kanji:
        """Convert back into a Kanji record."""
        return Kanji(
            kanji=self.kanji,
            onyomi=set(self.onyomi),
            kunyomi=set(self.kunyomi),
            meaning=list(self.meaning),
            strokes=self.strokes,
            tags=set(self.tags),
        )


# =============================================================================
# Tatoeba Response Models
# =============================================================================

class TatoebaTranscription(BaseModel):
    """Alternative script rendering of a sentence (furigana for Japanese)."""
    model_config = ConfigDict(populate_by_name=True)

    script: str = ""
    text: str
    needs_review: bool = Field(False, alias="needsReview")
    type_: str = Field("", alias="type")
    html: str = ""


class TatoebaAudio(BaseModel):
    """Audio recording attached to a sentence."""
    author: Optional[str] = None
    attribution_url: Optional[str] = None
    license: Optional[str] = None
    download_url: Optional[str] = None


class TatoebaTranslation(BaseModel):
    """A translation of a matched sentence."""
    id: int
    text: str
    lang: str
    script: Optional[str] = None
    license: Optional[str] = None
    owner: Optional[str] = None
    transcriptions: List[TatoebaTranscription] = Field(default_factory=list)
    audios: List[TatoebaAudio] = Field(default_factory=list)


class TatoebaEntry(BaseModel):
    """A matched sentence with its transcriptions and translations."""
    id: int
    text: str
    lang: str
    script: Optional[str] = None
    license: Optional[str] = None
    owner: Optional[str] = None
    transcriptions: List[TatoebaTranscription] = Field(default_factory=list)
    audios: List[TatoebaAudio] = Field(default_factory=list)
    translations: List[List[TatoebaTranslation]] = Field(default_factory=list)


class TatoebaPaging(BaseModel):
    """Keyset pagination information."""
    total: int = 0
    has_next: bool = False
    cursor_end: Optional[str] = None
    next: Optional[str] = None


class TatoebaResponse(BaseModel):
    """One page of sentence search results."""
    paging: TatoebaPaging = Field(default_factory=TatoebaPaging)
    data: List[TatoebaEntry] = Field(default_factory=list)


# =============================================================================
# AnkiConnect Models
# =============================================================================

class AnkiNote(BaseModel):
    """
    A flashcard note as sent to and returned by AnkiConnect.

    ``fields`` maps field names to their plain values; ``from_notes_info``
    flattens the ``{"value": ..., "order": ...}`` objects returned by
    ``notesInfo``.
    """
    model_config = ConfigDict(populate_by_name=True)

    note_id: Optional[int] = Field(None, alias="noteId")
    deck_name: Optional[str] = Field(None, alias="deckName")
    model_name: str = Field(..., alias="modelName")
    tags: List[str] = Field(default_factory=list)
    fields: Dict[str, str] = Field(default_factory=dict)
    cards: List[int] = Field(default_factory=list)

    @classmethod
    def from_notes_info(cls, entry: dict) -> "AnkiNote":
        """Create an AnkiNote from one element of a ``notesInfo`` result."""
        fields = {
            name: value["value"] if isinstance(value, dict) else value
            for name, value in entry.get("fields", {}).items()
        }
        return cls(
            noteId=entry.get("noteId"),
            deckName=entry.get("deckName"),
            modelName=entry["modelName"],
            tags=entry.get("tags", []),
            fields=fields,
            cards=entry.get("cards", []),
        )

    def to_payload(self) -> dict:
        """Serialize for ``addNote``."""
        payload = {
            "modelName": self.model_name,
            "tags": list(self.tags),
            "fields": dict(self.fields),
        }
        if self.deck_name is not None:
            payload["deckName"] = self.deck_name
        return payload
