"""
Flashcard note rendering and synchronization.

Renders lexicon words into the fields of the study deck's notes, keeps the
deck in sync with a lexicon snapshot and enriches notes with example
sentences from Tatoeba.

Note fields:
    1 Word       - furigana spelling
    2 Meaning    - glossary entries, see ``get_meaning``
    3 Audio      - managed by hand
    4 Sentences  - example pairs, ``jp<br>en`` joined by ``<br><br>``
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from kotoba import settings
from kotoba.anki import AnkiConnect, AnkiConnectError
from kotoba.characters import strip_html, strip_whitespace, to_kanji
from kotoba.conjugations import highlight_word
from kotoba.entry import Word
from kotoba.models import AnkiNote, TatoebaEntry
from kotoba.tatoeba import TatoebaError, TatoebaSearch

logger = logging.getLogger(__name__)

# Glossary entries with this tag only list alternative spellings
FORMS_TAG = "forms"

_BRACKET_SPACE_PATTERN = re.compile(r"\] ")
_BRACKET_SPACES_PATTERN = re.compile(r"\] +")
_LATIN_PATTERN = re.compile(r"[A-Za-z]")
_TATOEBA_FURIGANA_PATTERN = re.compile(r"\[([^\[\]|][^\[\]]*)\]")
_EXAMPLE_PATTERN = re.compile(
    r"(?:^|\n)[ \t]*([^\n| \t][^\n|]*?)[ \t]*(?:\n[ \t]*([^\n]+?)[ \t]*)?(?:\n|$)"
)

ExamplePair = Tuple[str, str]


# ============================================================================
# Field Rendering
# ============================================================================

def get_meaning(word: Word) -> str:
    """
    Render the meaning field of a word.

    Every glossary entry except alternative-form lists becomes one line
    (``<br>`` separated) with its meanings joined by `` | ``. The entry's tags
    are shown as ``[ tag tag ]`` in front of it unless the tags add nothing
    over the last tags shown.

    Example:
        >>> word = Word(1, "食[た]べる", [Glossary(1, {"v1", "vt"}, ["to eat", "to live on"])])
        >>> get_meaning(word)
        '[ v1 vt ] to eat | to live on'
    """
    lines = []
    previous_tags: Set[str] = set()

    for glossary in word.glossary:
        if FORMS_TAG in glossary.tags:
            continue

        meaning = " | ".join(glossary.meaning)

        if not glossary.tags or glossary.tags <= previous_tags:
            lines.append(meaning)
            continue

        lines.append(f"[ {' '.join(sorted(glossary.tags))} ] {meaning}")
        previous_tags = set(glossary.tags)

    return "<br>".join(lines)


def render_examples(examples: Iterable[ExamplePair]) -> str:
    """Render example pairs; a missing translation leaves only the Japanese line."""
    blocks = []
    for japanese, english in examples:
        if not japanese:
            continue
        blocks.append(f"{japanese}<br>{english}" if english else japanese)
    return "<br><br>".join(blocks)


def get_examples(word: Word) -> str:
    """Render the sentence field of a word."""
    examples = sorted(word.examples, key=lambda e: (e.japanese, e.english))
    return render_examples((e.japanese, e.english) for e in examples)


def get_filter_key(text: str) -> str:
    """
    Key used to recognize duplicate example sentences.

    HTML and furigana readings are stripped, as is all whitespace.
    """
    return strip_whitespace(to_kanji(strip_html(text)))


def note_key(note: AnkiNote) -> str:
    """Furigana spelling of a note's word, normalized like the lexicon keys."""
    return _BRACKET_SPACE_PATTERN.sub("]", note.fields.get(settings.FIELD_WORD, ""))


# ============================================================================
# Example Sentences
# ============================================================================

def parse_examples(field: str, word: str, tags: Iterable[str]) -> List[ExamplePair]:
    """
    Parse a sentence field back into example pairs.

    Sentences are re-highlighted for the word; pairs without a translation
    or in which the word cannot be found are dropped.
    """
    text = field.replace("&nbsp;", " ").replace("<br>", "\n")
    tags = set(tags)

    out = []
    for match in _EXAMPLE_PATTERN.finditer(text):
        japanese, english = match.group(1), match.group(2)
        if english is None:
            continue

        highlighted = highlight_word(strip_html(japanese), word, tags)
        if highlighted is not None:
            out.append((highlighted, english))

    return out


def _tatoeba_furigana(match: "re.Match") -> str:
    kanji, *kana = match.group(1).split("|")

    if len(kana) == 1 and len(kanji) > 1:
        return f" {kanji}[{kana[0]}]"

    out = []
    for index, char in enumerate(kanji):
        reading = kana[index] if index < len(kana) else ""
        out.append(f" {char}[{reading}]" if reading else char)
    return "".join(out)


def format_tatoeba_response(text: str, word: str, tags: Iterable[str]) -> Optional[str]:
    """
    Convert a Tatoeba furigana transcription into bracket notation.

    ``[日本|に|ほん]`` becomes `` 日[に]本[ほん]``. Transcriptions containing
    Latin letters are rejected.

    Returns:
        The highlighted sentence, or None if rejected or the word is absent.
    """
    if _LATIN_PATTERN.search(text):
        return None

    text = _TATOEBA_FURIGANA_PATTERN.sub(_tatoeba_furigana, text)
    text = _BRACKET_SPACES_PATTERN.sub("]", text).strip()

    return highlight_word(text, word, tags)


def _best_transcription(entry: TatoebaEntry, word: str, tags: Set[str]) -> Optional[str]:
    candidates = [
        formatted
        for formatted in (format_tatoeba_response(t.text, word, tags) for t in entry.transcriptions)
        if formatted is not None
    ]
    return max(candidates, key=len) if candidates else None


def _best_translation(entry: TatoebaEntry) -> Optional[str]:
    texts = [translation.text for group in entry.translations for translation in group]
    return max(texts, key=len) if texts else None


def collect_examples(
    note: AnkiNote,
    searches: Sequence[TatoebaSearch],
    count: int = settings.EXAMPLES_PER_NOTE,
    delay: Optional[float] = settings.TATOEBA_DELAY,
) -> List[ExamplePair]:
    """
    Gather up to ``count`` example sentences for a note.

    Existing sentences are kept. Searches are tried in order, from the
    strictest filter to the loosest, until enough new sentences are found.
    The longest transcription and translation of each result are used.
    """
    word = note.fields.get(settings.FIELD_WORD, "")
    tags = set(note.tags)

    examples = parse_examples(note.fields.get(settings.FIELD_SENTENCES, ""), word, tags)
    seen = {get_filter_key(japanese) for japanese, _ in examples}

    for search in searches:
        if len(examples) >= count:
            break

        for entry in search.search_iter(to_kanji(word), delay):
            transcription = _best_transcription(entry, word, tags)
            if transcription is None:
                continue

            translation = _best_translation(entry)
            if translation is None:
                continue

            key = get_filter_key(transcription)
            if key in seen:
                continue
            seen.add(key)

            examples.append((transcription, translation))
            if len(examples) >= count:
                break

    return examples


def add_examples(
    anki: AnkiConnect,
    notes: Sequence[AnkiNote],
    searches: Sequence[TatoebaSearch],
    count: int = settings.EXAMPLES_PER_NOTE,
    delay: Optional[float] = settings.TATOEBA_DELAY,
) -> int:
    """
    Fill the sentence field of every note.

    Returns:
        Number of notes that ended up with fewer than ``count`` sentences.
    """
    short = 0
    total = len(notes)
    step = max(1, total // 50)

    logger.info(f"Adding examples to {total} notes")
    for index, note in enumerate(notes):
        if index % step == 0:
            logger.info(f"{index * 100 // total:>3}% Notes")

        try:
            examples = collect_examples(note, searches, count, delay)
        except TatoebaError as e:
            logger.warning(f"Skipping {note_key(note)}: {e}")
            continue

        if len(examples) < count:
            short += 1
            logger.debug(f"{note_key(note)}: only {len(examples)} examples")

        anki.update_note_fields(note.note_id, {settings.FIELD_SENTENCES: render_examples(examples)})

    return short


# ============================================================================
# Deck Synchronization
# ============================================================================

@dataclass
class SyncReport:
    """Counts of a deck synchronization."""
    updated: int = 0
    suspended: int = 0
    added: int = 0
    failed: int = 0


def changed_fields(note: AnkiNote, word: Word) -> Dict[str, str]:
    """
    Fields of a note that differ from the lexicon word.

    The sentence field is only filled when empty, so hand edits survive.
    """
    fields: Dict[str, str] = {}

    if note.fields.get(settings.FIELD_WORD) != word.furigana:
        fields[settings.FIELD_WORD] = word.furigana

    meaning = get_meaning(word)
    if note.fields.get(settings.FIELD_MEANING) != meaning:
        fields[settings.FIELD_MEANING] = meaning

    if not note.fields.get(settings.FIELD_SENTENCES):
        fields[settings.FIELD_SENTENCES] = get_examples(word)

    return fields


def update_notes(
    anki: AnkiConnect,
    words: Dict[str, Word],
    notes: Sequence[AnkiNote],
    report: SyncReport,
) -> None:
    """
    Bring existing notes in line with the lexicon.

    Notes whose word is in the lexicon get their fields and tags updated and
    are unsuspended; all other notes are suspended.
    """
    total = len(notes)
    step = max(1, total // 20)

    logger.info("Updating Notes:")
    for index, note in enumerate(notes):
        if index % step == 0:
            logger.info(f"  {index * 100 // total:>3}% Notes")

        word = words.get(note_key(note))
        if word is None:
            anki.suspend(note.cards)
            report.suspended += 1
            continue

        fields = changed_fields(note, word)
        if fields:
            anki.update_note_fields(note.note_id, fields)

        word_tags = word.get_all_tags()
        for tag in sorted(set(note.tags) - word_tags):
            anki.remove_tags([note.note_id], tag)
        for tag in sorted(word_tags - set(note.tags)):
            anki.add_tags([note.note_id], tag)

        anki.unsuspend(note.cards)
        report.updated += 1


def note_from_word(word: Word) -> AnkiNote:
    """Build a new note for a lexicon word."""
    return AnkiNote(
        deckName=settings.DECK_NAME,
        modelName=settings.MODEL_NAME,
        tags=sorted(word.get_all_tags()),
        fields={
            settings.FIELD_WORD: word.furigana,
            settings.FIELD_MEANING: get_meaning(word),
            settings.FIELD_SENTENCES: get_examples(word),
        },
    )


def add_notes(
    anki: AnkiConnect,
    words: Dict[str, Word],
    notes: Sequence[AnkiNote],
    report: SyncReport,
) -> None:
    """Add a note for every lexicon word not yet in the deck."""
    existing = {note_key(note) for note in notes}
    missing = [word for key, word in words.items() if key not in existing]

    logger.info(f"Adding {len(missing)} Notes")
    for word in missing:
        try:
            anki.add_note(note_from_word(word))
        except AnkiConnectError as e:
            logger.warning(f"Could not add {word.furigana}: {e}")
            report.failed += 1
            continue
        report.added += 1


def sync_notes(anki: AnkiConnect, words: Dict[str, Word], notes: Sequence[AnkiNote]) -> SyncReport:
    """
    Synchronize the deck with a lexicon.

    Existing notes are updated first, then missing words are added.
    """
    report = SyncReport()
    update_notes(anki, words, notes, report)
    add_notes(anki, words, notes, report)
    logger.info(
        f"Updated {report.updated}, suspended {report.suspended}, "
        f"added {report.added}, failed {report.failed}"
    )
    return report
