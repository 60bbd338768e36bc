"""
Settings and configuration for Kotoba.

Paths and connection defaults can be overridden with environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

# Working directories
PROJECT_DIR = Path(os.environ.get("KOTOBA_HOME", Path.cwd()))
INPUT_DIR = Path(os.environ.get("KOTOBA_INPUT_DIR", PROJECT_DIR / "input"))
RESULT_DIR = Path(os.environ.get("KOTOBA_RESULT_DIR", PROJECT_DIR / "result"))

# Dictionary archives (Yomichan/Yomitan banks packaged as zip files)
DICTIONARIES_DIR = INPUT_DIR / "dictionaries"
EXAMPLES_DIR = INPUT_DIR / "examples"

# Snapshot documents
WORDLIST_PATH = RESULT_DIR / "wordlist.json"
KANJILIST_PATH = RESULT_DIR / "kanjilist.json"

# Archive members that hold dictionary banks
BANK_PREFIXES = ("term_", "kanji_")

# AnkiConnect
ANKI_URL = os.environ.get("KOTOBA_ANKI_URL", "http://127.0.0.1:8765")
ANKI_API_KEY = os.environ.get("KOTOBA_ANKI_API_KEY") or None
ANKI_VERSION = 6
DECK_NAME = os.environ.get("KOTOBA_DECK", "My Deck 4.0")
MODEL_NAME = os.environ.get("KOTOBA_MODEL", "JP Card V4")

# Note field names
FIELD_WORD = "1 Word"
FIELD_MEANING = "2 Meaning"
FIELD_AUDIO = "3 Audio"
FIELD_SENTENCES = "4 Sentences"

# Tatoeba sentence search
TATOEBA_URL = "https://api.tatoeba.org/unstable/sentences"
TATOEBA_DELAY = float(os.environ.get("KOTOBA_TATOEBA_DELAY", "0.333"))
EXAMPLES_PER_NOTE = 15

# Debug mode
DEBUG = os.environ.get("KOTOBA_DEBUG", "").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class FilterConfig:
    """
    Which words survive into the lexicon snapshot.

    Attributes:
        levels: JLPT levels kept unconditionally.
        compound_levels: JLPT levels kept only when tagged as compounds.
        compound_tag: Tag marking compound entries.
    """
    levels: FrozenSet[int] = field(default_factory=lambda: frozenset({3, 4, 5}))
    compound_levels: FrozenSet[int] = field(default_factory=lambda: frozenset({1, 2}))
    compound_tag: str = "comp"


DEFAULT_FILTER = FilterConfig()
