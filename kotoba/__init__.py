"""
Kotoba: Japanese vocabulary lexicon builder.

Merges Yomichan-format dictionaries into a furigana-keyed lexicon, highlights
inflected forms in example sentences and keeps a flashcard deck in sync
through AnkiConnect.
"""

__version__ = "0.1.0"
