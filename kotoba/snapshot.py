"""
Lexicon snapshots.

The lexicon is written as two JSON documents: ``wordlist.json`` (furigana
to word) and ``kanjilist.json`` (character to kanji). Keys are sorted and
non-ASCII text is kept as is.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Tuple, Union

from kotoba import settings
from kotoba.entry import Kanji, Word
from kotoba.models import KanjiModel, WordModel

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, sort_keys=True, indent=1)
        f.write("\n")


def _read_json(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_words(words: Dict[str, Word], path: PathLike = settings.WORDLIST_PATH) -> None:
    """Write the word list document."""
    path = Path(path)
    logger.info(f"Saving result to {path}")
    data = {key: WordModel.from_word(word).model_dump() for key, word in words.items()}
    _write_json(path, data)


def write_kanji(kanji: Dict[str, Kanji], path: PathLike = settings.KANJILIST_PATH) -> None:
    """Write the kanji list document."""
    path = Path(path)
    logger.info(f"Saving result to {path}")
    data = {key: KanjiModel.from_kanji(k).model_dump() for key, k in kanji.items()}
    _write_json(path, data)


def read_words(path: PathLike = settings.WORDLIST_PATH) -> Dict[str, Word]:
    """Load a word list document."""
    data = _read_json(Path(path))
    return {key: WordModel.model_validate(value).to_word() for key, value in data.items()}


def read_kanji(path: PathLike = settings.KANJILIST_PATH) -> Dict[str, Kanji]:
    """Load a kanji list document."""
    data = _read_json(Path(path))
    return {key: KanjiModel.model_validate(value).to_kanji() for key, value in data.items()}


def write_snapshot(
    kanji: Dict[str, Kanji],
    words: Dict[str, Word],
    result_dir: PathLike = settings.RESULT_DIR,
) -> Tuple[Path, Path]:
    """
    Write both snapshot documents into a result directory.

    Returns:
        Paths of the word list and the kanji list.
    """
    result_dir = Path(result_dir)
    words_path = result_dir / settings.WORDLIST_PATH.name
    kanji_path = result_dir / settings.KANJILIST_PATH.name
    write_words(words, words_path)
    write_kanji(kanji, kanji_path)
    return words_path, kanji_path


def read_snapshot(result_dir: PathLike = settings.RESULT_DIR) -> Tuple[Dict[str, Kanji], Dict[str, Word]]:
    """Load both snapshot documents from a result directory."""
    result_dir = Path(result_dir)
    kanji = read_kanji(result_dir / settings.KANJILIST_PATH.name)
    words = read_words(result_dir / settings.WORDLIST_PATH.name)
    return kanji, words
