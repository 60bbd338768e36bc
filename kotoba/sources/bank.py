"""
Reading dictionary banks from zip archives.

Yomichan/Yomitan dictionaries are zip archives of JSON files. Only members
named ``term_bank_*.json`` and ``kanji_bank_*.json`` carry records; index
and tag banks are skipped.
"""

import json
import logging
import zipfile
from pathlib import Path
from typing import List, Sequence, Type, Union

from kotoba import settings
from kotoba.sources.base import SourceRecord, UnrecognizedSourceRecord, classify_records

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_bank(text: str, shapes: Sequence[Type[SourceRecord]]) -> List[SourceRecord]:
    """
    Parse the JSON text of one bank file.

    Raises:
        ValueError: If the text is not a JSON array.
        UnrecognizedSourceRecord: If an element matches none of the shapes.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return classify_records(data, shapes)


def is_bank_member(name: str) -> bool:
    """Check whether an archive member holds dictionary records."""
    return Path(name).name.startswith(settings.BANK_PREFIXES)


def parse_zipfile(path: PathLike, shapes: Sequence[Type[SourceRecord]]) -> List[SourceRecord]:
    """
    Parse every bank of a dictionary archive.

    Args:
        path: Path to the zip archive.
        shapes: Record classes accepted in this archive.

    Returns:
        All records of the archive, in member order.

    Raises:
        zipfile.BadZipFile: If the file is not a zip archive.
        ValueError: If a bank is not a JSON array of records.
        UnrecognizedSourceRecord: If a record matches none of the shapes.
    """
    path = Path(path)
    logger.info(f"Reading file {path}")

    records: List[SourceRecord] = []
    try:
        archive = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise zipfile.BadZipFile(f"{path}: {e}") from e

    with archive:
        members = [info for info in archive.infolist() if not info.is_dir()]
        total = len(members)

        for index, info in enumerate(members):
            if not is_bank_member(info.filename):
                logger.info(f"  {index}/{total} File: {info.filename} [IGNORED]")
                continue

            logger.info(f"  {index}/{total} File: {info.filename}")
            text = archive.read(info).decode("utf-8")
            try:
                records.extend(parse_bank(text, shapes))
            except UnrecognizedSourceRecord:
                raise
            except ValueError as e:
                raise ValueError(f"Malformed bank {info.filename} in {path}: {e}") from e

    return records


def parse_directory(path: PathLike, shapes: Sequence[Type[SourceRecord]]) -> List[SourceRecord]:
    """Parse every archive in a directory, in file name order."""
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError(f"Dictionary directory not found: {path}")

    records: List[SourceRecord] = []
    for archive in sorted(p for p in path.iterdir() if p.is_file()):
        records.extend(parse_zipfile(archive, shapes))

    logger.info(f"Parsed {len(records)} records from {path}")
    return records
