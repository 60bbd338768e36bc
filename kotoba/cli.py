"""
Command line interface for kotoba.

Usage:
    kotoba build                      # build result/wordlist.json and kanjilist.json
    kotoba highlight 作る v5る -s "ケーキを作った。"
    kotoba sync                       # sync the study deck with the word list
    kotoba examples                   # fill example sentences from Tatoeba
    kotoba order                      # reorder new cards
"""

import argparse
import logging
import sys
import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

from kotoba import __version__, settings
from kotoba.anki import AnkiConnect, AnkiConnectError, deck_query
from kotoba.canonical import build_lexicon
from kotoba.conjugations import UnsupportedInflectionEnding, get_find_regex, highlight_word
from kotoba.notes import add_examples, sync_notes
from kotoba.ordering import apply_order
from kotoba.settings import FilterConfig
from kotoba.snapshot import read_kanji, read_words, write_snapshot
from kotoba.sources import UnrecognizedSourceRecord
from kotoba.tatoeba import default_searches

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for command line use."""
    level = logging.DEBUG if verbose or settings.DEBUG else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )


def _parse_levels(text: str) -> frozenset:
    try:
        return frozenset(int(level) for level in text.split(',') if level)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid level list: {text!r}")


def _connect(url: str) -> AnkiConnect:
    return AnkiConnect(url=url)


# ============================================================================
# Subcommands
# ============================================================================

def main_build(args: list) -> int:
    """CLI entry point for build subcommand."""
    parser = argparse.ArgumentParser(
        description='Build the lexicon snapshot from dictionary archives',
        prog='kotoba build',
    )
    parser.add_argument(
        '--dictionaries', '-d',
        type=Path,
        default=settings.DICTIONARIES_DIR,
        metavar='DIR',
        help=f'Directory with dictionary archives (default: {settings.DICTIONARIES_DIR})',
    )
    parser.add_argument(
        '--examples', '-e',
        type=Path,
        default=settings.EXAMPLES_DIR,
        metavar='DIR',
        help=f'Directory with example sentence archives (default: {settings.EXAMPLES_DIR})',
    )
    parser.add_argument(
        '--no-examples',
        action='store_true',
        help='Skip the example sentence archives',
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=settings.RESULT_DIR,
        metavar='DIR',
        help=f'Result directory (default: {settings.RESULT_DIR})',
    )
    parser.add_argument(
        '--levels',
        type=_parse_levels,
        default=settings.DEFAULT_FILTER.levels,
        metavar='N,N',
        help='JLPT levels to keep (default: 3,4,5)',
    )
    parser.add_argument(
        '--compound-levels',
        type=_parse_levels,
        default=settings.DEFAULT_FILTER.compound_levels,
        metavar='N,N',
        help='JLPT levels kept only for compounds (default: 1,2)',
    )
    _add_common_arguments(parser)

    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)

    config = FilterConfig(levels=parsed.levels, compound_levels=parsed.compound_levels)
    examples = None if parsed.no_examples else parsed.examples

    try:
        kanji, words = build_lexicon(parsed.dictionaries, examples, config)
    except UnrecognizedSourceRecord as e:
        print(f"Error: unrecognized dictionary record\n{e}", file=sys.stderr)
        return 1
    except (ValueError, zipfile.BadZipFile) as e:
        print(f"Error: unreadable dictionary archive\n{e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    words_path, kanji_path = write_snapshot(kanji, words, parsed.output)
    print(f"Wrote {len(words)} words to {words_path}")
    print(f"Wrote {len(kanji)} kanji to {kanji_path}")
    return 0


def main_highlight(args: list) -> int:
    """CLI entry point for highlight subcommand."""
    parser = argparse.ArgumentParser(
        description='Highlight the inflected forms of a word in sentences',
        prog='kotoba highlight',
    )
    parser.add_argument('word', help='Dictionary form of the word')
    parser.add_argument('tags', nargs='*', help="Word tags (e.g. v5る, adj-い)")
    parser.add_argument(
        '--sentence', '-s',
        action='append',
        default=[],
        metavar='TEXT',
        help='Sentence to highlight (repeatable; default: read stdin lines)',
    )
    parser.add_argument(
        '--regex', '-r',
        action='store_true',
        help='Print the search pattern instead',
    )

    parsed = parser.parse_args(args)

    try:
        if parsed.regex:
            print(get_find_regex(parsed.word, parsed.tags))
            return 0

        sentences = parsed.sentence or [line.rstrip('\n') for line in sys.stdin]
        found = False
        for sentence in sentences:
            result = highlight_word(sentence, parsed.word, parsed.tags)
            if result is not None:
                found = True
                print(result)
    except UnsupportedInflectionEnding as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0 if found else 1


def main_sync(args: list) -> int:
    """CLI entry point for sync subcommand."""
    parser = argparse.ArgumentParser(
        description='Synchronize the study deck with the word list',
        prog='kotoba sync',
    )
    parser.add_argument(
        '--wordlist', '-w',
        type=Path,
        default=settings.WORDLIST_PATH,
        metavar='PATH',
        help=f'Word list snapshot (default: {settings.WORDLIST_PATH})',
    )
    parser.add_argument(
        '--url',
        default=settings.ANKI_URL,
        help=f'AnkiConnect address (default: {settings.ANKI_URL})',
    )
    _add_common_arguments(parser)

    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)

    logging.getLogger(__name__).info(f"Loading words from {parsed.wordlist}")
    try:
        words = read_words(parsed.wordlist)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        anki = _connect(parsed.url)
        notes = anki.notes_info(anki.find_notes(deck_query()))
        report = sync_notes(anki, words, notes)
    except AnkiConnectError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Updated {report.updated}, suspended {report.suspended}, "
        f"added {report.added}, failed {report.failed}"
    )
    return 0


def main_examples(args: list) -> int:
    """CLI entry point for examples subcommand."""
    parser = argparse.ArgumentParser(
        description='Fill the example sentences of the study deck from Tatoeba',
        prog='kotoba examples',
    )
    parser.add_argument(
        '--count', '-n',
        type=int,
        default=settings.EXAMPLES_PER_NOTE,
        metavar='N',
        help=f'Sentences per note (default: {settings.EXAMPLES_PER_NOTE})',
    )
    parser.add_argument(
        '--delay',
        type=float,
        default=settings.TATOEBA_DELAY,
        metavar='SECONDS',
        help=f'Pause before each request (default: {settings.TATOEBA_DELAY})',
    )
    parser.add_argument(
        '--url',
        default=settings.ANKI_URL,
        help=f'AnkiConnect address (default: {settings.ANKI_URL})',
    )
    _add_common_arguments(parser)

    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)

    try:
        anki = _connect(parsed.url)
        notes = anki.notes_info(anki.find_notes(deck_query()))
        short = add_examples(anki, notes, default_searches(), parsed.count, parsed.delay)
    except AnkiConnectError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{len(notes) - short}/{len(notes)} notes have {parsed.count} examples")
    return 0


def main_order(args: list) -> int:
    """CLI entry point for order subcommand."""
    parser = argparse.ArgumentParser(
        description='Reorder the new cards of the study deck',
        prog='kotoba order',
    )
    parser.add_argument(
        '--kanjilist', '-k',
        type=Path,
        default=settings.KANJILIST_PATH,
        metavar='PATH',
        help=f'Kanji list snapshot (default: {settings.KANJILIST_PATH})',
    )
    parser.add_argument(
        '--url',
        default=settings.ANKI_URL,
        help=f'AnkiConnect address (default: {settings.ANKI_URL})',
    )
    _add_common_arguments(parser)

    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)

    logging.getLogger(__name__).info(f"Loading kanji from {parsed.kanjilist}")
    try:
        kanji = read_kanji(parsed.kanjilist)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        updated = apply_order(_connect(parsed.url), kanji)
    except AnkiConnectError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Reordered {updated} cards")
    return 0


SUBCOMMANDS: Dict[str, Callable[[list], int]] = {
    'build': main_build,
    'highlight': main_highlight,
    'sync': main_sync,
    'examples': main_examples,
    'order': main_order,
}


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] in SUBCOMMANDS:
        return SUBCOMMANDS[args_list[0]](args_list[1:])

    parser = argparse.ArgumentParser(
        description='Kotoba: Japanese vocabulary lexicon builder',
        prog='kotoba',
        epilog=(
            'Subcommands:\n'
            '  kotoba build        Build the lexicon snapshot\n'
            '  kotoba highlight    Highlight inflected forms of a word\n'
            '  kotoba sync         Synchronize the study deck\n'
            '  kotoba examples     Add example sentences to the study deck\n'
            '  kotoba order        Reorder new cards'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'kotoba {__version__}')
        return 0

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
