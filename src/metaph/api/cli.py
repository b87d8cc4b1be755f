"""
Command-line interface for metaph.

Usage:
    python3 -m metaph.api.cli <command> [args...]

Commands:
    encode <words...>             Print primary and secondary codes
    compare <a> <b>               Report whether two words sound alike
    match <words...> --wordlist   Words in a list that sound like each word
    match <words...> --db         Same, against words stored in PostgreSQL
    match <words...> --store      Same, against a saved code store
    build --wordlist|--db --store Save a word list's index to a code store
    load --wordlist --source      Copy a word list into PostgreSQL

Environment:
    METAPH_MAX_LENGTH   Default code length (default: 4)
    METAPH_DB_*         PostgreSQL connection (see metaph.db.words)
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

import lmdb
import psycopg

from ..cache.code_store import CodeStore
from ..core.encoder import DEFAULT_MAX_LENGTH, double_metaphone, sounds_alike
from ..db import words as word_db
from ..index.sound_index import SoundIndex
from ..ingest.wordlist import WordListError, load_word_list

logger = logging.getLogger(__name__)


def default_max_length() -> int:
    """Code length from METAPH_MAX_LENGTH, or the library default."""
    value = os.environ.get("METAPH_MAX_LENGTH")
    if value is None:
        return DEFAULT_MAX_LENGTH
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring METAPH_MAX_LENGTH=%r (not an integer)", value)
        return DEFAULT_MAX_LENGTH


def format_codes(word: str, max_length: int) -> str:
    """One line per word: 'primary' 'secondary' word."""
    primary, secondary = double_metaphone(word, max_length)
    return f"'{primary}' '{secondary}' {word}"


def cmd_encode(args: argparse.Namespace) -> int:
    """Print codes for each word."""
    for word in args.words:
        print(format_codes(word, args.max_length))
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Compare two words; exit 0 when they sound alike."""
    print(format_codes(args.a, args.max_length))
    print(format_codes(args.b, args.max_length))
    alike = sounds_alike(args.a, args.b, args.max_length)
    print("match" if alike else "no match")
    return 0 if alike else 1


def _print_matches(word: str, matches: set[str]) -> None:
    print(f"{word}: {len(matches)} match{'es' if len(matches) != 1 else ''}")
    for match in sorted(matches):
        print(f"  {match}")


def _source_words(args: argparse.Namespace) -> list[str]:
    # --db with no value reads every source in the table
    if args.db is not None:
        return word_db.load_words(args.db or None)
    return load_word_list(args.wordlist)


def cmd_match(args: argparse.Namespace) -> int:
    """List sound-alike words from a word list, the database or a code store."""
    if args.store:
        with CodeStore(args.store, readonly=True) as store:
            for word in args.words:
                _print_matches(word, store.match(word))
        return 0

    if not args.wordlist and args.db is None:
        print("ERROR: match needs --wordlist, --db or --store", file=sys.stderr)
        return 2
    index = SoundIndex.build(_source_words(args), args.max_length)
    for word in args.words:
        _print_matches(word, index.match(word))
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Index a word list and save it to a code store."""
    index = SoundIndex.build(_source_words(args), args.max_length)
    with CodeStore(args.store) as store:
        store.save(index)
    print(f"Stored {index.size():,} codes in {args.store}")
    return 0


def cmd_load(args: argparse.Namespace) -> int:
    """Copy a word list into the PostgreSQL words table."""
    count = word_db.store_words(load_word_list(args.wordlist), args.source)
    print(f"Loaded {count:,} words into source {args.source}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="metaph",
        description="Double Metaphone sound-alike codes and word matching",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # Shared code length option
    max_length = default_max_length()
    length_parser = argparse.ArgumentParser(add_help=False)
    length_parser.add_argument(
        "-n", "--max-length",
        type=int,
        default=max_length,
        help=f"Maximum code length (default: {max_length})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode", parents=[length_parser], help="Print phonetic codes")
    encode_parser.add_argument("words", nargs="+", help="Words to encode")
    encode_parser.set_defaults(func=cmd_encode)

    # Compare command
    compare_parser = subparsers.add_parser(
        "compare", parents=[length_parser], help="Compare two words")
    compare_parser.add_argument("a", help="First word")
    compare_parser.add_argument("b", help="Second word")
    compare_parser.set_defaults(func=cmd_compare)

    # Match command
    match_parser = subparsers.add_parser(
        "match", parents=[length_parser], help="Find sound-alike words")
    match_parser.add_argument("words", nargs="+", help="Words to look up")
    match_source = match_parser.add_mutually_exclusive_group()
    match_source.add_argument("--wordlist", help="Word list path or URL")
    match_source.add_argument("--db", nargs="?", const="", metavar="SOURCE",
                              help="Words table source (all when omitted)")
    match_source.add_argument("--store", help="Code store directory")
    match_parser.set_defaults(func=cmd_match)

    # Build command
    build_parser = subparsers.add_parser(
        "build", parents=[length_parser], help="Save an index to a code store")
    build_source = build_parser.add_mutually_exclusive_group(required=True)
    build_source.add_argument("--wordlist", help="Word list path or URL")
    build_source.add_argument("--db", nargs="?", const="", metavar="SOURCE",
                              help="Words table source (all when omitted)")
    build_parser.add_argument("--store", required=True,
                              help="Code store directory")
    build_parser.set_defaults(func=cmd_build)

    # Load command
    load_parser = subparsers.add_parser(
        "load", help="Copy a word list into PostgreSQL")
    load_parser.add_argument("--wordlist", required=True,
                             help="Word list path or URL")
    load_parser.add_argument("--source", required=True,
                             help="Source name to store the words under")
    load_parser.set_defaults(func=cmd_load)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 2

    try:
        return args.func(args)
    except (WordListError, lmdb.Error, psycopg.Error, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
