#!/usr/bin/env python3
"""
Command line access to the scripture corpus.

Run from the api directory.

Usage:
    python -m scripts.scripture_cli search "1 Nephi 5:3-6"
    python -m scripts.scripture_cli search "dwelt in a" -n 5 -c
    python -m scripts.scripture_cli random
    python -m scripts.scripture_cli text
    python -m scripts.scripture_cli --delete-cache random
"""

import argparse
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core import config
from services.scripture import CorpusError, ScriptureService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search and read the Book of Mormon text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m scripts.scripture_cli search "Alma 32:21"     # Verses by reference
  python -m scripts.scripture_cli search "faith" -n 3 -c  # Free-form search with count
  python -m scripts.scripture_cli random                  # One random verse
  python -m scripts.scripture_cli text > bom.txt          # Entire text
        """
    )
    parser.add_argument(
        "-d", "--delete-cache", "--delete_cache",
        dest="delete_cache",
        action="store_true",
        help="Delete any cache files before running"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    search = subparsers.add_parser(
        "search",
        help="Search by reference ('1 Nephi 5:3-6') or with a free-form string ('dwelt in a')"
    )
    search.add_argument("query", help="The search query")
    search.add_argument(
        "-n", "--num-matches", "--num_matches",
        dest="num_matches",
        type=int,
        default=10,
        help="The maximum number of search results to return (default: 10)"
    )
    search.add_argument(
        "-c", "--count-matches", "--count_matches",
        dest="count_matches",
        action="store_true",
        help="First line of returned data is the total number of verses matching the query"
    )

    subparsers.add_parser("random", help="Output a random verse")
    subparsers.add_parser("text", help="Output the entire Book of Mormon text")

    return parser


def run(args, service: ScriptureService, out=None) -> int:
    out = out or sys.stdout

    if args.command == "text":
        print(service.text(), file=out)

    elif args.command == "random":
        print(service.random_verse(), file=out)

    elif args.command == "search":
        total, matches = service.search(args.query, limit=args.num_matches)
        if args.count_matches:
            print(total, file=out)
        if matches:
            print("\n\n".join(str(v) for v in matches), file=out)

    return 0


def main(argv=None, service: ScriptureService = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
        stream=sys.stderr,
    )

    if service is None:
        service = ScriptureService(delete_cache=args.delete_cache)

    try:
        return run(args, service)
    except CorpusError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
