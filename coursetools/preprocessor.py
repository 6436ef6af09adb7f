"""Book preprocessor that adds slide timing and expands course directives."""

from __future__ import annotations

import argparse
import json
import sys
from typing import IO, Optional, Sequence

from coursetools.book import Book
from coursetools.course import Courses
from coursetools.replacements import replace
from coursetools.timing_info import insert_timing_info


def preprocess_book(book: Book) -> Book:
    """Strip frontmatter, add timing notes and expand directives in every chapter."""
    courses, book = Courses.extract_structure(book)
    for chapter in book.chapters():
        found = courses.find_slide(chapter)
        if found is None:
            # Outside of a course, only directives are expanded.
            replace(courses, None, None, None, chapter)
            continue
        course, session, segment, slide = found
        insert_timing_info(slide, chapter)
        replace(courses, course, session, segment, chapter)
    return book


def preprocess(stdin: IO[str], stdout: IO[str]) -> None:
    """Read a ``[context, book]`` pair as JSON and write the processed book as JSON."""
    data = json.load(stdin)
    if not isinstance(data, list) or len(data) != 2 or not isinstance(data[1], dict):
        raise ValueError("expected a [context, book] pair on input")
    book = preprocess_book(Book.from_dict(data[1]))
    json.dump(book.to_dict(), stdout, ensure_ascii=False)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdbook-course", description="mdbook preprocessor for course material"
    )
    commands = parser.add_subparsers(dest="command")
    supports = commands.add_parser("supports", help="check support for a renderer")
    supports.add_argument("renderer")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the preprocessor; returns the process exit status."""
    args = _parser().parse_args(argv)
    if args.command == "supports":
        # Every renderer is supported.
        return 0
    try:
        preprocess(sys.stdin, sys.stdout)
    except (ValueError, TypeError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())