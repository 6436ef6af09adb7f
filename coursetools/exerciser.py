"""Extraction of exercise files from code blocks in chapters.

A code block preceded by an HTML comment of the form ``<!-- File name -->`` is
written to a file of that name under the output directory.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from markdown_it import MarkdownIt

from coursetools.book import Book

_FILENAME_START = "<!-- File "
_FILENAME_END = " -->"
_CODE_BLOCKS = frozenset({"fence", "code_block"})

logger = logging.getLogger(__name__)


class ExerciserError(Exception):
    """Raised when exercises cannot be extracted."""


def _filename_from_comment(line: str) -> Optional[str]:
    line = line.strip()
    if (
        line.startswith(_FILENAME_START)
        and line.endswith(_FILENAME_END)
        and len(line) >= len(_FILENAME_START) + len(_FILENAME_END)
    ):
        return line[len(_FILENAME_START):len(line) - len(_FILENAME_END)]
    return None


def process(output_directory: Union[str, "os.PathLike[str]"], input_contents: str) -> None:
    """Write each code block that follows a file comment to the named file.

    Code blocks without such a comment are ignored, as are comments that no
    code block follows.
    """
    output = Path(output_directory)
    next_filename: Optional[str] = None
    for token in MarkdownIt("commonmark").parse(input_contents):
        if token.type == "html_block":
            for line in token.content.splitlines():
                filename = _filename_from_comment(line)
                if filename is not None:
                    next_filename = filename
                    logger.info("Next file: %r", next_filename)
        elif token.type in _CODE_BLOCKS and next_filename is not None:
            target = output / next_filename
            logger.info("Writing %s", target)
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8", newline="") as file:
                file.write(token.content)
            next_filename = None


def process_all(book: Book, output_directory: Union[str, "os.PathLike[str]"]) -> None:
    """Extract the exercises of every chapter into a directory named after its file."""
    output = Path(output_directory)
    for chapter in book.chapters():
        logger.debug("Chapter %s / %s", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        stem = chapter.path.stem
        if not stem:
            raise ExerciserError(f"Chapter {chapter.path} has no file stem")
        process(output / stem, chapter.content)


def _output_directory(context: Any) -> Path:
    if not isinstance(context, dict):
        raise ExerciserError("Parsing stdin: expected a render context object")
    config = context.get("config")
    output = config.get("output") if isinstance(config, dict) else None
    renderer = output.get("exerciser") if isinstance(output, dict) else None
    if not isinstance(renderer, dict):
        raise ExerciserError("Missing output.exerciser configuration")
    if "output-directory" not in renderer:
        raise ExerciserError(
            "Missing output.exerciser.output-directory configuration value"
        )
    value = renderer["output-directory"]
    if not isinstance(value, str):
        raise ExerciserError("Expected a string for output.exerciser.output-directory")
    return Path(value)


def _run() -> None:
    try:
        context = json.load(sys.stdin)
    except ValueError as error:
        raise ExerciserError(f"Parsing stdin: {error}") from error
    output = _output_directory(context)
    book_data = context.get("book")
    if not isinstance(book_data, dict):
        raise ExerciserError("Parsing stdin: missing book")
    book = Book.from_dict(book_data)

    shutil.rmtree(output, ignore_errors=True)
    try:
        output.mkdir()
    except OSError as error:
        raise ExerciserError(f"Failed to create output directory {output}: {error}") from error

    process_all(book, output)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run as an mdbook renderer reading its render context from standard input."""
    argparse.ArgumentParser(
        prog="mdbook-exerciser", description="Extract exercise files from a book"
    ).parse_args(argv)
    try:
        _run()
    except (ExerciserError, ValueError, OSError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())