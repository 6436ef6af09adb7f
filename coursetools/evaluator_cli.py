"""Command line for measuring the rendered size of every slide of a book."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import urlparse

from coursetools.evaluator import Evaluator, SlidePolicy, WebDriverClient, WebDriverError
from coursetools.slides import Book

logger = logging.getLogger(__name__)


def _url(value: str) -> str:
    if not urlparse(value).scheme:
        raise argparse.ArgumentTypeError(f"not an absolute URL: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the slide evaluator."""
    parser = argparse.ArgumentParser(
        prog="mdbook-slide-evaluator",
        description="Render every slide of a book and check the size of its content",
    )
    parser.add_argument(
        "--webdriver", default="http://localhost:4444", help="the URI of the webdriver"
    )
    parser.add_argument(
        "--element",
        default='//*[@id="content"]/main',
        help="the XPath to the element that is evaluated",
    )
    parser.add_argument(
        "-s",
        "--screenshot-dir",
        type=Path,
        default=None,
        help="take screenshots of the content element into this directory",
    )
    parser.add_argument(
        "--base-url",
        type=_url,
        default="file:///",
        help="base URL used to render the files (relative to source_dir)",
    )
    parser.add_argument(
        "--export", type=Path, default=None, help="export to this CSV file instead of stdout"
    )
    parser.add_argument(
        "--overwrite", action="store_true", help="allow overwriting the export file"
    )
    parser.add_argument(
        "--webclient-width", type=int, default=1920, help="width of the browser window"
    )
    parser.add_argument(
        "--webclient-height", type=int, default=1080, help="height of the browser window"
    )
    parser.add_argument("--width", type=int, default=750, help="max width of a slide")
    parser.add_argument("--height", type=int, default=1333, help="max height of a slide")
    parser.add_argument(
        "--violations-only", action="store_true", help="only show violating slides"
    )
    parser.add_argument("source_dir", type=Path, help="directory of the book to evaluate")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Evaluate the slides of a book; returns the process exit status."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help(sys.stderr)
        return 2
    args = parser.parse_args(argv)

    token = threading.Event()

    def on_interrupt(signum, frame):
        logger.info("received CTRL+C")
        token.set()

    in_main_thread = threading.current_thread() is threading.main_thread()
    previous = signal.signal(signal.SIGINT, on_interrupt) if in_main_thread else None
    try:
        book = Book.from_html_slides(args.source_dir)
        client = WebDriverClient(args.webdriver)
        try:
            client.set_window_size(args.webclient_width, args.webclient_height)
            evaluator = Evaluator(
                client,
                args.element,
                args.screenshot_dir,
                args.base_url,
                args.source_dir,
                token,
                SlidePolicy(max_width=args.width, max_height=args.height),
            )
            results = evaluator.eval_book(book)
            if args.export is not None:
                results.export_csv(args.export, args.overwrite, args.violations_only)
            else:
                results.export_stdout(args.violations_only)
        finally:
            logger.debug("closing webclient")
            client.close()
    except (WebDriverError, OSError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    finally:
        if in_main_thread:
            signal.signal(signal.SIGINT, previous)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())