"""Command line for checking the rendered size of every slide of a book."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from coursekit.evaluator import Evaluator, SlidePolicy, WebDriverClient, WebDriverError
from coursekit.slides import Book

logger = logging.getLogger(__name__)


def _url(value: str) -> str:
    if not urlsplit(value).scheme:
        raise argparse.ArgumentTypeError(f"invalid URL: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the slide evaluator."""
    parser = argparse.ArgumentParser(
        prog="mdbook-slide-evaluator",
        description="Render each slide of a book and check its size against a policy",
    )
    parser.add_argument(
        "--webdriver", default="http://localhost:4444", help="the URI of the webdriver"
    )
    parser.add_argument(
        "--element",
        default='//*[@id="content"]/main',
        help="the XPath to element that is evaluated",
    )
    parser.add_argument(
        "-s",
        "--screenshot-dir",
        type=Path,
        default=None,
        help="take screenshots of the content element if provided",
    )
    parser.add_argument(
        "--base-url",
        type=_url,
        default="file:///",
        help="a base url that is used to render the files (relative to source_dir)",
    )
    parser.add_argument(
        "--export",
        type=Path,
        default=None,
        help="exports to csv file if provided, otherwise to stdout",
    )
    parser.add_argument(
        "--overwrite", action="store_true", help="allows overwriting the export file"
    )
    parser.add_argument(
        "--webclient-width",
        type=int,
        default=1920,
        help="the width of the webclient that renders the slide",
    )
    parser.add_argument(
        "--webclient-height",
        type=int,
        default=1080,
        help="the height of the webclient that renders the slide",
    )
    parser.add_argument("--width", type=int, default=750, help="max width of a slide")
    parser.add_argument("--height", type=int, default=1333, help="max height of a slide")
    parser.add_argument(
        "--violations-only",
        action="store_true",
        help="if set only violating slides are shown",
    )
    parser.add_argument(
        "source_dir", type=Path, help="directory of the book that is evaluated"
    )
    return parser


def _install_interrupt_handler(token: threading.Event) -> Any:
    """Make Ctrl+C cancel the evaluation gracefully; return the previous handler."""
    if threading.current_thread() is not threading.main_thread():
        return None

    def handler(signum: int, frame: object) -> None:
        logger.info("received CTRL+C")
        token.set()

    return signal.signal(signal.SIGINT, handler)


def main(argv: list[str] | None = None) -> int:
    """Evaluate every HTML slide under the given directory."""
    logging.basicConfig(level=logging.WARNING)
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    if not argv:
        parser.print_help(sys.stderr)
        return 2
    args = parser.parse_args(argv)

    try:
        book = Book.from_html_slides(args.source_dir)

        webclient = WebDriverClient.connect(args.webdriver)
        webclient.set_window_size(args.webclient_width, args.webclient_height)

        cancellation_token = threading.Event()
        slide_policy = SlidePolicy(max_width=args.width, max_height=args.height)
        evaluator = Evaluator(
            webclient,
            args.element,
            args.screenshot_dir,
            args.base_url,
            args.source_dir,
            cancellation_token,
            slide_policy,
        )

        previous = _install_interrupt_handler(cancellation_token)
        try:
            results = evaluator.eval_book(book)
        finally:
            if previous is not None:
                signal.signal(signal.SIGINT, previous)

        if args.export is not None:
            results.export_csv(args.export, args.overwrite, args.violations_only)
        else:
            results.export_stdout(args.violations_only)

        logger.debug("closing webclient")
        webclient.close()
    except (OSError, ValueError, WebDriverError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0