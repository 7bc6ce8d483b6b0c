"""The mdBook preprocessor that adds course timing and outlines to chapters."""

from __future__ import annotations

import argparse
import json
import sys
from typing import IO

from coursekit.book import Chapter, parse_preprocessor_input
from coursekit.course import Courses
from coursekit.replacements import replace
from coursekit.timing_info import insert_timing_info


def preprocess(stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> None:
    """Read a book from ``stdin``, process it and write it as JSON to ``stdout``."""
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    _, book = parse_preprocessor_input(stdin)
    courses, book = Courses.extract_structure(book)

    def visit(chapter: Chapter) -> None:
        found = courses.find_slide(chapter)
        if found is None:
            replace(courses, None, None, None, chapter)
            return
        course, session, segment, slide = found
        insert_timing_info(slide, chapter)
        replace(courses, course, session, segment, chapter)

    book.for_each_chapter(visit)
    json.dump(book.to_dict(), stdout, separators=(",", ":"))


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdbook-course", description="mdbook preprocessor for course material"
    )
    commands = parser.add_subparsers(dest="command")
    supports = commands.add_parser("supports")
    supports.add_argument("renderer")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the preprocessor; ``supports <renderer>`` accepts every renderer."""
    args = _parser().parse_args(argv)
    if args.command == "supports":
        return 0
    try:
        preprocess()
    except (ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0