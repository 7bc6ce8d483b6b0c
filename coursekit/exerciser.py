"""Extraction of exercise files from code blocks in Markdown chapters.

A code block is written to a file when it follows an HTML comment of the
form ``<!-- File path/to/file -->``.  Code blocks without such a comment are
ignored.
"""

from __future__ import annotations

import json
import logging
import shutil
import sys
from pathlib import Path, PurePosixPath

from markdown_it import MarkdownIt

from coursekit.book import Book

logger = logging.getLogger(__name__)

FILENAME_START = "<!-- File "
FILENAME_END = " -->"

_CODE_BLOCK_TOKENS = frozenset({"fence", "code_block"})


def _filename_from_html(html: str) -> str | None:
    """Return the file name announced by the last matching line of an HTML block."""
    filename = None
    for line in html.splitlines():
        line = line.strip()
        if (
            line.startswith(FILENAME_START)
            and line.endswith(FILENAME_END)
            and len(line) >= len(FILENAME_START) + len(FILENAME_END)
        ):
            filename = line[len(FILENAME_START) : len(line) - len(FILENAME_END)]
    return filename


def process(output_directory: str | Path, input_contents: str) -> None:
    """Write each code block announced by a file comment under ``output_directory``."""
    output_directory = Path(output_directory)
    next_filename: str | None = None
    for token in MarkdownIt("commonmark").parse(input_contents):
        logger.debug("%s", token.type)
        if token.type == "html_block":
            filename = _filename_from_html(token.content)
            if filename is not None:
                next_filename = filename
                logger.info("Next file: %r", next_filename)
        elif token.type in _CODE_BLOCK_TOKENS:
            if next_filename is None:
                continue
            full_filename = output_directory / next_filename
            logger.info("Writing %s", full_filename)
            full_filename.parent.mkdir(parents=True, exist_ok=True)
            full_filename.write_bytes(token.content.encode("utf-8"))
            next_filename = None


def process_all(book: Book, output_directory: str | Path) -> None:
    """Extract the exercises of every chapter into a directory named after its file."""
    output_directory = Path(output_directory)
    for chapter in book.iter_chapters():
        logger.debug("Chapter %r / %r", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        stem = PurePosixPath(chapter.path).stem
        if not stem:
            raise ValueError(f"Chapter {chapter.path!r} has no file stem")
        process(output_directory / stem, chapter.content)


def _output_directory(context: dict) -> Path:
    config = context.get("config") or {}
    renderer = (config.get("output") or {}).get("exerciser")
    if not isinstance(renderer, dict):
        raise ValueError("Missing output.exerciser configuration")
    if "output-directory" not in renderer:
        raise ValueError("Missing output.exerciser.output-directory configuration value")
    value = renderer["output-directory"]
    if not isinstance(value, str):
        raise ValueError("Expected a string for output.exerciser.output-directory")
    return Path(value)


def main(argv: list[str] | None = None) -> int:
    """Run as an mdBook renderer, reading the render context from standard input."""
    logging.basicConfig(level=logging.WARNING)
    try:
        try:
            context = json.load(sys.stdin)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Parsing stdin: {exc}") from exc
        if not isinstance(context, dict):
            raise ValueError("Parsing stdin: expected a render context object")
        book = Book.from_dict(context.get("book"))
        output_directory = _output_directory(context)

        shutil.rmtree(output_directory, ignore_errors=True)
        try:
            output_directory.mkdir()
        except OSError as exc:
            raise OSError(
                f"Failed to create output directory {str(output_directory)!r}: {exc}"
            ) from exc

        process_all(book, output_directory)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0