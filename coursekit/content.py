"""Dump the source of every slide of every course, in course order."""

from __future__ import annotations

import argparse
from pathlib import Path

from coursekit.book import Book
from coursekit.course import Courses


def course_content(courses: Courses, src_dir: str | Path) -> str:
    """The annotated source of all slides, read from files under ``src_dir``."""
    src = Path(src_dir)
    parts: list[str] = []
    for course in courses:
        parts.append(f"# COURSE: {course.name}\n")
        for session in course:
            parts.append(f"# SESSION: {session.name}\n")
            for segment in session:
                parts.append(f"# SEGMENT: {segment.name}\n")
                for slide in segment:
                    parts.append(f"# SLIDE: {slide.name}\n")
                    for path in slide.source_paths:
                        parts.append((src / path).read_text(encoding="utf-8") + "\n")
    return "".join(parts)


def main(argv: list[str] | None = None) -> int:
    """Print the content of the book in the current directory."""
    argparse.ArgumentParser(
        prog="course-content", description="Print the source of all course slides"
    ).parse_args(argv)
    courses, _ = Courses.extract_structure(Book.load("."))
    print(course_content(courses, "src"), end="")
    return 0