"""Expansion of ``{{%...}}`` directives in chapter content."""

from __future__ import annotations

import re

from coursekit.book import Chapter
from coursekit.course import Course, Courses, Segment, Session

_DIRECTIVE = re.compile(r"\{\{%([^}]*)}}")


def replace(
    courses: Courses,
    course: Course | None,
    session: Session | None,
    segment: Segment | None,
    chapter: Chapter,
) -> None:
    """Replace supported directives in ``chapter`` with the content they stand for.

    Supported directives are ``session outline``, ``segment outline``,
    ``course outline`` and ``course outline <name>``.  Any other directive is
    replaced by its own text.  Chapters without a source path are left alone.
    """
    if chapter.source_path is None:
        return

    def expand(match: re.Match[str]) -> str:
        directive = match.group(1).strip()
        match directive.split():
            case ["session", "outline"] if session is not None:
                return session.outline()
            case ["segment", "outline"] if segment is not None:
                return segment.outline()
            case ["course", "outline"] if course is not None:
                return course.schedule()
            case ["course", "outline", course_name]:
                found = courses.find_course(course_name)
                if found is None:
                    return f"not found - {match.group(0)}"
                return found.schedule()
            case _:
                return directive

    chapter.content = _DIRECTIVE.sub(expand, chapter.content)