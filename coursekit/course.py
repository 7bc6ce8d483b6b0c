"""The course hierarchy: courses, sessions, segments and slides.

The structure is read from a book by combining the order of its chapters
with annotations in each chapter's frontmatter.  A top-level chapter with a
``course`` key starts a new course (``course: none`` leaves all courses), and
a ``session`` key starts a new session.  While a course and session are
current, each top-level chapter becomes a segment.  The chapter itself is
the segment's first slide, and each of its sub-chapters is a further slide
that includes all of that sub-chapter's own descendants.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from coursekit.book import Book, Chapter
from coursekit.frontmatter import Frontmatter, split_frontmatter
from coursekit.markdown import Table, duration

BREAK_DURATION = 10
"""Minutes of break between segments of a session."""


class CourseStructureError(ValueError):
    """Raised when the frontmatter annotations do not form a valid course structure."""


def _strip_frontmatter(chapter: Chapter) -> Frontmatter:
    frontmatter, content = split_frontmatter(chapter)
    chapter.content = content
    return frontmatter


@dataclass
class Slide:
    """A single topic, made of one chapter and possibly its sub-chapters."""

    name: str
    minutes: int = 0
    source_paths: list[str] = field(default_factory=list)

    @classmethod
    def _from_chapter(cls, frontmatter: Frontmatter, chapter: Chapter) -> Slide:
        slide = cls(name=chapter.name)
        slide._add(frontmatter, chapter)
        return slide

    def _add(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        self.minutes += frontmatter.minutes or 0
        if chapter.source_path is not None:
            self.source_paths.append(chapter.source_path)

    def _add_sub_chapters(self, chapter: Chapter) -> None:
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            frontmatter = _strip_frontmatter(sub)
            if frontmatter.course is not None or frontmatter.session is not None:
                raise CourseStructureError(
                    f"{sub.path!r}: sub-slides may not have 'course' or 'session' set"
                )
            self._add(frontmatter, sub)
            self._add_sub_chapters(sub)

    def is_sub_chapter(self, chapter: Chapter) -> bool:
        """Whether ``chapter`` is one of this slide's sub-chapters rather than its first."""
        first = self.source_paths[0] if self.source_paths else None
        return chapter.source_path != first


@dataclass
class Segment:
    """A group of slides with a related theme."""

    name: str
    slides: list[Slide] = field(default_factory=list)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    def _add_slide(self, frontmatter: Frontmatter, chapter: Chapter, recurse: bool) -> None:
        slide = Slide._from_chapter(frontmatter, chapter)
        if recurse:
            slide._add_sub_chapters(chapter)
        self.slides.append(slide)

    def minutes(self) -> int:
        """Total duration of the slides in this segment."""
        return sum(slide.minutes for slide in self.slides)

    def outline(self) -> str:
        """A Markdown outline of the slides in this segment."""
        table = Table(["Slide", "Duration"])
        for slide in self.slides:
            if slide.minutes == 0:
                continue
            table.add_row([slide.name, duration(slide.minutes)])
        return (
            f"This segment should take about {duration(self.minutes())}. "
            f"It contains:\n\n{table}"
        )


@dataclass
class Session:
    """A block of instructional time made of segments."""

    name: str
    segments: list[Segment] = field(default_factory=list)
    _target_minutes: int = field(default=0, repr=False)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def _add_segment(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        segment = Segment(chapter.name)
        segment._add_slide(frontmatter, chapter, recurse=False)
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            sub_frontmatter = _strip_frontmatter(sub)
            segment._add_slide(sub_frontmatter, sub, recurse=True)
        self.segments.append(segment)

    def outline(self) -> str:
        """A Markdown outline of the segments in this session."""
        table = Table(["Segment", "Duration"])
        for segment in self.segments:
            if segment.minutes() == 0:
                continue
            table.add_row([segment.name, duration(segment.minutes())])
        return (
            f"Including {BREAK_DURATION} minute breaks, this session should take "
            f"about {duration(self.minutes())}. It contains:\n\n{table}"
        )

    def minutes(self) -> int:
        """Total duration, including breaks between non-empty segments."""
        timed = [segment.minutes() for segment in self.segments if segment.minutes() > 0]
        if not timed:
            return 0
        return sum(timed) + (len(timed) - 1) * BREAK_DURATION

    def target_minutes(self) -> int:
        """The target duration, or the actual duration if no target was given."""
        return self._target_minutes if self._target_minutes > 0 else self.minutes()


@dataclass
class Course:
    """The level of content at which students enroll."""

    name: str
    sessions: list[Session] = field(default_factory=list)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    def _session(self, name: str) -> Session:
        for session in self.sessions:
            if session.name == name:
                return session
        session = Session(name)
        self.sessions.append(session)
        return session

    def minutes(self) -> int:
        """Total duration of all sessions, not counting time between sessions."""
        return sum(session.minutes() for session in self.sessions)

    def target_minutes(self) -> int:
        """Total target duration of all sessions."""
        return sum(session.target_minutes() for session in self.sessions)

    def schedule(self) -> str:
        """A Markdown schedule of this course."""
        parts = ["Course schedule:\n"]
        for session in self.sessions:
            parts.append(
                f" * {session.name} ({duration(session.minutes())}, including breaks)\n\n"
            )
            table = Table(["Segment", "Duration"])
            for segment in session.segments:
                if segment.minutes() == 0:
                    continue
                table.add_row([segment.name, duration(segment.minutes())])
            parts.append(f"{table}\n\n")
        return "".join(parts)


@dataclass
class Courses:
    """All courses in a book; material outside any course is left out."""

    courses: list[Course] = field(default_factory=list)

    def __iter__(self) -> Iterator[Course]:
        return iter(self.courses)

    def _course(self, name: str) -> Course:
        for course in self.courses:
            if course.name == name:
                return course
        course = Course(name)
        self.courses.append(course)
        return course

    @classmethod
    def extract_structure(cls, book: Book) -> tuple[Courses, Book]:
        """Read the course structure from ``book``, stripping frontmatter from its chapters."""
        courses = cls()
        course_name: str | None = None
        session_name: str | None = None

        for item in book.sections:
            if not isinstance(item, Chapter):
                continue
            frontmatter = _strip_frontmatter(item)

            if frontmatter.course is not None:
                session_name = None
                course_name = None if frontmatter.course == "none" else frontmatter.course
            if frontmatter.session is not None:
                session_name = frontmatter.session

            if course_name is not None and session_name is None:
                raise CourseStructureError(
                    f"{item.path!r}: 'session' must appear in frontmatter "
                    "when 'course' appears"
                )

            if course_name is not None and session_name is not None:
                session = courses._course(course_name)._session(session_name)
                session._target_minutes += frontmatter.target_minutes or 0
                session._add_segment(frontmatter, item)

        return courses, book

    def find_course(self, name: str) -> Course | None:
        """Return the course with this name, if any."""
        return next((course for course in self.courses if course.name == name), None)

    def find_slide(
        self, chapter: Chapter
    ) -> tuple[Course, Session, Segment, Slide] | None:
        """Return the course, session, segment and slide containing ``chapter``."""
        if chapter.source_path is None:
            return None
        for course in self.courses:
            for session in course:
                for segment in session:
                    for slide in segment:
                        if chapter.source_path in slide.source_paths:
                            return course, session, segment, slide
        return None