import pytest

from coursekit.book import Book, Chapter
from coursekit.course import Courses
from coursekit.replacements import replace


def _book() -> Book:
    deep = Chapter(
        name="Deep",
        content="---\nminutes: 5\n---\nDeep",
        source_path="hello/sub/deep.md",
        path="hello/sub/deep.md",
    )
    sub = Chapter(
        name="Sub",
        content="---\nminutes: 10\n---\nSub",
        source_path="hello/sub.md",
        path="hello/sub.md",
        sub_items=[deep],
    )
    welcome = Chapter(
        name="Welcome",
        content="---\ncourse: Fundamentals\nsession: Day 1\n---\nWelcome",
        source_path="welcome.md",
        path="welcome.md",
    )
    hello = Chapter(
        name="Hello",
        content="---\nminutes: 20\n---\nHello",
        source_path="hello.md",
        path="hello.md",
        sub_items=[sub],
    )
    return Book(sections=[welcome, hello])


@pytest.fixture
def courses() -> Courses:
    result, _ = Courses.extract_structure(_book())
    return result


def _context(courses: Courses):
    course = courses.find_course("Fundamentals")
    session = course.sessions[0]
    segment = session.segments[1]
    return course, session, segment


def test_session_outline(courses):
    course, session, segment = _context(courses)
    chapter = Chapter(name="x", content="A {{% session outline }} B", source_path="x.md")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == f"A {session.outline()} B"


def test_segment_outline(courses):
    course, session, segment = _context(courses)
    chapter = Chapter(name="x", content="{{%segment outline}}", source_path="x.md")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == segment.outline()


def test_course_outline(courses):
    course, session, segment = _context(courses)
    chapter = Chapter(name="x", content="{{%course outline}}", source_path="x.md")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == course.schedule()
    assert chapter.content.startswith("Course schedule:\n")


def test_named_course_outline_outside_course(courses):
    chapter = Chapter(
        name="x", content="{{%course outline Fundamentals}}", source_path="x.md"
    )
    replace(courses, None, None, None, chapter)
    assert chapter.content == courses.find_course("Fundamentals").schedule()


def test_named_course_not_found(courses):
    chapter = Chapter(name="x", content="{{%course outline Nope}}", source_path="x.md")
    replace(courses, None, None, None, chapter)
    assert chapter.content == "not found - {{%course outline Nope}}"


def test_unknown_directive_is_replaced_by_its_text(courses):
    chapter = Chapter(name="x", content="[{{%  foo   bar  }}]", source_path="x.md")
    replace(courses, None, None, None, chapter)
    assert chapter.content == "[foo   bar]"


def test_session_outline_without_session(courses):
    chapter = Chapter(name="x", content="{{%session outline}}", source_path="x.md")
    replace(courses, None, None, None, chapter)
    assert chapter.content == "session outline"


def test_chapter_without_source_path_is_untouched(courses):
    course, session, segment = _context(courses)
    chapter = Chapter(name="x", content="{{%session outline}}")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == "{{%session outline}}"


def test_multiple_directives(courses):
    course, session, segment = _context(courses)
    chapter = Chapter(
        name="x",
        content="{{%segment outline}}\n---\n{{%session outline}}",
        source_path="x.md",
    )
    replace(courses, course, session, segment, chapter)
    assert chapter.content == f"{segment.outline()}\n---\n{session.outline()}"
    assert "{{%" not in chapter.content