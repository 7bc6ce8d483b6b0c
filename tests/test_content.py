import pytest

from coursekit.book import Book
from coursekit.content import course_content, main
from coursekit.course import Courses

WELCOME = "---\ncourse: Fundamentals\nsession: Day 1\n---\n# Welcome\n"
HELLO = "---\nminutes: 20\n---\n# Hello\n"
SUB = "---\nminutes: 5\n---\n# Sub\n"


@pytest.fixture
def book_dir(tmp_path, monkeypatch):
    src = tmp_path / "src"
    (src / "hello").mkdir(parents=True)
    (src / "SUMMARY.md").write_text(
        "# Summary\n\n"
        "- [Welcome](welcome.md)\n"
        "- [Hello](hello.md)\n"
        "  - [Sub](hello/sub.md)\n"
    )
    (src / "welcome.md").write_text(WELCOME)
    (src / "hello.md").write_text(HELLO)
    (src / "hello" / "sub.md").write_text(SUB)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_course_content_order(book_dir):
    courses, _ = Courses.extract_structure(Book.load(book_dir))
    text = course_content(courses, book_dir / "src")
    headers = [line for line in text.splitlines() if line.startswith("# ") and ":" in line]
    assert headers == [
        "# COURSE: Fundamentals",
        "# SESSION: Day 1",
        "# SEGMENT: Welcome",
        "# SLIDE: Welcome",
        "# SEGMENT: Hello",
        "# SLIDE: Hello",
        "# SLIDE: Sub",
    ]


def test_course_content_includes_raw_sources(book_dir):
    courses, _ = Courses.extract_structure(Book.load(book_dir))
    text = course_content(courses, book_dir / "src")
    assert WELCOME + "\n" in text
    assert HELLO + "\n" in text
    assert SUB + "\n" in text


def test_course_content_empty():
    assert course_content(Courses(), ".") == ""


def test_main_prints_content(book_dir, capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("# COURSE: Fundamentals\n# SESSION: Day 1\n")
    assert "minutes: 20" in out


def test_missing_source_file_raises(book_dir):
    courses, _ = Courses.extract_structure(Book.load(book_dir))
    (book_dir / "src" / "hello.md").unlink()
    with pytest.raises(FileNotFoundError):
        course_content(courses, book_dir / "src")