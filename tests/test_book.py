import io
import json

import pytest

from coursekit.book import (
    Book,
    Chapter,
    PartTitle,
    Separator,
    parse_preprocessor_input,
)


def _sample_book_json():
    return {
        "sections": [
            {
                "Chapter": {
                    "name": "Intro",
                    "content": "intro text",
                    "number": None,
                    "sub_items": [],
                    "path": "intro.md",
                    "source_path": "intro.md",
                    "parent_names": [],
                }
            },
            "Separator",
            {"PartTitle": "Part One"},
            {
                "Chapter": {
                    "name": "Top",
                    "content": "top text",
                    "number": [1],
                    "sub_items": [
                        {
                            "Chapter": {
                                "name": "Child",
                                "content": "child text",
                                "number": [1, 1],
                                "sub_items": [],
                                "path": "top/child.md",
                                "source_path": "top/child.md",
                                "parent_names": ["Top"],
                                "custom": "kept",
                            }
                        }
                    ],
                    "path": "top.md",
                    "source_path": "top.md",
                    "parent_names": [],
                }
            },
        ],
        "__non_exhaustive": None,
    }


def test_round_trip_preserves_json():
    data = _sample_book_json()
    book = Book.from_dict(data)
    assert book.to_dict() == data


def test_from_dict_builds_item_types():
    book = Book.from_dict(_sample_book_json())
    assert isinstance(book.sections[1], Separator)
    assert book.sections[2] == PartTitle("Part One")
    child = book.sections[3].sub_items[0]
    assert child.name == "Child"
    assert child.extra == {"custom": "kept"}


def test_iter_chapters_is_preorder():
    book = Book.from_dict(_sample_book_json())
    assert [c.name for c in book.iter_chapters()] == ["Intro", "Top", "Child"]


def test_for_each_chapter_visits_children_first():
    book = Book.from_dict(_sample_book_json())
    visited = []
    book.for_each_chapter(lambda chapter: visited.append(chapter.name))
    assert visited == ["Intro", "Child", "Top"]


def test_for_each_chapter_can_modify():
    book = Book.from_dict(_sample_book_json())

    def shout(chapter):
        chapter.content = chapter.content.upper()

    book.for_each_chapter(shout)
    assert [c.content for c in book.iter_chapters()] == [
        "INTRO TEXT",
        "TOP TEXT",
        "CHILD TEXT",
    ]


def test_invalid_item_rejected():
    with pytest.raises(ValueError):
        Book.from_dict({"sections": [{"Bogus": 1}]})


def test_chapter_without_name_rejected():
    with pytest.raises(ValueError):
        Chapter.from_dict({"content": "x"})


def test_to_dict_adds_non_exhaustive_marker():
    book = Book(sections=[Separator()])
    assert book.to_dict() == {"sections": ["Separator"], "__non_exhaustive": None}


def test_parse_preprocessor_input():
    context = {"root": "/book", "renderer": "html"}
    stream = io.StringIO(json.dumps([context, _sample_book_json()]))
    parsed_context, book = parse_preprocessor_input(stream)
    assert parsed_context == context
    assert [c.name for c in book.iter_chapters()] == ["Intro", "Top", "Child"]


def test_parse_preprocessor_input_rejects_bad_shape():
    with pytest.raises(ValueError):
        parse_preprocessor_input(io.StringIO(json.dumps({"sections": []})))


def _write_book(root, src="src"):
    src_dir = root / src
    (src_dir / "top").mkdir(parents=True)
    (src_dir / "intro.md").write_text("Welcome", encoding="utf-8")
    (src_dir / "top.md").write_text("Top content", encoding="utf-8")
    (src_dir / "top" / "child.md").write_text("Child content", encoding="utf-8")
    (src_dir / "second.md").write_text("Second content", encoding="utf-8")
    (src_dir / "SUMMARY.md").write_text(
        "# Summary\n"
        "\n"
        "[Intro](intro.md)\n"
        "\n"
        "# Part One\n"
        "\n"
        "- [Top](top.md)\n"
        "  - [Child](top/child.md)\n"
        "- [Draft]()\n"
        "\n"
        "---\n"
        "\n"
        "- [Second](second.md)\n",
        encoding="utf-8",
    )


def test_load_reads_summary(tmp_path):
    _write_book(tmp_path)
    book = Book.load(tmp_path)
    assert [c.name for c in book.iter_chapters()] == [
        "Intro",
        "Top",
        "Child",
        "Draft",
        "Second",
    ]
    assert book.sections[1] == PartTitle("Part One")
    assert any(isinstance(item, Separator) for item in book.sections)
    chapters = {c.name: c for c in book.iter_chapters()}
    assert chapters["Child"].content == "Child content"
    assert chapters["Child"].source_path == "top/child.md"
    assert chapters["Child"].parent_names == ["Top"]
    assert chapters["Draft"].path is None
    assert chapters["Intro"].number is None
    assert chapters["Child"].number == [*chapters["Top"].number, 1]


def test_load_honours_book_toml_src(tmp_path):
    _write_book(tmp_path, src="content")
    (tmp_path / "book.toml").write_text(
        '[book]\ntitle = "Demo"\nsrc = "content"\n', encoding="utf-8"
    )
    book = Book.load(tmp_path)
    assert [c.content for c in book.iter_chapters() if c.path][:1] == ["Welcome"]


def test_load_rejects_garbage_line(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "SUMMARY.md").write_text("# Summary\n\nnot a link\n", encoding="utf-8")
    with pytest.raises(ValueError):
        Book.load(tmp_path)