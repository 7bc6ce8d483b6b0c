"""The book model: chapters, part titles and separators, as exchanged with mdBook."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Union

_CHAPTER_KEYS = (
    "name",
    "content",
    "number",
    "sub_items",
    "path",
    "source_path",
    "parent_names",
)


@dataclass
class Chapter:
    """A chapter of the book, possibly with nested sub-items."""

    name: str
    content: str = ""
    number: list[int] | None = None
    sub_items: list[BookItem] = field(default_factory=list)
    path: str | None = None
    source_path: str | None = None
    parent_names: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chapter:
        """Build a chapter from its JSON object (without the ``Chapter`` wrapper)."""
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise ValueError(f"invalid chapter: {data!r}")
        return cls(
            name=data["name"],
            content=data.get("content") or "",
            number=data.get("number"),
            sub_items=[_item_from_json(item) for item in data.get("sub_items") or []],
            path=data.get("path"),
            source_path=data.get("source_path"),
            parent_names=list(data.get("parent_names") or []),
            extra={k: v for k, v in data.items() if k not in _CHAPTER_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the chapter as a JSON object (without the ``Chapter`` wrapper)."""
        return {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [_item_to_json(item) for item in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": list(self.parent_names),
            **self.extra,
        }


@dataclass(frozen=True)
class Separator:
    """A horizontal separator between parts of the summary."""


@dataclass(frozen=True)
class PartTitle:
    """A title introducing a part of the book."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def _item_from_json(data: Any) -> BookItem:
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        ((kind, value),) = data.items()
        if kind == "Chapter":
            return Chapter.from_dict(value)
        if kind == "PartTitle" and isinstance(value, str):
            return PartTitle(value)
    raise ValueError(f"invalid book item: {data!r}")


def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"


@dataclass
class Book:
    """A book: a sequence of top-level items."""

    sections: list[BookItem] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        """Build a book from its JSON object."""
        if not isinstance(data, dict) or not isinstance(data.get("sections"), list):
            raise ValueError("invalid book: expected an object with 'sections'")
        return cls(
            sections=[_item_from_json(item) for item in data["sections"]],
            extra={k: v for k, v in data.items() if k != "sections"},
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the book as a JSON object."""
        result: dict[str, Any] = {
            "sections": [_item_to_json(item) for item in self.sections],
            **self.extra,
        }
        result.setdefault("__non_exhaustive", None)
        return result

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter, parents before their sub-chapters."""

        def walk(items: list[BookItem]) -> Iterator[Chapter]:
            for item in items:
                if isinstance(item, Chapter):
                    yield item
                    yield from walk(item.sub_items)

        return walk(self.sections)

    def for_each_chapter(self, func: Callable[[Chapter], None]) -> None:
        """Call ``func`` on every chapter, sub-chapters before their parent."""

        def walk(items: list[BookItem]) -> None:
            for item in items:
                if isinstance(item, Chapter):
                    walk(item.sub_items)
                    func(item)

        walk(self.sections)

    @classmethod
    def load(cls, root_dir: str | Path) -> Book:
        """Load the book rooted at ``root_dir`` from its ``SUMMARY.md``."""
        root = Path(root_dir)
        src_dir = root / _source_dir(root / "book.toml")
        summary = (src_dir / "SUMMARY.md").read_text(encoding="utf-8")
        return cls(sections=_parse_summary(summary, src_dir))


def parse_preprocessor_input(stream: IO[str]) -> tuple[dict[str, Any], Book]:
    """Read the ``[context, book]`` pair that mdBook sends to a preprocessor."""
    data = json.load(stream)
    if not isinstance(data, list) or len(data) != 2 or not isinstance(data[0], dict):
        raise ValueError("preprocessor input must be a [context, book] array")
    return data[0], Book.from_dict(data[1])


_SRC_SETTING = re.compile(r"""^\s*src\s*=\s*(["'])(?P<value>.*?)\1""")
_TABLE_HEADER = re.compile(r"^\s*\[(?P<name>[^\]]+)\]\s*$")


def _source_dir(config_path: Path) -> str:
    if not config_path.exists():
        return "src"
    section = ""
    for line in config_path.read_text(encoding="utf-8").splitlines():
        header = _TABLE_HEADER.match(line)
        if header:
            section = header.group("name").strip()
            continue
        if section == "book":
            setting = _SRC_SETTING.match(line)
            if setting:
                return setting.group("value")
    return "src"


_LINK = re.compile(r"^\[(?P<name>.*)\]\((?P<target>[^()]*)\)$")
_LIST_ITEM = re.compile(r"^(?P<indent>[ \t]*)[-*+][ \t]+(?P<rest>.*)$")
_HEADING = re.compile(r"^#+[ \t]+(?P<title>.*?)[ \t]*#*[ \t]*$")
_RULE = re.compile(r"^[ \t]*(?:-[ \t]*){3,}$|^[ \t]*(?:\*[ \t]*){3,}$|^[ \t]*(?:_[ \t]*){3,}$")


def _make_chapter(
    line: str, text: str, src_dir: Path, number: list[int] | None, parents: list[str]
) -> Chapter:
    link = _LINK.match(text.strip())
    if not link:
        raise ValueError(f"expected a link in SUMMARY.md line: {line!r}")
    target = link.group("target").strip()
    if not target:
        return Chapter(name=link.group("name"), number=number, parent_names=parents)
    content = (src_dir / target).read_text(encoding="utf-8")
    return Chapter(
        name=link.group("name"),
        content=content,
        number=number,
        path=target,
        source_path=target,
        parent_names=parents,
    )


def _parse_summary(summary: str, src_dir: Path) -> list[BookItem]:
    sections: list[BookItem] = []
    stack: list[tuple[int, Chapter]] = []
    title_seen = False
    top_number = 0

    for line in summary.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("<!--"):
            continue

        heading = _HEADING.match(stripped)
        if heading:
            stack.clear()
            if not title_seen and not sections:
                title_seen = True
            else:
                sections.append(PartTitle(heading.group("title")))
            continue

        if _RULE.match(line):
            stack.clear()
            sections.append(Separator())
            continue

        item = _LIST_ITEM.match(line)
        if item:
            indent = len(item.group("indent").expandtabs(4))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            if stack:
                parent = stack[-1][1]
                siblings = sum(
                    1
                    for sub in parent.sub_items
                    if isinstance(sub, Chapter) and sub.number is not None
                )
                number = [*(parent.number or []), siblings + 1]
                parents = [*parent.parent_names, parent.name]
                chapter = _make_chapter(line, item.group("rest"), src_dir, number, parents)
                parent.sub_items.append(chapter)
            else:
                top_number += 1
                chapter = _make_chapter(line, item.group("rest"), src_dir, [top_number], [])
                sections.append(chapter)
            stack.append((indent, chapter))
            continue

        if _LINK.match(stripped):
            stack.clear()
            sections.append(_make_chapter(line, stripped, src_dir, None, []))
            continue

        raise ValueError(f"unexpected line in SUMMARY.md: {line!r}")

    return sections