"""Markdown helpers: relative links, human-readable durations and tables."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import PurePath


def relative_link(doc_path: str | os.PathLike, target_path: str | os.PathLike) -> str:
    """Return a link to ``target_path`` relative to the document at ``doc_path``.

    Both paths are relative to the same source directory.
    """
    doc = PurePath(doc_path)
    target = PurePath(target_path)
    target_parts = target.parts

    dotdot = -1
    for ancestor in (doc, *doc.parents):
        prefix = ancestor.parts
        if target_parts[: len(prefix)] == prefix:
            break
        dotdot += 1

    if dotdot > 0:
        return "../" * dotdot + target.as_posix()
    return "./" + target.as_posix()


def duration(minutes: int) -> str:
    """Describe a number of minutes in words.

    Durations longer than 5 minutes are rounded up to the next multiple of 5.
    """
    if minutes < 0:
        raise ValueError(f"duration cannot be negative: {minutes}")
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5

    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return "1 minute" if mins == 1 else f"{mins} minutes"
    hour_text = "1 hour" if hours == 1 else f"{hours} hours"
    if mins == 0:
        return hour_text
    return f"{hour_text} and {mins} minutes"


class Table:
    """A table with a fixed number of columns, rendered as GitHub-flavoured Markdown."""

    def __init__(self, header: Iterable[str]) -> None:
        self.header: tuple[str, ...] = tuple(header)
        self.rows: list[tuple[str, ...]] = []

    def add_row(self, row: Iterable[str]) -> None:
        """Append a row; it must have as many cells as the header."""
        cells = tuple(row)
        if len(cells) != len(self.header):
            raise ValueError(
                f"row has {len(cells)} cells but the table has {len(self.header)} columns"
            )
        self.rows.append(cells)

    @staticmethod
    def _render_row(cells: Iterable[str]) -> str:
        return "|" + "".join(f" {cell} |" for cell in cells) + "\n"

    def __str__(self) -> str:
        lines = [
            self._render_row(self.header),
            self._render_row("-" for _ in self.header),
        ]
        lines.extend(self._render_row(row) for row in self.rows)
        return "".join(lines)