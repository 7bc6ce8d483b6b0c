"""YAML frontmatter at the top of a chapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import yaml

from coursekit.book import Chapter

_FRONTMATTER = re.compile(r"^\s*---\r?\n(.*?)---\r?\n(.*)$", re.DOTALL)


class FrontmatterError(ValueError):
    """Raised when a chapter's frontmatter cannot be parsed."""


@dataclass
class Frontmatter:
    """Course annotations given in a chapter's frontmatter."""

    minutes: int | None = None
    target_minutes: int | None = None
    course: str | None = None
    session: str | None = None

    @classmethod
    def _from_mapping(cls, data: Any) -> Frontmatter:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("frontmatter must be a mapping")
        values: dict[str, Any] = {}
        for key in ("minutes", "target_minutes"):
            value = data.get(key)
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, int) or value < 0
            ):
                raise ValueError(f"{key!r} must be a non-negative integer")
            values[key] = value
        for key in ("course", "session"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key!r} must be a string")
            values[key] = value
        return cls(**values)


def split_frontmatter(chapter: Chapter) -> tuple[Frontmatter, str]:
    """Split a chapter's content into its frontmatter and the remaining content."""
    match = _FRONTMATTER.match(chapter.content)
    if not match:
        return Frontmatter(), chapter.content
    raw, content = match.group(1).strip(), match.group(2).strip()
    try:
        frontmatter = Frontmatter._from_mapping(yaml.safe_load(raw))
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontmatterError(
            f"error parsing frontmatter in {chapter.source_path!r}: {exc}"
        ) from exc
    return frontmatter, content