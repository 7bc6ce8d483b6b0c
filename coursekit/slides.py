"""A rendered book as a collection of HTML slides on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Slide:
    """A page of the book."""

    filename: Path


@dataclass
class Book:
    """A collection of slides found under a source directory."""

    source_dir: Path
    slides: list[Slide] = field(default_factory=list)

    @classmethod
    def from_html_slides(cls, source_dir: str | Path) -> Book:
        """Collect every ``.html`` file below ``source_dir``, in path order."""
        source_dir = Path(source_dir)
        slides = []
        for path in sorted(source_dir.glob("**/*.html")):
            slide = Slide(filename=path)
            logger.debug("add %r", slide)
            slides.append(slide)
        return cls(source_dir=source_dir, slides=slides)