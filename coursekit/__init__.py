"""mdBook tooling for courses: structure, schedules, exercises and slide checks."""

__version__ = "0.1.0"

__all__ = [
    "book",
    "content",
    "course",
    "evaluator",
    "evaluator_cli",
    "exerciser",
    "frontmatter",
    "markdown",
    "preprocessor",
    "replacements",
    "schedule",
    "slides",
    "timing_info",
]