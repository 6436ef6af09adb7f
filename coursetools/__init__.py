"""Tools for course books: structure, schedules, exercises and slide checks."""

__version__ = "0.1.0"
__all__ = [
    "book",
    "markdown",
    "frontmatter",
    "course",
    "timing_info",
    "replacements",
    "preprocessor",
    "schedule",
    "content",
    "exerciser",
    "slides",
    "evaluator",
    "evaluator_cli",
]