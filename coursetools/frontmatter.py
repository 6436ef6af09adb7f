"""Parsing of YAML frontmatter at the top of a chapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

import yaml

from coursetools.book import Chapter

_FRONTMATTER = re.compile(
    r"\A\s*---[ \t]*\r?\n(?P<matter>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontmatterError(ValueError):
    """Raised when a chapter's frontmatter cannot be parsed."""


def _count(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise FrontmatterError(f"{key}: expected a non-negative integer, got {value!r}")
    return value


def _text(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FrontmatterError(f"{key}: expected a string, got {value!r}")
    return value


@dataclass
class Frontmatter:
    """Course annotations found in a chapter's frontmatter."""

    minutes: Optional[int] = None
    target_minutes: Optional[int] = None
    course: Optional[str] = None
    session: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Any) -> "Frontmatter":
        """Build from parsed YAML; unknown keys are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise FrontmatterError(f"expected a mapping, got {type(data).__name__}")
        return cls(
            minutes=_count(data, "minutes"),
            target_minutes=_count(data, "target_minutes"),
            course=_text(data, "course"),
            session=_text(data, "session"),
        )


def split_frontmatter(chapter: Chapter) -> tuple[Frontmatter, str]:
    """Split a chapter's content into its frontmatter and the remaining text."""
    match = _FRONTMATTER.match(chapter.content)
    if match is None:
        return Frontmatter(), chapter.content
    where = str(chapter.source_path) if chapter.source_path is not None else None
    try:
        frontmatter = Frontmatter.from_mapping(yaml.safe_load(match.group("matter")))
    except (yaml.YAMLError, FrontmatterError) as error:
        raise FrontmatterError(f"error parsing frontmatter in {where!r}: {error}") from error
    return frontmatter, chapter.content[match.end():]