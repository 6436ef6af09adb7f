"""Small Markdown helpers: relative links, durations and tables."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Iterable, Union

PathLike = Union[str, "os.PathLike[str]"]


def _starts_with(path: PurePath, prefix: PurePath) -> bool:
    count = len(prefix.parts)
    return path.parts[:count] == prefix.parts


def relative_link(doc_path: PathLike, target_path: PathLike) -> str:
    """Return a link to target_path relative to the document at doc_path."""
    doc = PurePath(os.fspath(doc_path))
    target = PurePath(os.fspath(target_path))

    dotdot = -1
    for parent in [doc, *doc.parents]:
        if _starts_with(target, parent):
            break
        dotdot += 1
    if dotdot > 0:
        return "../" * dotdot + target.as_posix()
    return f"./{target.as_posix()}"


def duration(minutes: int) -> str:
    """Describe a duration in words, rounding above 5 minutes up to a multiple of 5."""
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5

    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return "1 minute" if minutes == 1 else f"{minutes} minutes"
    if hours == 1:
        return "1 hour" if minutes == 0 else f"1 hour and {minutes} minutes"
    if minutes == 0:
        return f"{hours} hours"
    return f"{hours} hours and {minutes} minutes"


class Table:
    """A table with a fixed number of columns, rendered as GitHub Markdown."""

    def __init__(self, header: Iterable[str]) -> None:
        self.header = list(header)
        self.rows: list[list[str]] = []

    def add_row(self, row: Iterable[str]) -> None:
        row = list(row)
        if len(row) != len(self.header):
            raise ValueError(
                f"row has {len(row)} cells, table has {len(self.header)} columns"
            )
        self.rows.append(row)

    @staticmethod
    def _render_row(cells: Iterable[str]) -> str:
        return "|" + "".join(f" {cell} |" for cell in cells) + "\n"

    def __str__(self) -> str:
        lines = [self._render_row(self.header), self._render_row("-" for _ in self.header)]
        lines.extend(self._render_row(row) for row in self.rows)
        return "".join(lines)