"""In-memory model of an mdBook book and loading it from disk or JSON."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Iterator, Optional, Union


@dataclass
class Chapter:
    """A chapter of the book, possibly holding nested items."""

    name: str
    content: str = ""
    number: Optional[list[int]] = None
    sub_items: list["BookItem"] = field(default_factory=list)
    path: Optional[PurePosixPath] = None
    source_path: Optional[PurePosixPath] = None
    parent_names: list[str] = field(default_factory=list)


@dataclass
class PartTitle:
    """A heading that separates parts of the book."""

    title: str


@dataclass
class Separator:
    """A horizontal separator between items."""


BookItem = Union[Chapter, PartTitle, Separator]


def _to_path(value: Any) -> Optional[PurePosixPath]:
    if value is None:
        return None
    return PurePosixPath(value)


def _from_path(value: Optional[PurePosixPath]) -> Optional[str]:
    if value is None:
        return None
    return value.as_posix()


def item_from_dict(data: Any) -> BookItem:
    """Build a book item from its JSON representation."""
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        (kind, body), = data.items()
        if kind == "PartTitle" and isinstance(body, str):
            return PartTitle(body)
        if kind == "Chapter" and isinstance(body, dict):
            return Chapter(
                name=body.get("name", ""),
                content=body.get("content", "") or "",
                number=list(body["number"]) if body.get("number") is not None else None,
                sub_items=[item_from_dict(item) for item in body.get("sub_items") or []],
                path=_to_path(body.get("path")),
                source_path=_to_path(body.get("source_path")),
                parent_names=list(body.get("parent_names") or []),
            )
    raise ValueError(f"unrecognised book item: {data!r}")


def item_to_dict(item: BookItem) -> Any:
    """Return the JSON representation of a book item."""
    if isinstance(item, Separator):
        return "Separator"
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    if isinstance(item, Chapter):
        return {
            "Chapter": {
                "name": item.name,
                "content": item.content,
                "number": list(item.number) if item.number is not None else None,
                "sub_items": [item_to_dict(sub) for sub in item.sub_items],
                "path": _from_path(item.path),
                "source_path": _from_path(item.source_path),
                "parent_names": list(item.parent_names),
            }
        }
    raise TypeError(f"not a book item: {item!r}")


def _walk(items: list[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk(item.sub_items)


@dataclass
class Book:
    """A book: an ordered list of top-level items."""

    sections: list[BookItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Book":
        items = data.get("sections")
        if items is None:
            items = data.get("items", [])
        return cls([item_from_dict(item) for item in items])

    def to_dict(self) -> dict:
        return {
            "sections": [item_to_dict(item) for item in self.sections],
            "__non_exhaustive": None,
        }

    def chapters(self) -> Iterator[Chapter]:
        """Yield every chapter, depth first, parents before their children."""
        return _walk(self.sections)


_LINK = re.compile(r"\[(?P<name>(?:\\.|[^\]])*)\]\((?P<target>[^)]*)\)")
_LIST_ITEM = re.compile(r"^(?P<indent>\s*)[-*]\s+(?P<rest>.*)$")
_SEPARATOR = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")


def _source_dir(root: Path) -> str:
    config = root / "book.toml"
    if not config.exists():
        return "src"
    section = ""
    for line in config.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        header = re.match(r"^\[([^\]]+)\]", stripped)
        if header:
            section = header.group(1).strip()
            continue
        if section == "book":
            match = re.match(r'^src\s*=\s*["\']([^"\']*)["\']', stripped)
            if match:
                return match.group(1)
    return "src"


def _make_chapter(
    name: str,
    target: str,
    src: Path,
    number: Optional[list[int]],
    parent_names: list[str],
) -> Chapter:
    name = re.sub(r"\\(.)", r"\1", name).strip()
    target = target.strip()
    if not target:
        return Chapter(name=name, number=number, parent_names=parent_names)
    location = PurePosixPath(target)
    file = src / target
    content = file.read_text(encoding="utf-8") if file.exists() else ""
    return Chapter(
        name=name,
        content=content,
        number=number,
        path=location,
        source_path=location,
        parent_names=parent_names,
    )


def load_book(root: Union[str, Path]) -> Book:
    """Load a book from a directory holding book.toml and a source directory."""
    root = Path(root)
    src = root / _source_dir(root)
    summary = (src / "SUMMARY.md").read_text(encoding="utf-8")

    book = Book()
    stack: list[tuple[int, Chapter]] = []
    top_number = 0
    seen_title = False

    for raw in summary.splitlines():
        line = raw.expandtabs(4)
        if not line.strip():
            continue
        if _SEPARATOR.match(line):
            stack.clear()
            book.sections.append(Separator())
            continue
        stripped = line.strip()
        if stripped.startswith("#"):
            title = stripped.lstrip("#").strip()
            stack.clear()
            if not seen_title and not book.sections:
                seen_title = True
            else:
                book.sections.append(PartTitle(title))
            continue
        item = _LIST_ITEM.match(line)
        if item:
            link = _LINK.search(item.group("rest"))
            if not link:
                continue
            indent = len(item.group("indent"))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            if stack:
                parent = stack[-1][1]
                index = sum(isinstance(sub, Chapter) for sub in parent.sub_items) + 1
                base = parent.number or []
                chapter = _make_chapter(
                    link.group("name"),
                    link.group("target"),
                    src,
                    base + [index],
                    parent.parent_names + [parent.name],
                )
                parent.sub_items.append(chapter)
            else:
                top_number += 1
                chapter = _make_chapter(
                    link.group("name"), link.group("target"), src, [top_number], []
                )
                book.sections.append(chapter)
            stack.append((indent, chapter))
            continue
        link = _LINK.match(stripped)
        if link:
            stack.clear()
            book.sections.append(
                _make_chapter(link.group("name"), link.group("target"), src, None, [])
            )
    return book