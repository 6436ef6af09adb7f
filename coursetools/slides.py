"""Discovery of the rendered HTML pages (slides) of a book."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Slide:
    """A single rendered page of the book."""

    filename: Path


@dataclass
class Book:
    """A collection of slides found below a source directory."""

    source_dir: Path
    slides: list[Slide] = field(default_factory=list)

    @classmethod
    def from_html_slides(cls, source_dir: Union[str, "os.PathLike[str]"]) -> "Book":
        """Collect every ``.html`` file below source_dir, at any depth, in sorted order."""
        root = Path(source_dir)
        slides = []
        for path in sorted(root.glob("**/*.html")):
            slide = Slide(path)
            logger.debug("add %r", slide)
            slides.append(slide)
        return cls(root, slides)