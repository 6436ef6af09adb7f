"""Dump the full text of every course, slide by slide."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from coursetools.book import load_book
from coursetools.course import Courses


def course_content(courses: Courses, src_dir: Union[str, "os.PathLike[str]"]) -> str:
    """The source text of every slide, under headings naming its place in the course."""
    src = Path(src_dir)
    parts: list[str] = []
    for course in courses:
        parts.append(f"# COURSE: {course.name}\n")
        for session in course:
            parts.append(f"# SESSION: {session.name}\n")
            for segment in session:
                parts.append(f"# SEGMENT: {segment.name}\n")
                for slide in segment:
                    parts.append(f"# SLIDE: {slide.name}\n")
                    for path in slide.source_paths:
                        parts.append((src / path).read_text(encoding="utf-8") + "\n")
    return "".join(parts)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the content of the courses of the book in the current directory."""
    argparse.ArgumentParser(
        prog="course-content", description="Print the content of every course"
    ).parse_args(argv)
    try:
        courses, _ = Courses.extract_structure(load_book("."))
        print(course_content(courses, "src"), end="")
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())