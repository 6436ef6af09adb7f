from pathlib import PurePosixPath

import pytest

from coursetools.book import Book, Chapter
from coursetools.content import course_content, main
from coursetools.course import Courses

WELCOME = "---\ncourse: Fundamentals\nsession: Day 1\n---\n# Welcome\n"
HELLO = "---\nminutes: 20\n---\n# Hello\n"
TYPES = "---\nminutes: 30\n---\n# Types\n"


def _chapter(name, path, content, subs=()):
    return Chapter(
        name=name,
        content=content,
        path=PurePosixPath(path),
        source_path=PurePosixPath(path),
        sub_items=list(subs),
    )


def _write_sources(src):
    (src / "welcome").mkdir(parents=True)
    (src / "welcome.md").write_text(WELCOME, encoding="utf-8")
    (src / "welcome" / "hello.md").write_text(HELLO, encoding="utf-8")
    (src / "types.md").write_text(TYPES, encoding="utf-8")


def _courses():
    hello = _chapter("Hello", "welcome/hello.md", HELLO)
    welcome = _chapter("Welcome", "welcome.md", WELCOME, [hello])
    types = _chapter("Types", "types.md", TYPES)
    courses, _ = Courses.extract_structure(Book([welcome, types]))
    return courses


EXPECTED = (
    "# COURSE: Fundamentals\n"
    "# SESSION: Day 1\n"
    "# SEGMENT: Welcome\n"
    "# SLIDE: Welcome\n"
    f"{WELCOME}\n"
    "# SLIDE: Hello\n"
    f"{HELLO}\n"
    "# SEGMENT: Types\n"
    "# SLIDE: Types\n"
    f"{TYPES}\n"
)


def test_course_content_reads_sources(tmp_path):
    src = tmp_path / "src"
    _write_sources(src)
    assert course_content(_courses(), src) == EXPECTED


def test_course_content_empty_courses(tmp_path):
    assert course_content(Courses(), tmp_path) == ""


def test_course_content_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        course_content(_courses(), tmp_path)


def test_main_prints_content(tmp_path, monkeypatch, capsys):
    src = tmp_path / "src"
    _write_sources(src)
    (src / "SUMMARY.md").write_text(
        "# Summary\n\n- [Welcome](welcome.md)\n  - [Hello](welcome/hello.md)\n"
        "- [Types](types.md)\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert capsys.readouterr().out == EXPECTED