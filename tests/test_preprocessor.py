import io
import json
import sys
from pathlib import PurePosixPath

import pytest

from coursetools.book import Book, Chapter
from coursetools.preprocessor import main, preprocess, preprocess_book


def _chapter(name, path, content, subs=()):
    return Chapter(
        name=name,
        content=content,
        path=PurePosixPath(path),
        source_path=PurePosixPath(path),
        sub_items=list(subs),
    )


def _book():
    hello = _chapter(
        "Hello",
        "welcome/hello.md",
        "---\nminutes: 20\n---\n# Hello\n<details>\nNotes\n</details>\n",
    )
    welcome = _chapter(
        "Welcome",
        "welcome.md",
        "---\ncourse: Fundamentals\nsession: Day 1\n---\n# Welcome\n"
        "{{% session outline }}\n<details>\nIntro\n</details>\n",
        [hello],
    )
    types = _chapter("Types", "types.md", "---\nminutes: 30\n---\n# Types\n{{% unknown thing }}\n")
    outside = _chapter(
        "Index", "index.md", "---\ncourse: none\n---\n{{% course outline Fundamentals }}\n"
    )
    return Book([welcome, types, outside])


def _by_name(book):
    return {chapter.name: chapter for chapter in book.chapters()}


def test_frontmatter_is_stripped():
    chapters = _by_name(preprocess_book(_book()))
    assert chapters["Welcome"].content.startswith("# Welcome\n")
    assert chapters["Hello"].content.startswith("# Hello\n")
    assert chapters["Types"].content.startswith("# Types\n")


def test_timing_inserted_into_slide_notes():
    chapters = _by_name(preprocess_book(_book()))
    assert "<details>\nThis slide should take about 20 minutes. " in chapters["Hello"].content


def test_no_timing_for_slide_without_minutes():
    chapters = _by_name(preprocess_book(_book()))
    assert "This slide" not in chapters["Welcome"].content


def test_session_outline_expanded():
    chapters = _by_name(preprocess_book(_book()))
    content = chapters["Welcome"].content
    assert "{{%" not in content
    assert "Including 10 minute breaks, this session should take about" in content


def test_unknown_directive_left_as_text():
    chapters = _by_name(preprocess_book(_book()))
    assert chapters["Types"].content == "# Types\nunknown thing\n"


def test_named_course_outline_outside_course():
    chapters = _by_name(preprocess_book(_book()))
    assert chapters["Index"].content.startswith("Course schedule:\n")


def test_preprocess_round_trip():
    stdin = io.StringIO(json.dumps([{"root": "."}, _book().to_dict()]))
    stdout = io.StringIO()
    preprocess(stdin, stdout)
    result = Book.from_dict(json.loads(stdout.getvalue()))
    chapters = _by_name(result)
    assert list(chapters) == ["Welcome", "Hello", "Types", "Index"]
    assert chapters["Hello"].source_path == PurePosixPath("welcome/hello.md")
    assert "This slide should take about 20 minutes." in chapters["Hello"].content


def test_preprocess_rejects_bad_input():
    with pytest.raises(ValueError):
        preprocess(io.StringIO(json.dumps({"book": {}})), io.StringIO())


def test_main_supports_any_renderer():
    assert main(["supports", "html"]) == 0


def test_main_processes_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps([{}, _book().to_dict()])))
    assert main([]) == 0
    result = Book.from_dict(json.loads(capsys.readouterr().out))
    assert _by_name(result)["Types"].content == "# Types\nunknown thing\n"


def test_main_reports_structure_error(monkeypatch, capsys):
    bad = Book([_chapter("Bad", "bad.md", "---\ncourse: Fundamentals\n---\n# Bad\n")])
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps([{}, bad.to_dict()])))
    assert main([]) == 1
    assert "'session' must appear in frontmatter" in capsys.readouterr().err