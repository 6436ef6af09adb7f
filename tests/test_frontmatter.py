from pathlib import PurePosixPath

import pytest

from coursetools.book import Chapter
from coursetools.frontmatter import Frontmatter, FrontmatterError, split_frontmatter


def _chapter(content):
    return Chapter(name="c", content=content, source_path=PurePosixPath("c.md"))


def test_split_all_fields():
    chapter = _chapter(
        "---\nminutes: 5\ntarget_minutes: 30\ncourse: Fundamentals\nsession: Day 1\n---\n# Hi\n"
    )
    frontmatter, content = split_frontmatter(chapter)
    assert frontmatter == Frontmatter(
        minutes=5, target_minutes=30, course="Fundamentals", session="Day 1"
    )
    assert content == "# Hi\n"


def test_no_frontmatter_keeps_content():
    chapter = _chapter("# Title\n\nBody\n")
    frontmatter, content = split_frontmatter(chapter)
    assert frontmatter == Frontmatter()
    assert content == chapter.content


def test_split_does_not_modify_chapter():
    text = "---\nminutes: 3\n---\nbody"
    chapter = _chapter(text)
    _, content = split_frontmatter(chapter)
    assert chapter.content == text
    assert content == "body"


def test_unknown_keys_ignored():
    frontmatter, _ = split_frontmatter(_chapter("---\nminutes: 2\nother: x\n---\n"))
    assert frontmatter.minutes == 2
    assert frontmatter.course is None


def test_empty_frontmatter_is_default():
    frontmatter, content = split_frontmatter(_chapter("---\n---\nrest"))
    assert frontmatter == Frontmatter()
    assert content == "rest"


def test_invalid_yaml_raises():
    with pytest.raises(FrontmatterError, match="c.md"):
        split_frontmatter(_chapter("---\nminutes: [1, 2\n---\n"))


def test_wrong_type_raises():
    with pytest.raises(FrontmatterError):
        split_frontmatter(_chapter("---\nminutes: lots\n---\n"))


def test_negative_minutes_rejected():
    with pytest.raises(FrontmatterError):
        Frontmatter.from_mapping({"minutes": -1})


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(FrontmatterError):
        Frontmatter.from_mapping(["minutes"])


def test_from_mapping_none_is_default():
    assert Frontmatter.from_mapping(None) == Frontmatter()


def test_from_mapping_course_string_required():
    with pytest.raises(FrontmatterError):
        Frontmatter.from_mapping({"course": 3})