from pathlib import PurePosixPath

from coursetools.book import Book, Chapter
from coursetools.course import Courses
from coursetools.replacements import replace


def build():
    first = Chapter(
        name="Intro",
        content="---\ncourse: Fundamentals\nsession: Day 1\nminutes: 10\n---\nIntro",
        source_path=PurePosixPath("intro.md"),
    )
    second = Chapter(
        name="Types",
        content="---\nminutes: 20\n---\nTypes",
        source_path=PurePosixPath("types.md"),
    )
    courses, _ = Courses.extract_structure(Book([first, second]))
    return courses


def page(content, path="page.md"):
    return Chapter(name="Page", content=content, source_path=PurePosixPath(path) if path else None)


def test_session_outline_directive():
    courses = build()
    course = courses.find_course("Fundamentals")
    session = course.sessions[0]
    chapter = page("Before {{% session outline }} after")
    replace(courses, course, session, session.segments[0], chapter)
    assert chapter.content == f"Before {session.outline()} after"


def test_segment_outline_directive():
    courses = build()
    course = courses.find_course("Fundamentals")
    session = course.sessions[0]
    chapter = page("{{%segment outline}}")
    replace(courses, course, session, session.segments[1], chapter)
    assert chapter.content == session.segments[1].outline()


def test_course_outline_directive():
    courses = build()
    course = courses.find_course("Fundamentals")
    chapter = page("{{% course outline }}")
    replace(courses, course, None, None, chapter)
    assert chapter.content == course.schedule()


def test_named_course_outline():
    courses = build()
    chapter = page("{{% course outline Fundamentals }}")
    replace(courses, None, None, None, chapter)
    assert chapter.content == courses.find_course("Fundamentals").schedule()


def test_named_course_not_found():
    courses = build()
    chapter = page("{{% course outline Missing }}")
    replace(courses, None, None, None, chapter)
    assert chapter.content == "not found - {{% course outline Missing }}"


def test_unavailable_directive_becomes_its_text():
    courses = build()
    chapter = page("x {{% session outline }} y {{% unknown thing }}")
    replace(courses, None, None, None, chapter)
    assert chapter.content == "x session outline y unknown thing"


def test_chapter_without_source_path_is_unchanged():
    courses = build()
    chapter = page("{{% course outline Fundamentals }}", path=None)
    replace(courses, None, None, None, chapter)
    assert chapter.content == "{{% course outline Fundamentals }}"