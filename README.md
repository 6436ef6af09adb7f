# coursetools

Command-line tools and a small library for a course written as an mdBook.

A course book is divided into a hierarchy:

```
Courses   -- all courses in the book
  Course  -- what students enroll in (named by `course:` in frontmatter)
    Session -- a block of instruction (named by `session:` in frontmatter)
      Segment -- a top-level chapter within a session
        Slide -- a sub-chapter of a segment, together with everything beneath it
```

The top-level chapter of a segment is also its first slide. Chapters carry
YAML frontmatter that gives this structure and its timing:

```markdown
---
course: Fundamentals
session: Day 1 Morning
target_minutes: 180
minutes: 5
---
# Welcome
```

`course` and `session` may only appear on top-level chapters. Setting
`course` starts a new course and requires `session` alongside it;
`course: none` marks the following material as outside any course.
`minutes` is the time a slide takes, and `target_minutes` adds to the target
duration of the session. Sessions count a 10 minute break between segments
that take any time.

## Installation

```
pip install .
```

## Commands

### `mdbook-course`

An mdBook preprocessor. It reads the `[context, book]` JSON pair that mdBook
sends on standard input and writes the processed book as JSON to standard
output. It removes frontmatter from every chapter, adds a line such as
"This slide should take about 5 minutes." at the start of a slide's speaker
notes (`<details>` blocks), and expands directives:

- `{{%session outline}}`: the segments of the current session and how long each takes
- `{{%segment outline}}`: the slides of the current segment and how long each takes
- `{{%course outline}}`: the schedule of the current course
- `{{%course outline NAME}}`: the schedule of the named course, or `not found - ...`

Any other directive is replaced by its own text. Register the command in
`book.toml`:

```toml
[preprocessor.course]
command = "mdbook-course"
```

`mdbook-course supports <renderer>` exits successfully for every renderer.
On a malformed book or frontmatter the error is printed to standard error
and the exit status is 1.

### `course-schedule`

Run it in the book's root directory to print, for every session, its
duration compared with its target and the duration of each segment.
`course-schedule pr` prints course and session durations in a form to paste
into a pull request. `course-schedule sessions` and
`course-schedule segments` both print the session summary.

### `course-content`

Run it in the book's root directory to print the Markdown source of every
slide, read from `src/`, under `# COURSE:`, `# SESSION:`, `# SEGMENT:` and
`# SLIDE:` headings.

### `mdbook-exerciser`

An mdBook renderer that pulls exercise files out of the book. A code block
that follows a comment such as

```markdown
<!-- File src/main.rs -->
```

is written to that path, below the configured output directory, in a
sub-directory named after the chapter's file (without its extension):

```toml
[output.exerciser]
output-directory = "exercises"
```

The output directory is removed and created afresh on every run.

### `mdbook-slide-evaluator`

Opens each `.html` file below a built book in a browser through a WebDriver
server, measures the element selected by an XPath expression and reports
slides whose width or height exceed the limits:

```
mdbook-slide-evaluator --webdriver http://localhost:4444 \
    --width 750 --height 1333 --violations-only book/html
```

Options:

- `--webdriver URL`: the WebDriver server (default `http://localhost:4444`)
- `--element XPATH`: the element to measure (default `//*[@id="content"]/main`)
- `--base-url URL`: prefix joined with each file's path to open it (default `file:///`)
- `--webclient-width`, `--webclient-height`: browser window size (default 1920x1080)
- `--width`, `--height`: the largest allowed slide size (default 750x1333)
- `--violations-only`: report only slides that break a limit
- `--export FILE`: write CSV (`filename,element_width,element_height,policy_violations`)
  instead of printing; `--overwrite` allows replacing an existing file
- `-s`, `--screenshot-dir DIR`: keep a PNG of each measured element

Pages without the element are skipped. Pressing Ctrl+C stops after the
current slide and still reports the slides measured so far. Run without
arguments, the command prints its help and exits with status 2.

## Library use

The pieces behind the commands can be used directly:

```python
from coursetools.book import load_book
from coursetools.course import Courses
from coursetools.markdown import duration

courses, book = Courses.extract_structure(load_book("."))
for course in courses:
    print(course.name, duration(course.minutes()))
```

`coursetools.markdown` also provides `relative_link` and a Markdown `Table`;
`coursetools.evaluator` holds `WebDriverClient`, `Evaluator` and
`SlidePolicy` for driving the slide checks from Python.

## Limits

- `load_book` reads `book.toml` only for the `src` setting of `[book]`, and
  reads `SUMMARY.md` with a simple line-based parser: list items with links,
  part titles and separators. It does not handle every form mdBook accepts.
- The preprocessor and renderer do not build books themselves; mdBook runs
  them.
- The slide evaluator does not start a browser or WebDriver server; one must
  already be running at the given address.