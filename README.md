# coursekit

Tools for building slide-based training courses with mdBook. The package
provides five commands:

- **`mdbook-course`** is an mdBook preprocessor. It reads the course structure
  out of chapter frontmatter, removes the frontmatter, adds timing notes to the
  speaker notes and expands outline directives.
- **`course-schedule`** prints how long each course and session takes.
- **`course-content`** prints the Markdown source of every slide in course
  order.
- **`mdbook-exerciser`** is an mdBook renderer. It writes marked code blocks
  out to files so that students get starter code for each exercise.
- **`mdbook-slide-evaluator`** renders built HTML slides in a WebDriver browser
  and reports slides whose content is too wide or too tall.

## Installation

```
pip install coursekit
```

For running the tests:

```
pip install "coursekit[test]"
pytest
```

## Course structure

A book is split into a hierarchy (`coursekit.course`):

```
Courses   all courses in the book
  Course    what students enroll in
    Session   a block of teaching time, e.g. a morning
      Segment   a top-level chapter within a session
        Slide     a sub-chapter (with its own sub-chapters folded in)
```

Chapters set this structure in YAML frontmatter at the very top of the file:

```markdown
---
course: Fundamentals
session: Day 1 Morning
target_minutes: 180
minutes: 5
---

# Welcome
```

- `course` starts a new course (`course: none` leaves course material, e.g.
  for an introduction). A top-level chapter inside a course must have a
  session; naming a course without a session raises `CourseStructureError`.
- `session` starts a new session within the current course. Sessions and
  courses with the same name are merged.
- `target_minutes` adds to the planned length of the session.
- `minutes` is how long the slide takes to teach.

`minutes` and `target_minutes` must be non-negative integers, and `course`
and `session` must be strings; otherwise `FrontmatterError` is raised.
Sub-slides may set `minutes` but not `course` or `session`.

A session's length counts a 10 minute break between every two of its
segments that take any time. When shown, durations over 5 minutes are rounded
up to the next 5 minutes (`coursekit.markdown.duration`).

## The preprocessor

Add it to `book.toml`:

```toml
[preprocessor.course]
command = "mdbook-course"
```

`mdbook-course supports <renderer>` exits successfully for every renderer.
Otherwise the command reads mdBook's `[context, book]` JSON from standard
input and writes the processed book as JSON to standard output. On an error
it prints the message to standard error and exits with status 1.

In chapter text the following directives are replaced:

| Directive | Replaced with |
| - | - |
| `{{%session outline}}` | a table of the segments in the current session |
| `{{%segment outline}}` | a table of the slides in the current segment |
| `{{%course outline}}` | the schedule of the current course |
| `{{%course outline NAME}}` | the schedule of the course called NAME, or `not found - ` followed by the directive |

Any other `{{% ... }}` directive is replaced by its own trimmed text.
Segments and slides that take no time are left out of the tables.

When a slide has a non-zero `minutes` and its first chapter contains a
`<details>` block, a line such as "This slide should take about 5 minutes."
(or "This slide and its sub-slides should take about ...") is added right
after `<details>`.

## Schedules and content

Run these from the book's root directory:

```
course-schedule
course-schedule pr
course-content
```

`course-schedule` (or `course-schedule sessions`) prints each session with its
segments, and marks a session that runs more than 15 minutes over or under its
target, e.g. `1 hour (⏰ *20 minutes too long*)` or
`1 hour: (20 minutes short)`. `course-schedule pr` prints a summary fit for a
pull request description, with a 15 minute margin for courses and 5 minutes
for sessions. Both stop at the first course that has no duration.

`course-content` prints `# COURSE:`, `# SESSION:`, `# SEGMENT:` and `# SLIDE:`
header lines followed by the source of each slide file, read from `src/`.

The book is read from `SUMMARY.md` in the source directory named by `src` in
the `[book]` table of `book.toml` (default `src`).

## Exercises

In `book.toml`:

```toml
[output.exerciser]
output-directory = "comprehensive-exercises"
```

In a chapter, put a comment right before a code block:

````markdown
<!-- File src/main.rs -->

```rust
fn main() {}
```
````

The code block is written to
`<output-directory>/<chapter file stem>/src/main.rs`. Code blocks without such
a comment are ignored. The output directory is removed and created afresh
before writing.

## Slide evaluation

Build the book to HTML, start a WebDriver server, then run:

```
mdbook-slide-evaluator book/html
```

Every `.html` file below the directory is loaded, in path order, and the
element chosen by `--element` is measured. Run without arguments, the command
prints its help.

Options:

| Option | Default | Meaning |
| - | - | - |
| `--webdriver` | `http://localhost:4444` | WebDriver address |
| `--element` | `//*[@id="content"]/main` | XPath of the element that is measured |
| `-s`, `--screenshot-dir` | none | store a PNG of each element here |
| `--base-url` | `file:///` | base URL the slide paths are joined to |
| `--export` | none | write a CSV file instead of printing |
| `--overwrite` | off | allow replacing an existing CSV file |
| `--webclient-width` | 1920 | browser window width |
| `--webclient-height` | 1080 | browser window height |
| `--width` | 750 | largest allowed element width |
| `--height` | 1333 | largest allowed element height |
| `--violations-only` | off | report only slides that break a limit |

Printed results look like `book/html/intro.html: 700x1400 [MaxHeight]`. The
CSV file has the columns `filename`, `element_width`, `element_height` and
`policy_violations` (rounded sizes, violations separated by `;`). Pages
without the element are skipped. Pressing Ctrl+C stops the run after the
current slide and reports what has been measured so far.

## Using the library

```python
from coursekit.book import Book
from coursekit.course import Courses
from coursekit.markdown import duration

book = Book.load(".")
courses, book = Courses.extract_structure(book)
for course in courses:
    print(course.name, duration(course.minutes()))
    print(course.schedule())
```

## Limitations

- `course-schedule segments` is accepted on the command line but there is no
  segment summary; it exits with an error.
- `Book.load` understands the common `SUMMARY.md` forms only: a title heading,
  part headings, horizontal rules, links and nested list items of links. It
  does not handle other mdBook configuration.
- `course-content` always reads slide files from `src/`, whatever `book.toml`
  says.