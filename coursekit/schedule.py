"""Summaries of course schedules against their target durations."""

from __future__ import annotations

import argparse

from coursekit.book import Book
from coursekit.course import Courses
from coursekit.markdown import duration


def timediff(actual: int, target: int, slop: int) -> str:
    """Describe ``actual`` minutes, noting when it misses ``target`` by more than ``slop``."""
    if actual > target + slop:
        return f"{duration(actual)} (\u23f0 *{duration(actual - target)} too long*)"
    if actual + slop < target:
        return f"{duration(actual)}: ({duration(target - actual)} short)"
    return duration(actual)


def session_summary(courses: Courses) -> str:
    """A Markdown summary of every session and its segments."""
    lines: list[str] = []
    for course in courses:
        if course.target_minutes() == 0:
            break
        for session in course:
            lines.append(f"### {course.name} // {session.name}")
            lines.append(f"_{timediff(session.minutes(), session.target_minutes(), 15)}_")
            lines.append("")
            lines.extend(
                f"* {segment.name} - _{duration(segment.minutes())}_" for segment in session
            )
            lines.append("")
    return "".join(f"{line}\n" for line in lines)


def pr_summary(courses: Courses) -> str:
    """A Markdown summary of course and session durations for a pull request."""
    lines = [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]
    for course in courses:
        if course.target_minutes() == 0:
            break
        lines.append(f"### {course.name}")
        lines.append(f"_{timediff(course.minutes(), course.target_minutes(), 15)}_")
        lines.extend(
            f"* {session.name} - _{timediff(session.minutes(), session.target_minutes(), 5)}_"
            for session in course
        )
    return "".join(f"{line}\n" for line in lines)


def main(argv: list[str] | None = None) -> int:
    """Print a schedule summary of the book in the current directory."""
    parser = argparse.ArgumentParser(
        prog="course-schedule", description="Summarise the course schedule"
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("sessions", help="Show session summary (default)")
    commands.add_parser("segments", help="Show segment summary")
    commands.add_parser("pr", help="Show summary for a PR")
    args = parser.parse_args(argv)
    if args.command == "segments":
        parser.error("the segment summary is not available")

    courses, _ = Courses.extract_structure(Book.load("."))
    if args.command == "pr":
        print(pr_summary(courses), end="")
    else:
        print(session_summary(courses), end="")
    return 0