"""CLI commands for browsing the lesson catalog."""

from __future__ import annotations

import click

from afterschool.application.dto import LessonDTO
from afterschool.infrastructure.bootstrap import browse_lessons_handler


def _display_lessons(lessons: list[LessonDTO]) -> None:
    if not lessons:
        click.echo("No lessons found.")
        return

    click.echo(f"{'ID':<26} {'Topic':<20} {'Location':<16} {'Price':>8} {'Space':>6}")
    click.echo("-" * 80)
    for lesson in lessons:
        click.echo(
            f"{lesson.id:<26} {lesson.topic:<20} {lesson.location:<16} "
            f"{lesson.price:>8} {lesson.space:>6}"
        )


@click.command("list")
def lesson_list() -> None:
    """List all lessons with their remaining space."""
    _display_lessons(browse_lessons_handler().list_all())


@click.command("search")
@click.argument("query")
def lesson_search(query: str) -> None:
    """Search lessons by topic, location, price or space."""
    _display_lessons(browse_lessons_handler().search(query))
