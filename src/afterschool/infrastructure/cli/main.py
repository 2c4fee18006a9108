import click

from afterschool.infrastructure.bootstrap import configure_logging
from afterschool.infrastructure.cli.lesson_commands import lesson_list, lesson_search
from afterschool.infrastructure.cli.order_commands import (
    order_done,
    order_list,
    order_place,
    order_search,
)


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: $AFTERSCHOOL_LOG_LEVEL or WARNING).")
def cli(log_level: str | None) -> None:
    """Afterschool — lesson ordering backend"""
    configure_logging(log_level)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def lesson() -> None:
    """Browse lessons."""


# Register subcommands
order.add_command(order_done)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_search)
lesson.add_command(lesson_list)
lesson.add_command(lesson_search)
