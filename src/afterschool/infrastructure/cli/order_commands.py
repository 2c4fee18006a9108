"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from afterschool.application.dto import OrderDTO
from afterschool.domain.exceptions import DomainException
from afterschool.infrastructure.bootstrap import (
    complete_order_handler,
    list_orders_handler,
    place_order_handler,
)


def _parse_lessons(raw: str) -> list[dict]:
    """Parse 'LESSON_ID:2,LESSON_ID:1' into the order body's lessons list."""
    lessons: list[dict] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid lesson format '{pair}'. Expected 'LessonId:Quantity'."
            )
        lesson_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for lesson '{lesson_id}'."
            )
        lessons.append({"id": lesson_id.strip(), "qty": qty})
    return lessons


@click.command("place")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone, e.g. 07123456789.")
@click.option("--lessons", required=True, help="Lessons as 'LessonId:Qty,LessonId:Qty'.")
@click.option("--notes", default="", help="Optional notes (max 250 characters).")
def order_place(name: str, phone: str, lessons: str, notes: str) -> None:
    """Place an order, reserving places in each lesson."""
    body = {
        "name": name,
        "phone": phone,
        "lessons": _parse_lessons(lessons),
        "notes": notes,
    }

    try:
        placed = place_order_handler().handle(body)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {placed.order_number} placed  (id={placed.order_id})")


def _display_orders(orders: list[OrderDTO]) -> None:
    """Shared formatting for order listings."""
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<16} {'Name':<20} {'Phone':<12} {'Places':>6} {'Status':<8} {'Created':<20}")
    click.echo("-" * 87)
    for dto in orders:
        places = sum(item.quantity for item in dto.items)
        click.echo(
            f"{dto.order_number:<16} {dto.customer_name:<20} {dto.phone:<12} "
            f"{places:>6} {dto.status:<8} {dto.created_at:<20}"
        )
        if dto.notes:
            click.echo(f"  notes: {dto.notes}")


@click.command("list")
def order_list() -> None:
    """List all orders, newest first."""
    _display_orders(list_orders_handler().handle())


@click.command("search")
@click.argument("query")
def order_search(query: str) -> None:
    """Search orders by number, name, phone or notes."""
    _display_orders(list_orders_handler().handle(query))


@click.command("done")
@click.argument("order_number")
def order_done(order_number: str) -> None:
    """Mark a pending order as done."""
    try:
        complete_order_handler().handle(order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_number} marked as done.")
