"""Order aggregate — a customer's booking of places across lessons.

An order is written exactly once, after every line item has been
reserved.  Afterwards only its status may change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from afterschool.domain.exceptions import ValidationError
from afterschool.domain.model.value_objects import Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    DONE = "done"


@dataclass(frozen=True)
class OrderLineItem:
    """One (lesson, quantity) pair within an order."""

    lesson_id: str
    quantity: Quantity


@dataclass
class Order:
    """Aggregate root for lesson orders.

    ``id`` is ``None`` until the repository assigns one on insert.
    """

    id: str | None
    order_number: str
    customer_name: str
    phone: str
    items: list[OrderLineItem]
    notes: str = ""
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    # --- State transitions ----------------------------------------------------

    def mark_done(self, now: datetime | None = None) -> None:
        """Transition PENDING -> DONE."""
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot complete order {self.order_number} — current status is "
                f"{self.status.value}, expected pending"
            )
        self.status = OrderStatus.DONE
        self.completed_at = now or datetime.now(timezone.utc)

    # --- Queries --------------------------------------------------------------

    @property
    def total_places(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over the searchable fields."""
        needle = query.lower()
        return any(
            needle in value.lower()
            for value in (self.order_number, self.customer_name, self.phone, self.notes)
        )
