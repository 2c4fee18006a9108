"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class PlacedOrderDTO:
    """Output: identifiers of a freshly committed order."""

    order_id: str
    order_number: str

    def to_json(self) -> dict:
        return {"insertedId": self.order_id, "orderNumber": self.order_number}


@dataclass(frozen=True)
class OrderLineItemDTO:
    lesson_id: str
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str
    customer_name: str
    phone: str
    status: str
    items: list[OrderLineItemDTO]
    notes: str
    created_at: str
    completed_at: str | None


@dataclass(frozen=True)
class LessonDTO:
    """Output: one lesson of the catalog."""

    id: str
    topic: str
    location: str
    price: str  # plain decimal, e.g. "12.50"
    space: int
    total_space: int
    icon: str

    def to_json(self) -> dict:
        return asdict(self)
