"""Application service: Place Order use case.

The order flow runs as one linear attempt:

    validate -> reserve each line item -> number -> persist

Validation has no side effects.  Reservation undoes itself when a line
item fails.  Once the reservations hold, a numbering failure still
releases them (no order number has been handed out yet), but a failure
to persist does NOT: the order number is burnt and the places stay
taken, and the inconsistency is reported as PersistenceError for an
operator to reconcile.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from afterschool.application.dto import PlacedOrderDTO
from afterschool.domain.exceptions import PersistenceError
from afterschool.domain.model.order import Order, OrderStatus
from afterschool.domain.model.value_objects import OrderNumber
from afterschool.domain.repository.capacity_store import CapacityStore
from afterschool.domain.repository.order_repository import OrderRepository
from afterschool.domain.repository.sequence_generator import SequenceGenerator
from afterschool.domain.service.capacity_reservation_service import (
    CapacityReservationService,
)
from afterschool.domain.service.order_assembler import OrderAssembler

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlaceOrderHandler:

    def __init__(
        self,
        capacity_store: CapacityStore,
        sequence: SequenceGenerator,
        order_repo: OrderRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._assembler = OrderAssembler()
        self._reservations = CapacityReservationService(capacity_store)
        self._sequence = sequence
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, raw: Any) -> PlacedOrderDTO:
        """Place an order from a raw request body.

        Raises:
            ValidationError (or a subclass) for malformed input.
            CapacityError / LessonNotFoundError naming the lesson that
                could not be reserved.
            PersistenceError when numbering or storing the order fails.
        """
        validated = self._assembler.validate(raw)
        compensations = self._reservations.reserve_line_items(validated.items)

        try:
            sequence = self._sequence.next_value()
        except Exception as exc:
            logger.error("Could not obtain an order number: %s", exc)
            compensations.run()
            raise PersistenceError("Could not assign an order number") from exc

        now = self._clock()
        order_number = str(OrderNumber(year=now.year, sequence=sequence))
        order = Order(
            id=None,
            order_number=order_number,
            customer_name=validated.customer_name,
            phone=validated.phone,
            items=list(validated.items),
            notes=validated.notes,
            status=OrderStatus.PENDING,
            created_at=now,
        )

        try:
            order_id = self._order_repo.insert(order)
        except Exception as exc:
            consumed = ", ".join(
                f"{item.lesson_id}x{item.quantity.value}" for item in validated.items
            )
            logger.error(
                "Order %s was not recorded but its places stay reserved "
                "(%s); reconcile manually: %s",
                order_number,
                consumed,
                exc,
            )
            raise PersistenceError(
                f"Order {order_number} could not be saved",
                order_number=order_number,
                items=validated.items,
            ) from exc

        logger.info(
            "Placed order %s (%d places across %d lessons)",
            order_number,
            order.total_places,
            len(order.items),
        )
        return PlacedOrderDTO(order_id=order_id, order_number=order_number)
