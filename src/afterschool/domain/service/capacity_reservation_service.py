"""Domain service: Capacity Reservation.

Reserves places for every line item of an order, one item at a time in
input order.  Each successful reservation records its compensation; if a
later item cannot be reserved the recorded compensations run in reverse
and the failing lesson is reported.

The store only guarantees atomicity per lesson, so an order spanning
several lessons is not atomic as a whole: while the items are being
reserved, other callers can observe the earlier ones already taken.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from afterschool.domain.exceptions import (
    CapacityError,
    LessonNotFoundError,
    PersistenceError,
)
from afterschool.domain.model.order import OrderLineItem
from afterschool.domain.repository.capacity_store import (
    CapacityStore,
    ReservationOutcome,
)

logger = logging.getLogger(__name__)


class Compensations:
    """Ordered list of undo actions, executed last-in first-out."""

    def __init__(self) -> None:
        self._steps: list[tuple[str, Callable[[], None]]] = []

    def __len__(self) -> int:
        return len(self._steps)

    def record(self, description: str, undo: Callable[[], None]) -> None:
        self._steps.append((description, undo))

    def run(self) -> None:
        """Run every recorded undo in reverse order.

        A failing undo is logged and does not stop the remaining ones.
        """
        while self._steps:
            description, undo = self._steps.pop()
            try:
                undo()
            except Exception:
                logger.exception("Compensation failed: %s", description)
            else:
                logger.warning("Compensated: %s", description)


class CapacityReservationService:

    def __init__(self, capacity_store: CapacityStore) -> None:
        self._capacity_store = capacity_store

    def reserve_line_items(self, items: Iterable[OrderLineItem]) -> Compensations:
        """Reserve every line item or none of them.

        Returns the compensations for the reservations made, so the
        caller can still undo them if a later step of the order fails.

        Raises LessonNotFoundError or CapacityError naming the first
        lesson that could not be reserved, after undoing the others.
        If the store itself fails, the others are undone as well and
        PersistenceError is raised.
        """
        compensations = Compensations()

        for line in items:
            qty = line.quantity.value
            try:
                outcome = self._capacity_store.try_reserve(line.lesson_id, qty)
            except Exception as exc:
                logger.error(
                    "Capacity store failed while reserving lesson %s: %s",
                    line.lesson_id,
                    exc,
                )
                compensations.run()
                raise PersistenceError(
                    f"Could not reserve lesson '{line.lesson_id}'"
                ) from exc

            if outcome is ReservationOutcome.RESERVED:
                compensations.record(
                    f"release {qty} of lesson {line.lesson_id}",
                    self._release_callback(line.lesson_id, qty),
                )
                continue

            logger.warning(
                "Reservation rejected for lesson %s (qty=%d): %s",
                line.lesson_id,
                qty,
                outcome.value,
            )
            compensations.run()
            if outcome is ReservationOutcome.NOT_FOUND:
                raise LessonNotFoundError(line.lesson_id)
            raise CapacityError(line.lesson_id)

        return compensations

    def _release_callback(self, lesson_id: str, quantity: int) -> Callable[[], None]:
        return lambda: self._capacity_store.release(lesson_id, quantity)
