"""Application service: Complete Order use case.

Moves a pending order to done.  Capacity is untouched: the places were
consumed when the order was placed.
"""

from __future__ import annotations

from afterschool.domain.exceptions import EntityNotFoundError
from afterschool.domain.repository.order_repository import OrderRepository


class CompleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_number: str) -> None:
        order = self._order_repo.get_by_order_number(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")

        order.mark_done()
        self._order_repo.save(order)
