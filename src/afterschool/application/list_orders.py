"""Application service: List / Search Orders use case (query)."""

from __future__ import annotations

from afterschool.application.dto import OrderDTO, OrderLineItemDTO
from afterschool.domain.model.order import Order
from afterschool.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, query: str | None = None) -> list[OrderDTO]:
        """Return all orders newest first, or only those matching *query*."""
        if query is None:
            orders = self._order_repo.list_all(newest_first=True)
        else:
            orders = self._order_repo.search(query)
        return [self._to_dto(order) for order in orders]

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            customer_name=order.customer_name,
            phone=order.phone,
            status=order.status.value,
            items=[
                OrderLineItemDTO(lesson_id=item.lesson_id, quantity=item.quantity.value)
                for item in order.items
            ],
            notes=order.notes,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            completed_at=(
                order.completed_at.strftime("%Y-%m-%d %H:%M UTC")
                if order.completed_at
                else None
            ),
        )
