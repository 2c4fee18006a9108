"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from afterschool.domain.exceptions import EntityNotFoundError
from afterschool.domain.model.order import Order, OrderLineItem, OrderStatus
from afterschool.domain.model.value_objects import Quantity, new_document_id
from afterschool.domain.repository.order_repository import OrderRepository
from afterschool.infrastructure.persistence.json_document import JsonDocument


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._document = JsonDocument(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def insert(self, order: Order) -> str:
        if order.id is not None:
            raise ValueError(f"Order {order.order_number} is already stored")
        order_id = new_document_id()
        with self._document.transaction() as orders:
            orders.append(self._to_raw(order, order_id))
        order.id = order_id
        return order_id

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._document.read():
            if raw["_id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._document.read():
            if raw["orderNumber"] == order_number:
                return self._to_domain(raw)
        return None

    def search(self, query: str) -> list[Order]:
        if not query.strip():
            return []
        return [order for order in self.list_all() if order.matches(query)]

    def list_all(self, newest_first: bool = True) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._document.read()]
        orders.sort(key=lambda o: o.created_at, reverse=newest_first)
        return orders

    def save(self, order: Order) -> None:
        with self._document.transaction() as orders:
            for i, raw in enumerate(orders):
                if raw["_id"] == order.id:
                    orders[i] = self._to_raw(order, order.id)
                    break
            else:
                raise EntityNotFoundError(f"Order {order.order_number} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order, order_id: str) -> dict:
        return {
            "_id": order_id,
            "orderNumber": order.order_number,
            "name": order.customer_name,
            "phone": order.phone,
            "lessons": [
                {"id": item.lesson_id, "qty": item.quantity.value}
                for item in order.items
            ],
            "notes": order.notes,
            "status": order.status.value,
            "createdAt": order.created_at.isoformat(),
            "completedAt": order.completed_at.isoformat() if order.completed_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(lesson_id=i["id"], quantity=Quantity(i["qty"]))
            for i in raw["lessons"]
        ]
        completed_at = raw.get("completedAt")
        return Order(
            id=raw["_id"],
            order_number=raw["orderNumber"],
            customer_name=raw["name"],
            phone=raw["phone"],
            items=items,
            notes=raw.get("notes", ""),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["createdAt"]),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
        )
