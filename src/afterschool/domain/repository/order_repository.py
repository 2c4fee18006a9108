"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from afterschool.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def insert(self, order: Order) -> str:
        """Append a new order, assign its id and return it."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its human-readable number, or None."""

    @abstractmethod
    def search(self, query: str) -> list[Order]:
        """Return orders whose number, name, phone or notes contain *query*."""

    @abstractmethod
    def list_all(self, newest_first: bool = True) -> list[Order]:
        """Return every order sorted by creation time."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a status change on an existing order."""
