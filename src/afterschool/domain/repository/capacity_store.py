"""Abstract store owning per-lesson remaining capacity.

Defined in the domain layer so the domain never depends on
infrastructure.  Implementations must make ``try_reserve`` a single
atomic check-and-decrement: two concurrent calls for the last place in
a lesson can never both succeed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class ReservationOutcome(Enum):
    RESERVED = "RESERVED"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    NOT_FOUND = "NOT_FOUND"


class CapacityStore(ABC):

    @abstractmethod
    def try_reserve(self, lesson_id: str, quantity: int) -> ReservationOutcome:
        """Decrement remaining space by *quantity* only if enough is left."""

    @abstractmethod
    def release(self, lesson_id: str, quantity: int) -> None:
        """Give back *quantity* places previously taken by ``try_reserve``."""
