"""Abstract durable counter used to mint order numbers."""

from __future__ import annotations

from abc import ABC, abstractmethod

ORDER_NUMBER_COUNTER = "orderNumber"


class SequenceGenerator(ABC):

    @abstractmethod
    def initialize(self) -> None:
        """Create the counter at 0 if it does not exist yet; never reset it."""

    @abstractmethod
    def next_value(self) -> int:
        """Atomically increment the counter and return the new value."""
