"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidNameError(ValidationError):
    """Customer name is missing or contains characters other than letters/whitespace."""


class InvalidPhoneError(ValidationError):
    """Phone number is not in national format (0 followed by 10 digits)."""


class InvalidLessonsError(ValidationError):
    """The order has no lessons, or the lessons field is not a list."""


class InvalidLineItemError(ValidationError):
    """A line item has a malformed lesson id or a non-positive quantity."""


class NotesTooLongError(ValidationError):
    """Order notes exceed the maximum length."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CapacityError(DomainException):
    """A lesson could not supply the requested number of places."""

    def __init__(self, lesson_id: str, message: str | None = None) -> None:
        self.lesson_id = lesson_id
        super().__init__(message or f"Not enough space left in lesson '{lesson_id}'")


class LessonNotFoundError(CapacityError, EntityNotFoundError):
    """An order referenced a lesson that does not exist."""

    def __init__(self, lesson_id: str) -> None:
        super().__init__(lesson_id, f"Lesson '{lesson_id}' not found")


class PersistenceError(DomainException):
    """Capacity was consumed but the order could not be recorded.

    Carries the order number (if one was issued) and the consumed line
    items so an operator can reconcile the store by hand.
    """

    def __init__(
        self,
        message: str,
        order_number: str | None = None,
        items: tuple = (),
    ) -> None:
        self.order_number = order_number
        self.items = items
        super().__init__(message)
