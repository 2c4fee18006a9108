"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from afterschool.domain.exceptions import ValidationError

_LESSON_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Uses Decimal so lesson prices round-trip through JSON without
    floating-point drift.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    def __str__(self) -> str:
        return f"£{self.amount:.2f}"

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot book zero or negative places.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not book one place
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class LessonId:
    """Identifier of a lesson document: 24 hexadecimal characters."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _LESSON_ID_PATTERN.fullmatch(self.value):
            raise ValidationError(f"Malformed lesson id: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def is_valid(raw: object) -> bool:
        return isinstance(raw, str) and _LESSON_ID_PATTERN.fullmatch(raw) is not None


@dataclass(frozen=True)
class OrderNumber:
    """Human-readable order number, e.g. ``ORD-2026-0042``.

    The sequence is zero-padded to four digits but never truncated, so
    sequence 12345 renders as ``ORD-2026-12345``.
    """

    year: int
    sequence: int

    def __post_init__(self) -> None:
        if self.sequence <= 0:
            raise ValidationError("Order sequence must be positive")

    def __str__(self) -> str:
        return f"ORD-{self.year}-{self.sequence:04d}"


def new_document_id() -> str:
    """Mint a 24-hex-character document id."""
    return uuid.uuid4().hex[:24]
