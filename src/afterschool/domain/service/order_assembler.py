"""Domain service: Order Assembler.

Turns the raw body of an order request into a ValidatedOrder, or raises
the specific ValidationError subclass for the first rule it breaks.
Pure: no repositories, no clock, no I/O.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from afterschool.domain.exceptions import (
    InvalidLessonsError,
    InvalidLineItemError,
    InvalidNameError,
    InvalidPhoneError,
    NotesTooLongError,
    ValidationError,
)
from afterschool.domain.model.order import OrderLineItem
from afterschool.domain.model.value_objects import LessonId, Quantity

NAME_PATTERN = re.compile(r"[A-Za-z\s]{2,50}", re.ASCII)
PHONE_PATTERN = re.compile(r"0\d{10}", re.ASCII)
MAX_NOTES_LENGTH = 250


@dataclass(frozen=True)
class ValidatedOrder:
    customer_name: str
    phone: str
    items: tuple[OrderLineItem, ...]
    notes: str = ""


class OrderAssembler:

    def validate(self, raw: Any) -> ValidatedOrder:
        """Validate an order body of the form
        ``{name, phone, lessons: [{id, qty}, ...], notes?}``.

        Checks run in field order (name, phone, lessons, notes) and the
        first failure wins.
        """
        if not isinstance(raw, Mapping):
            raise ValidationError("Order body must be an object")

        name = raw.get("name")
        if not isinstance(name, str) or not NAME_PATTERN.fullmatch(name):
            raise InvalidNameError(
                "Name must be 2-50 characters of letters and spaces only"
            )

        phone = raw.get("phone")
        if not isinstance(phone, str) or not PHONE_PATTERN.fullmatch(phone):
            raise InvalidPhoneError("Phone must be 11 digits starting with 0")

        items = self._line_items(raw.get("lessons"))
        notes = self._notes(raw.get("notes"))

        return ValidatedOrder(
            customer_name=name,
            phone=phone,
            items=items,
            notes=notes,
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _line_items(lessons: Any) -> tuple[OrderLineItem, ...]:
        if not isinstance(lessons, list) or not lessons:
            raise InvalidLessonsError("Order must contain at least one lesson")

        items: list[OrderLineItem] = []
        for position, entry in enumerate(lessons, start=1):
            if not isinstance(entry, Mapping):
                raise InvalidLineItemError(f"Lesson #{position} must be an object")
            lesson_id = entry.get("id")
            if not LessonId.is_valid(lesson_id):
                raise InvalidLineItemError(
                    f"Lesson #{position} has a malformed id: {lesson_id!r}"
                )
            try:
                quantity = Quantity(entry.get("qty"))
            except ValidationError as exc:
                raise InvalidLineItemError(
                    f"Lesson #{position} needs a positive whole quantity"
                ) from exc
            items.append(OrderLineItem(lesson_id=lesson_id, quantity=quantity))
        return tuple(items)

    @staticmethod
    def _notes(notes: Any) -> str:
        if notes is None:
            return ""
        if not isinstance(notes, str):
            raise ValidationError("Notes must be text")
        if len(notes) > MAX_NOTES_LENGTH:
            raise NotesTooLongError(
                f"Notes must be at most {MAX_NOTES_LENGTH} characters"
            )
        return notes
