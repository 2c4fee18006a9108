"""Lesson aggregate — a bookable after-school class with limited places.

Each lesson knows how many places are still free.  Only a successful
reservation decrements ``remaining_space``; only a compensating release
(or an admin correction) increments it.
"""

from __future__ import annotations

from dataclasses import dataclass

from afterschool.domain.exceptions import ValidationError
from afterschool.domain.model.value_objects import LessonId, Money

MAX_TOPIC_LENGTH = 50
MAX_LOCATION_LENGTH = 50
ICON_EXTENSION = ".png"


@dataclass
class Lesson:
    """Aggregate root for the lesson catalog.

    Invariants:
    - ``remaining_space`` is never negative
    - topic and location are non-blank and at most 50 characters
    - ``total_space`` is a snapshot taken at creation; it is not kept in
      step with ``remaining_space`` afterwards
    """

    id: str
    topic: str
    location: str
    price: Money
    remaining_space: int
    total_space: int
    icon: str

    def __post_init__(self) -> None:
        LessonId(self.id)
        if not self.topic or not self.topic.strip():
            raise ValidationError("Lesson topic is required")
        if len(self.topic) > MAX_TOPIC_LENGTH:
            raise ValidationError(f"Topic must be at most {MAX_TOPIC_LENGTH} characters")
        if not self.location or not self.location.strip():
            raise ValidationError("Lesson location is required")
        if len(self.location) > MAX_LOCATION_LENGTH:
            raise ValidationError(
                f"Location must be at most {MAX_LOCATION_LENGTH} characters"
            )
        for space in (self.remaining_space, self.total_space):
            if isinstance(space, bool) or not isinstance(space, int) or space < 0:
                raise ValidationError("Space must be a non-negative integer")
        if not self.icon.lower().endswith(ICON_EXTENSION):
            raise ValidationError(f"Icon must be a {ICON_EXTENSION} file")

    def can_reserve(self, quantity: int) -> bool:
        return 0 < quantity <= self.remaining_space

    def reserve(self, quantity: int) -> None:
        """Take *quantity* places.

        Raises ValidationError if fewer places are left.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.remaining_space:
            raise ValidationError(
                f"Not enough space in {self.topic} "
                f"(need {quantity}, have {self.remaining_space} left)"
            )
        self.remaining_space -= quantity

    def release(self, quantity: int) -> None:
        """Give back *quantity* places taken by an abandoned order."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        self.remaining_space += quantity

    def matches(self, query: str) -> bool:
        needle = query.lower()
        return any(
            needle in field.lower()
            for field in (
                self.topic,
                self.location,
                str(self.price.amount),
                str(self.remaining_space),
            )
        )
