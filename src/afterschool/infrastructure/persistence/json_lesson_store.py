"""JSON-file-backed lesson catalog and capacity store.

One file holds every lesson document; the same records back both the
read-side LessonRepository and the CapacityStore used by the order flow.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from afterschool.domain.model.lesson import Lesson
from afterschool.domain.model.value_objects import Money
from afterschool.domain.repository.capacity_store import (
    CapacityStore,
    ReservationOutcome,
)
from afterschool.domain.repository.lesson_repository import LessonRepository
from afterschool.infrastructure.persistence.json_document import JsonDocument


class JsonLessonStore(LessonRepository, CapacityStore):

    def __init__(self, file_path: Path) -> None:
        self._document = JsonDocument(file_path, empty=[])

    # --- LessonRepository interface -------------------------------------------

    def get_by_id(self, lesson_id: str) -> Lesson | None:
        for raw in self._document.read():
            if raw["_id"] == lesson_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Lesson]:
        return [self._to_domain(raw) for raw in self._document.read()]

    def search(self, query: str) -> list[Lesson]:
        if not query.strip():
            return []
        return [lesson for lesson in self.list_all() if lesson.matches(query)]

    def save(self, lesson: Lesson) -> None:
        with self._document.transaction() as records:
            for i, raw in enumerate(records):
                if raw["_id"] == lesson.id:
                    records[i] = self._to_raw(lesson)
                    break
            else:
                records.append(self._to_raw(lesson))

    # --- CapacityStore interface ----------------------------------------------

    def try_reserve(self, lesson_id: str, quantity: int) -> ReservationOutcome:
        with self._document.transaction() as records:
            raw = self._find(records, lesson_id)
            if raw is None:
                return ReservationOutcome.NOT_FOUND
            lesson = self._to_domain(raw)
            if not lesson.can_reserve(quantity):
                return ReservationOutcome.INSUFFICIENT_CAPACITY
            lesson.reserve(quantity)
            raw["space"] = lesson.remaining_space
            return ReservationOutcome.RESERVED

    def release(self, lesson_id: str, quantity: int) -> None:
        with self._document.transaction() as records:
            raw = self._find(records, lesson_id)
            if raw is None:
                # deleted since it was reserved; nothing to give back to
                return
            lesson = self._to_domain(raw)
            lesson.release(quantity)
            raw["space"] = lesson.remaining_space

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _find(records: list[dict], lesson_id: str) -> dict | None:
        for raw in records:
            if raw["_id"] == lesson_id:
                return raw
        return None

    @staticmethod
    def _to_raw(lesson: Lesson) -> dict:
        return {
            "_id": lesson.id,
            "topic": lesson.topic,
            "location": lesson.location,
            "price": str(lesson.price.amount),
            "space": lesson.remaining_space,
            "totalSpace": lesson.total_space,
            "icon": lesson.icon,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Lesson:
        return Lesson(
            id=raw["_id"],
            topic=raw["topic"],
            location=raw["location"],
            price=Money(Decimal(str(raw["price"]))),
            remaining_space=raw["space"],
            total_space=raw.get("totalSpace", raw["space"]),
            icon=raw["icon"],
        )
