"""Abstract repository for the Lesson catalog (read side).

Capacity changes go through CapacityStore, never through ``save``
during the order flow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from afterschool.domain.model.lesson import Lesson


class LessonRepository(ABC):

    @abstractmethod
    def get_by_id(self, lesson_id: str) -> Lesson | None:
        """Return a lesson by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Lesson]:
        """Return every lesson in the catalog."""

    @abstractmethod
    def search(self, query: str) -> list[Lesson]:
        """Return lessons whose topic, location, price or space contain *query*."""

    @abstractmethod
    def save(self, lesson: Lesson) -> None:
        """Persist a new or updated lesson."""
