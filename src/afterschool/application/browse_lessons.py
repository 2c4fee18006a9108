"""Application service: Browse Lessons use case (query).

Search mirrors the public ``/search`` endpoint: a blank query returns
nothing rather than the whole catalog.
"""

from __future__ import annotations

from afterschool.application.dto import LessonDTO
from afterschool.domain.model.lesson import Lesson
from afterschool.domain.repository.lesson_repository import LessonRepository


class BrowseLessonsHandler:

    def __init__(self, lesson_repo: LessonRepository) -> None:
        self._lesson_repo = lesson_repo

    def list_all(self) -> list[LessonDTO]:
        return [self._to_dto(lesson) for lesson in self._lesson_repo.list_all()]

    def search(self, query: str | None) -> list[LessonDTO]:
        if not query or not query.strip():
            return []
        return [self._to_dto(lesson) for lesson in self._lesson_repo.search(query.strip())]

    @staticmethod
    def _to_dto(lesson: Lesson) -> LessonDTO:
        return LessonDTO(
            id=lesson.id,
            topic=lesson.topic,
            location=lesson.location,
            price=f"{lesson.price.amount:.2f}",
            space=lesson.remaining_space,
            total_space=lesson.total_space,
            icon=lesson.icon,
        )
