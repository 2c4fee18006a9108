"""Unit tests for the CapacityReservationService domain service."""

import pytest

from afterschool.domain.exceptions import (
    CapacityError,
    LessonNotFoundError,
    PersistenceError,
)
from afterschool.domain.model.order import OrderLineItem
from afterschool.domain.model.value_objects import Quantity
from afterschool.domain.service.capacity_reservation_service import (
    CapacityReservationService,
    Compensations,
)
from tests.fakes import (
    ENGLISH_ID,
    MATH_ID,
    MUSIC_ID,
    UNKNOWN_ID,
    FakeLessonStore,
    make_lesson,
)


def _items(*specs: tuple[str, int]) -> list[OrderLineItem]:
    return [OrderLineItem(lesson_id=lid, quantity=Quantity(qty)) for lid, qty in specs]


def _store(math: int = 5, english: int = 5, music: int = 5) -> FakeLessonStore:
    return FakeLessonStore([
        make_lesson(MATH_ID, "Math", math),
        make_lesson(ENGLISH_ID, "English", english),
        make_lesson(MUSIC_ID, "Music", music),
    ])


class TestReserveLineItems:

    def test_reserves_all_items(self):
        store = _store()
        svc = CapacityReservationService(store)

        compensations = svc.reserve_line_items(_items((MATH_ID, 2), (ENGLISH_ID, 5)))

        assert store.space(MATH_ID) == 3
        assert store.space(ENGLISH_ID) == 0
        assert len(compensations) == 2

    def test_same_lesson_twice_in_one_order(self):
        store = _store(math=3)
        svc = CapacityReservationService(store)

        with pytest.raises(CapacityError) as exc_info:
            svc.reserve_line_items(_items((MATH_ID, 2), (MATH_ID, 2)))

        assert exc_info.value.lesson_id == MATH_ID
        assert store.space(MATH_ID) == 3

    def test_insufficient_capacity_names_lesson(self):
        store = _store(english=1)
        svc = CapacityReservationService(store)

        with pytest.raises(CapacityError, match=ENGLISH_ID) as exc_info:
            svc.reserve_line_items(_items((ENGLISH_ID, 2)))

        assert exc_info.value.lesson_id == ENGLISH_ID
        assert not isinstance(exc_info.value, LessonNotFoundError)

    def test_earlier_reservations_released_on_failure(self):
        """If Math and English succeed but Music fails, both are given back."""
        store = _store(music=1)
        svc = CapacityReservationService(store)

        with pytest.raises(CapacityError):
            svc.reserve_line_items(_items((MATH_ID, 2), (ENGLISH_ID, 3), (MUSIC_ID, 2)))

        assert store.space(MATH_ID) == 5
        assert store.space(ENGLISH_ID) == 5
        assert store.space(MUSIC_ID) == 1

    def test_compensation_runs_in_reverse(self):
        store = _store(music=0)
        svc = CapacityReservationService(store)

        with pytest.raises(CapacityError):
            svc.reserve_line_items(_items((MATH_ID, 1), (ENGLISH_ID, 2), (MUSIC_ID, 1)))

        assert store.released == [(ENGLISH_ID, 2), (MATH_ID, 1)]

    def test_unknown_lesson_is_a_capacity_error(self):
        store = _store()
        svc = CapacityReservationService(store)

        with pytest.raises(LessonNotFoundError, match="not found") as exc_info:
            svc.reserve_line_items(_items((MATH_ID, 1), (UNKNOWN_ID, 1)))

        assert isinstance(exc_info.value, CapacityError)
        assert exc_info.value.lesson_id == UNKNOWN_ID
        assert store.space(MATH_ID) == 5

    def test_store_error_releases_earlier_items(self):
        store = FakeLessonStore(
            [make_lesson(MATH_ID, "Math", 5), make_lesson(ENGLISH_ID, "English", 5)],
            fail_on_reserve=ENGLISH_ID,
        )
        svc = CapacityReservationService(store)

        with pytest.raises(PersistenceError, match=ENGLISH_ID) as exc_info:
            svc.reserve_line_items(_items((MATH_ID, 2), (ENGLISH_ID, 1)))

        assert isinstance(exc_info.value.__cause__, OSError)
        assert store.space(MATH_ID) == 5
        assert store.released == [(MATH_ID, 2)]

    def test_first_item_failing_releases_nothing(self):
        store = _store(math=0)
        svc = CapacityReservationService(store)

        with pytest.raises(CapacityError):
            svc.reserve_line_items(_items((MATH_ID, 1), (ENGLISH_ID, 1)))

        assert store.released == []
        assert store.space(ENGLISH_ID) == 5


class TestCompensations:

    def test_runs_last_in_first_out(self):
        calls: list[str] = []
        compensations = Compensations()
        compensations.record("a", lambda: calls.append("a"))
        compensations.record("b", lambda: calls.append("b"))

        compensations.run()

        assert calls == ["b", "a"]
        assert len(compensations) == 0

    def test_failing_undo_does_not_stop_the_rest(self, caplog):
        calls: list[str] = []

        def boom() -> None:
            raise RuntimeError("store offline")

        compensations = Compensations()
        compensations.record("a", lambda: calls.append("a"))
        compensations.record("b", boom)

        compensations.run()

        assert calls == ["a"]
        assert "Compensation failed: b" in caplog.text

    def test_runs_only_once(self):
        calls: list[str] = []
        compensations = Compensations()
        compensations.record("a", lambda: calls.append("a"))

        compensations.run()
        compensations.run()

        assert calls == ["a"]
