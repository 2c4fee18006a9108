"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration comes from the environment:

- ``AFTERSCHOOL_DATA_DIR``: directory holding lessons.json, orders.json
  and counters.json (default: ``<repo>/data``)
- ``AFTERSCHOOL_LOG_LEVEL``: logging level name (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from afterschool.application.browse_lessons import BrowseLessonsHandler
from afterschool.application.complete_order import CompleteOrderHandler
from afterschool.application.list_orders import ListOrdersHandler
from afterschool.application.place_order import PlaceOrderHandler
from afterschool.infrastructure.persistence.json_lesson_store import JsonLessonStore
from afterschool.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from afterschool.infrastructure.persistence.json_sequence_generator import (
    JsonSequenceGenerator,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def data_dir() -> Path:
    return Path(os.environ.get("AFTERSCHOOL_DATA_DIR", _DEFAULT_DATA_DIR))


def configure_logging(level: str | None = None) -> None:
    level_name = (level or os.environ.get("AFTERSCHOOL_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)


# --- Repositories -------------------------------------------------------------


def lesson_store() -> JsonLessonStore:
    return JsonLessonStore(data_dir() / "lessons.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(data_dir() / "orders.json")


def sequence_generator() -> JsonSequenceGenerator:
    sequence = JsonSequenceGenerator(data_dir() / "counters.json")
    sequence.initialize()
    return sequence


# --- Handlers -----------------------------------------------------------------


def place_order_handler() -> PlaceOrderHandler:
    return PlaceOrderHandler(
        capacity_store=lesson_store(),
        sequence=sequence_generator(),
        order_repo=order_repository(),
    )


def list_orders_handler() -> ListOrdersHandler:
    return ListOrdersHandler(order_repo=order_repository())


def complete_order_handler() -> CompleteOrderHandler:
    return CompleteOrderHandler(order_repo=order_repository())


def browse_lessons_handler() -> BrowseLessonsHandler:
    return BrowseLessonsHandler(lesson_repo=lesson_store())
