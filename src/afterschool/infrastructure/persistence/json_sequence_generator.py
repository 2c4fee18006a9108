"""JSON-file-backed implementation of SequenceGenerator.

The counters file is a single object keyed by counter name, e.g.
``{"orderNumber": 41}``.
"""

from __future__ import annotations

from pathlib import Path

from afterschool.domain.repository.sequence_generator import (
    ORDER_NUMBER_COUNTER,
    SequenceGenerator,
)
from afterschool.infrastructure.persistence.json_document import JsonDocument


class JsonSequenceGenerator(SequenceGenerator):

    def __init__(self, file_path: Path, key: str = ORDER_NUMBER_COUNTER) -> None:
        self._document = JsonDocument(file_path, empty={})
        self._key = key

    def initialize(self) -> None:
        with self._document.transaction() as counters:
            counters.setdefault(self._key, 0)

    def next_value(self) -> int:
        with self._document.transaction() as counters:
            value = counters.get(self._key, 0) + 1
            counters[self._key] = value
        return value
