"""A JSON file that supports locked read-modify-write.

Every repository in this package keeps its records in one JSON file.
``transaction()`` holds an exclusive lock for the whole
read-check-write, which is what makes a conditional update such as
"decrement only if enough is left" atomic:

- a threading lock shared by every JsonDocument on the same path, for
  concurrent requests inside one process
- an ``fcntl`` advisory lock on a sidecar ``.lock`` file, for separate
  processes (e.g. two CLI invocations)

Writes go to a temporary file that is then renamed over the original,
so a crash never leaves a half-written document behind.
"""

from __future__ import annotations

import copy
import fcntl
import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

_registry_lock = threading.Lock()
_path_locks: dict[Path, threading.Lock] = {}


def _lock_for(path: Path) -> threading.Lock:
    with _registry_lock:
        return _path_locks.setdefault(path, threading.Lock())


class JsonDocument:

    def __init__(self, file_path: Path, empty: Any) -> None:
        self._file_path = file_path.resolve()
        self._lock_path = self._file_path.with_name(self._file_path.name + ".lock")
        self._thread_lock = _lock_for(self._file_path)
        self._empty = empty
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> Any:
        """Return a consistent snapshot of the document."""
        with self._locked():
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """Yield the loaded document under lock; persist it on clean exit.

        Nothing is written if the body raises or leaves the document
        unchanged.
        """
        with self._locked():
            data = self._load()
            before = copy.deepcopy(data)
            yield data
            if data != before:
                self._persist(data)

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._thread_lock:
            with open(self._lock_path, "a+b") as lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _load(self) -> Any:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist(self, data: Any) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}."
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(json.dumps(data, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._locked():
                if not self._file_path.exists():
                    self._persist(self._empty)
