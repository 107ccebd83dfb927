"""A JSON file holding one collection of documents.

Every repository stores its aggregates as a list of plain dicts in one
file. All read-modify-write cycles on the same file go through a lock
shared by every ``JsonCollection`` in the process, which gives the
per-document atomicity that conditional updates (stock withdrawal,
unique review keys) rely on.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        if path not in _locks:
            _locks[path] = threading.RLock()
        return _locks[path]


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    @contextmanager
    def update(self) -> Iterator[list[dict]]:
        """Hold the lock across a load, an in-place edit, and a write-back.

        If the block raises, nothing is written.
        """
        with self._lock:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
            yield records
            self._persist(records)

    # --- File helpers ---------------------------------------------------------

    def _persist(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp, self._file_path)

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
