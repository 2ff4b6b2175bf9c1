"""
history/store.py

File-backed search history: an ordered JSON array of {name, id} objects.

Classes:
- DuplicatePolicy: what add() does when a name already exists (case-insensitive).
- HistoryStore: list / add / remove / clear over a single JSON file.

Every mutation reads the whole file, computes the new list and writes it back while
holding the store's lock. Writes go to a temp file in the same directory that is then
renamed over the target, so readers never see a half-written file. The lock only
serializes callers sharing one HistoryStore instance.
"""

from __future__ import annotations

import enum
import json
import logging
import os
import tempfile
import threading
import uuid

from weather.errors import DuplicateError, NotFoundError
from weather.models import HistoryEntry

logger = logging.getLogger(__name__)


class DuplicatePolicy(str, enum.Enum):
    REJECT = "reject"  # raise DuplicateError
    SKIP = "skip"      # return the existing entry, write nothing
    ALLOW = "allow"    # append another entry

    @classmethod
    def parse(cls, value) -> DuplicatePolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            logger.warning(f"Unknown duplicate policy {value!r}, using 'reject'")
            return cls.REJECT


class HistoryStore:
    def __init__(self, path, duplicate_policy=DuplicatePolicy.REJECT):
        self.path = os.fspath(path)
        self.duplicate_policy = DuplicatePolicy.parse(duplicate_policy)
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> HistoryStore:
        return cls(settings.history_path, settings.duplicate_policy)

    def _read(self) -> list[HistoryEntry]:
        """Load the persisted list. Missing or malformed files read as empty."""
        try:
            with open(self.path, encoding="utf-8") as fh:
                raw = json.load(fh)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            logger.warning(f"Unreadable history file {self.path}, treating as empty: {exc}")
            return []
        if not isinstance(raw, list):
            logger.warning(f"History file {self.path} is not a JSON array, treating as empty")
            return []
        try:
            return [HistoryEntry.from_dict(item) for item in raw]
        except ValueError as exc:
            logger.warning(f"Malformed history entry in {self.path}, treating as empty: {exc}")
            return []

    def _write(self, entries):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".history-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump([e.to_dict() for e in entries], fh, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise

    def list(self) -> list[HistoryEntry]:
        """All entries in insertion order."""
        return self._read()

    def add(self, name) -> HistoryEntry:
        """Append a city name and return its entry.

        Raises ValueError for a blank name and DuplicateError when the policy is
        REJECT and the name (case-insensitive) is already present.
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("City name is required")
        with self._lock:
            entries = self._read()
            if self.duplicate_policy is not DuplicatePolicy.ALLOW:
                folded = name.casefold()
                existing = next((e for e in entries if e.name.casefold() == folded), None)
                if existing is not None:
                    if self.duplicate_policy is DuplicatePolicy.SKIP:
                        logger.info(f"Skipping duplicate history entry {name!r}")
                        return existing
                    raise DuplicateError(name)
            entry = HistoryEntry(name=name, id=str(uuid.uuid4()))
            entries.append(entry)
            self._write(entries)
        logger.info(f"Added {name!r} to history as {entry.id}")
        return entry

    def remove(self, entry_id) -> None:
        """Delete the entry with this id; NotFoundError leaves the file untouched."""
        with self._lock:
            entries = self._read()
            remaining = [e for e in entries if e.id != entry_id]
            if len(remaining) == len(entries):
                raise NotFoundError(entry_id)
            self._write(remaining)
        logger.info(f"Removed history entry {entry_id}")

    def clear(self) -> None:
        with self._lock:
            self._write([])
