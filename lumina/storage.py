# lumina/storage.py
"""Local key-value persistence for the saved-books list.

A store maps string keys to string values, the same shape as a
browser's local storage. ``JsonFileStore`` keeps the mapping in a
single JSON file on disk; ``MemoryStore`` keeps it in a dict. Both
expose ``get()`` and a ``transaction()`` context manager that hands out
the mapping and writes it back when the block exits cleanly.

``SavedBooksSlot`` sits on top of a store and owns one key. Reading a
missing or corrupt value yields an empty list; failed writes are
logged and dropped.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

logger = logging.getLogger(__name__)

SAVED_BOOKS_KEY = "lumina_saved_books"


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, str]]:
        data = dict(self._data)
        yield data
        self._data = data


class JsonFileStore:
    """Key-value mapping persisted as one JSON object on disk.

    Parameters
    ----------
    path : str | Path
        The backing file. Its parent directory is created on the first
        write. A missing, unreadable or malformed file reads as empty.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, str]]:
        """Hold the store while the caller edits the mapping.

        The lock is taken, the current mapping read and yielded, and
        the (possibly edited) mapping written back before the lock is
        released. The new content goes to a temporary file next to the
        store and replaces it in one step, so a failed write leaves the
        previous file intact. ``OSError`` from the write propagates to
        the caller.
        """
        with self._lock:
            data = self._read()
            yield data
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=self.path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise


Store = Union[MemoryStore, JsonFileStore]


class SavedBooksSlot:
    """The persisted list of saved book ids under a single key."""

    def __init__(self, store: Store, key: str = SAVED_BOOKS_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> List[int]:
        """Return the persisted ids, or an empty list if there are none.

        Non-integer entries are dropped. Anything that is not a JSON
        list is treated as "no saved books".
        """
        try:
            raw = self.store.get(self.key)
        except OSError as exc:
            logger.warning("Could not read saved books: %s", exc)
            return []
        if raw is None:
            return []
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed saved books value %r", raw)
            return []
        if not isinstance(value, list):
            logger.warning("Discarding saved books value of type %s", type(value).__name__)
            return []
        ids = [v for v in value if isinstance(v, int) and not isinstance(v, bool)]
        if len(ids) != len(value):
            logger.warning("Dropped %d non-integer saved book ids", len(value) - len(ids))
        return ids

    def commit(self, ids: List[int]) -> None:
        """Overwrite the slot with ``ids``.

        Best effort: a failed write is logged and not retried.
        """
        payload = json.dumps(list(ids))
        try:
            with self.store.transaction() as data:
                data[self.key] = payload
        except OSError as exc:
            logger.warning("Could not persist saved books: %s", exc)
