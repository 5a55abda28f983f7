"""Per-entity attribute storage.

An AttributeStore is an insertion-ordered mapping from string keys to
arbitrary JSON-like values. Typed getters are best-effort views: they return
the type's zero value on absence or mismatch instead of raising, since
attribute schemas are caller-defined.

Stores bound to an identity pin the reserved ``_type``/``_id`` keys to that
identity. Writes to reserved keys are ignored.

A store starts with its own lock. Once its node or edge is added to a
GraphStore it shares the graph's lock, so attribute and graph access
follow a single lock order.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from typedgraph.locks import ReadWriteLock

if TYPE_CHECKING:
    from typedgraph.types import TypedID

TYPE_KEY = "_type"
ID_KEY = "_id"
RESERVED_KEYS = frozenset({TYPE_KEY, ID_KEY})

AttributeVisitor = Callable[[str, Any], bool | None]


class AttributeStore:
    """Insertion-ordered, lock-protected attribute bag."""

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        identity: TypedID | None = None,
    ) -> None:
        self._lock = ReadWriteLock()
        self._data: dict[str, Any] = {}
        self._pinned = identity is not None
        if identity is not None:
            self._data[TYPE_KEY] = identity.type
            self._data[ID_KEY] = identity.id
        if data:
            self.set_all(data)

    def _writable(self, key: str) -> bool:
        return not (self._pinned and key in RESERVED_KEYS)

    # -- Locking --

    def share_lock(self, lock: ReadWriteLock) -> None:
        """Guard this store with lock from now on.

        Waits for current holders of the previous lock to finish.
        """
        current = self._lock
        if current is lock:
            return
        with current.write_locked():
            self._lock = lock

    def _acquire(self, write: bool) -> ReadWriteLock:
        while True:
            lock = self._lock
            if write:
                lock.acquire_write()
            else:
                lock.acquire_read()
            if lock is self._lock:
                return lock
            # Swapped by share_lock while we waited; retry on the new lock
            if write:
                lock.release_write()
            else:
                lock.release_read()

    @contextmanager
    def _read_locked(self) -> Iterator[None]:
        lock = self._acquire(write=False)
        try:
            yield
        finally:
            lock.release_read()

    @contextmanager
    def _write_locked(self) -> Iterator[None]:
        lock = self._acquire(write=True)
        try:
            yield
        finally:
            lock.release_write()

    # -- Reads --

    def get(self, key: str, default: Any = None) -> Any:
        with self._read_locked():
            return self._data.get(key, default)

    def get_string(self, key: str) -> str:
        value = self.get(key)
        return value if isinstance(value, str) else ""

    def get_int(self, key: str) -> int:
        value = self.get(key)
        # bool is an int subclass but not an integer attribute
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return 0

    def get_float(self, key: str) -> float:
        value = self.get(key)
        if isinstance(value, bool):
            return 0.0
        if isinstance(value, int | float):
            return float(value)
        return 0.0

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        return value if isinstance(value, bool) else False

    def range(self, visitor: AttributeVisitor) -> int:
        """Visit attributes in insertion order until the visitor returns False.

        The read lock is held while the visitor runs; writing to this store
        from inside the visitor raises ReentrantWriteError. For a node or
        edge in a GraphStore that lock is the graph's, so the visitor may
        read the graph but not write to it.

        Returns:
            Number of attributes visited.
        """
        visited = 0
        with self._read_locked():
            for key, value in self._data.items():
                visited += 1
                if visitor(key, value) is False:
                    break
        return visited

    def items(self) -> list[tuple[str, Any]]:
        """Snapshot of (key, value) pairs in insertion order."""
        with self._read_locked():
            return list(self._data.items())

    def to_dict(self) -> dict[str, Any]:
        with self._read_locked():
            return dict(self._data)

    def to_json(self) -> bytes:
        """Encode the full attribute map, reserved keys included."""
        return json.dumps(
            self.to_dict(), ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")

    # -- Writes --

    def set(self, key: str, value: Any) -> None:
        if not self._writable(key):
            return
        with self._write_locked():
            self._data[key] = value

    def set_all(self, data: Mapping[str, Any]) -> None:
        """Merge data into the store, overwriting existing keys."""
        with self._write_locked():
            for key, value in data.items():
                if self._writable(key):
                    self._data[key] = value

    def delete(self, key: str) -> None:
        if not self._writable(key):
            return
        with self._write_locked():
            self._data.pop(key, None)

    def from_json(self, data: bytes | str) -> None:
        """Merge attributes decoded from a JSON object.

        Raises:
            ValueError: If data is not valid JSON or not a JSON object.
        """
        decoded = json.loads(data)
        if not isinstance(decoded, dict):
            raise ValueError(
                f"expected a JSON object, got {type(decoded).__name__}"
            )
        self.set_all(decoded)

    def __contains__(self, key: object) -> bool:
        with self._read_locked():
            return key in self._data

    def __len__(self) -> int:
        with self._read_locked():
            return len(self._data)

    def __repr__(self) -> str:
        return f"AttributeStore({self.to_dict()!r})"
