r"""Thread-safe local storage backing the metadata cache and caster bindings."""

from __future__ import annotations

from collections.abc import ItemsView, KeysView, ValuesView
from threading import RLock
from typing import Callable, Dict, Generic, Hashable, Iterator, MutableMapping, TypeVar

__all__ = ["ThreadSafeLocalStorage"]

KeyType = TypeVar("KeyType", bound=Hashable)
ValType = TypeVar("ValType")


class ThreadSafeLocalStorage(
    MutableMapping[KeyType, ValType], Generic[KeyType, ValType]
):
    """Thread-safe local storage with single-write multi-read semantics."""

    def __init__(self):
        self._storage: Dict[KeyType, ValType] = {}
        self._lock = RLock()

    def __getitem__(self, key: KeyType) -> ValType:
        with self._lock:
            return self._storage[key]

    def __setitem__(self, key: KeyType, value: ValType) -> None:
        with self._lock:
            self._storage[key] = value

    def __delitem__(self, key: KeyType) -> None:
        with self._lock:
            del self._storage[key]

    def __iter__(self) -> Iterator[KeyType]:
        with self._lock:
            return iter(list(self._storage.keys()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._storage

    def get_or_create(self, key: KeyType, factory: Callable[[], ValType]) -> ValType:
        """Return the value under `key`, computing it with `factory` on first use.

        The factory runs under the storage lock, so concurrent first requests for
        the same key observe one stored value.
        """
        try:
            return self._storage[key]
        except KeyError:
            pass
        with self._lock:
            if key not in self._storage:
                self._storage[key] = factory()
            return self._storage[key]

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def keys(self) -> KeysView[KeyType]:
        with self._lock:
            return dict(self._storage).keys()

    def values(self) -> ValuesView[ValType]:
        with self._lock:
            return dict(self._storage).values()

    def items(self) -> ItemsView[KeyType, ValType]:
        with self._lock:
            return dict(self._storage).items()

    def __repr__(self) -> str:
        return f"<ThreadSafeLocalStorage(size={len(self)})>"
