"""Cache interface and the default in-memory cache."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable


class CacheMissError(KeyError):
    """Raised when a key is not present in the cache."""


class CacheInterface(ABC):
    """A key/value store holding the configuration of one namespace."""

    @abstractmethod
    def set(self, key: str, value: Any, expire_seconds: int) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def entry_count(self) -> int:
        """Return the number of entries recorded by the cache."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value for ``key`` or raise :class:`CacheMissError`."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key`` and report whether the cache was affected."""

    @abstractmethod
    def range(self, func: Callable[[str, Any], bool]) -> None:
        """Call ``func(key, value)`` for each entry until it returns False."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""


class CacheFactory(ABC):
    """Creates cache instances."""

    @abstractmethod
    def create(self) -> CacheInterface:
        """Return a new, empty cache."""


class DefaultCache(CacheInterface):
    """Thread-safe in-memory cache.

    The entry count goes up on every ``set`` and down on every ``delete``,
    whether or not the key was already present.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, Any] = {}
        self._count = 0

    def set(self, key: str, value: Any, expire_seconds: int) -> None:
        with self._lock:
            self._data[key] = value
            self._count += 1

    def entry_count(self) -> int:
        with self._lock:
            return self._count

    def get(self, key: str) -> Any:
        with self._lock:
            try:
                return self._data[key]
            except KeyError:
                raise CacheMissError("load default cache fail") from None

    def delete(self, key: str) -> bool:
        with self._lock:
            self._data.pop(key, None)
            self._count -= 1
        return True

    def range(self, func: Callable[[str, Any], bool]) -> None:
        with self._lock:
            items = list(self._data.items())
        for key, value in items:
            if not func(key, value):
                break

    def clear(self) -> None:
        with self._lock:
            self._data = {}
            self._count = 0


class DefaultCacheFactory(CacheFactory):
    """Factory producing :class:`DefaultCache` instances."""

    def create(self) -> CacheInterface:
        return DefaultCache()