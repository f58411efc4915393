"""Mapping store for short code ↔ long URL associations.

The store keeps two projections of the same record set:

::
    forward:  short_code ──► long_url   (redirects)
    reverse:  long_url   ──► short_code (deduplication)

Both projections live behind a single reader/writer lock so that they can
never be observed out of step. Lookups share the lock; ``save`` takes it
exclusively and performs both uniqueness checks and both inserts as one unit.

Classes:
    MappingStore:  Interface for mapping stores.
    InMemoryMappingStore:  Thread-safe dict-backed implementation.
    ReadWriteLock:  Shared/exclusive lock with writer priority.
"""

__all__ = ["MappingStore", "InMemoryMappingStore", "ReadWriteLock"]

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from shortener.exceptions import DuplicateLongUrlError, DuplicateShortCodeError


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Writers waiting for the lock block newly arriving readers, so a steady
    stream of lookups cannot starve ``save``. The lock is not reentrant.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class MappingStore(ABC):
    """Interface for short code ↔ long URL stores.

    Methods:
        save(short_code: str, long_url: str) -> None:
            Insert a new pair into both projections.
            Raises DuplicateShortCodeError if the short code is already mapped.
            Raises DuplicateLongUrlError if the long URL is already mapped.

        get(short_code: str) -> str | None:
            Return the long URL for a short code, or None.

        get_short_code(long_url: str) -> str | None:
            Return the short code for a long URL, or None.
    """

    @abstractmethod
    def save(self, short_code: str, long_url: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, short_code: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def get_short_code(self, long_url: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError


class InMemoryMappingStore(MappingStore):
    """Process-local store; contents are lost on restart.

    Example:
        >>> store = InMemoryMappingStore()
        >>> store.save("1", "https://example.com/a/b")
        >>> store.get("1")
        'https://example.com/a/b'
        >>> store.get_short_code("https://example.com/a/b")
        '1'
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._short_to_long: dict[str, str] = {}
        self._long_to_short: dict[str, str] = {}

    def save(self, short_code: str, long_url: str) -> None:
        with self._lock.write_locked():
            if short_code in self._short_to_long:
                raise DuplicateShortCodeError(short_code)
            if long_url in self._long_to_short:
                raise DuplicateLongUrlError(long_url)

            self._short_to_long[short_code] = long_url
            self._long_to_short[long_url] = short_code

    def get(self, short_code: str) -> Optional[str]:
        with self._lock.read_locked():
            return self._short_to_long.get(short_code)

    def get_short_code(self, long_url: str) -> Optional[str]:
        with self._lock.read_locked():
            return self._long_to_short.get(long_url)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._short_to_long)

    def snapshot(self) -> tuple[dict[str, str], dict[str, str]]:
        """Return copies of both projections taken under one read lock."""
        with self._lock.read_locked():
            return dict(self._short_to_long), dict(self._long_to_short)
