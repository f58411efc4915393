"""URL Shortener Service Layer - Core Business Logic

This module turns long URLs into short codes and resolves short codes back.
It owns the process-wide counter that feeds the base62 code generator and
delegates uniqueness to the MappingStore.

URL Creation Flow
-----------------
::
    ┌─────────────┐
    │ shorten_url │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Reverse     │
    │ lookup      │
    └──────┬──────┘
    FOUND? │
    ┌──────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ Counter │  │ Return  │
│ +1, b62 │  │ existing│
└────┬────┘  │ code    │
     ▼       └─────────┘
┌─────────┐
│ store.  │──► StorageError ──► ShortenError
│ save()  │
└────┬────┘
     ▼
┌─────────┐
│ Return  │
│ new code│
└─────────┘

Key Behaviours
===============
- Shortening the same URL again returns the stored code and leaves the
  counter untouched.
- The counter lock covers only increment-and-read; it is never held across
  ``store.save``.
- A failed ``save`` is reported as ShortenError and never retried with a
  fresh code.
- Codes are unique per service instance while the counter stays inside the
  signed 64-bit range.

Usage
=====
```python
service = ShorteningService(InMemoryMappingStore())
code = service.shorten_url("https://example.com/a/b")   # "1"
service.get_long_url(code)                              # "https://example.com/a/b"
```
"""

__all__ = ["COUNTER_MAX", "ShorteningService"]

import logging
import threading
import time
from typing import Optional

from prometheus_client import Counter, Histogram

from shortener.base62 import base62_encode
from shortener.enums import LookupStatus, ShortenStatus
from shortener.exceptions import CounterExhaustedError, ShortCodeNotFoundError, ShortenError, StorageError
from shortener.storage import MappingStore

COUNTER_MAX = 2**63 - 1


# ============================================================================
# PROMETHEUS METRICS
# ============================================================================

URL_SHORTEN_REQUESTS_TOTAL = Counter(
    "url_shortener_shorten_requests_total",
    "Total shorten requests handled by the service",
    ["status"],
)
URL_LOOKUP_REQUESTS_TOTAL = Counter(
    "url_shortener_lookup_requests_total",
    "Total short code lookups handled by the service",
    ["status"],
)
URL_SHORTEN_DURATION = Histogram(
    "url_shortener_shorten_duration_seconds",
    "Time taken to shorten a URL",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
)


class ShorteningService:
    """Core service class for URL shortening operations.

    Each instance owns its own counter, starting at 0; constructing a new
    service is the only way to reset it.

    Example:
        >>> service = ShorteningService(InMemoryMappingStore())
        >>> service.shorten_url("https://example.com/a/b")
        '1'
        >>> service.shorten_url("https://example.com/c")
        '2'
        >>> service.get_long_url("1")
        'https://example.com/a/b'
    """

    def __init__(self, store: MappingStore, logger: Optional[logging.Logger] = None):
        self._store = store
        self._logger = logger or logging.getLogger("urlshortener")
        self._counter_lock = threading.Lock()
        self._counter = 0

    @property
    def store(self) -> MappingStore:
        return self._store

    @property
    def counter(self) -> int:
        """Current counter value (number of codes minted so far)."""
        with self._counter_lock:
            return self._counter

    # ========================================================================
    # PUBLIC API METHODS
    # ========================================================================

    def shorten_url(self, long_url: str) -> str:
        """Return the short code for ``long_url``, minting one if needed.

        Args:
            long_url: Already validated http(s) URL

        Returns:
            str: Existing or newly generated short code

        Raises:
            ShortenError: If the new mapping could not be saved (the
                StorageError is chained as the cause)
            CounterExhaustedError: If no counter values are left
        """
        start_time = time.perf_counter()

        existing = self._store.get_short_code(long_url)
        if existing is not None:
            URL_SHORTEN_REQUESTS_TOTAL.labels(status=ShortenStatus.EXISTING).inc()
            self._logger.debug(f"URL already shortened: {existing} -> {long_url}")
            return existing

        short_code = self.generate_short_code()
        try:
            self._store.save(short_code, long_url)
        except StorageError as exc:
            URL_SHORTEN_REQUESTS_TOTAL.labels(status=ShortenStatus.ERROR).inc()
            self._logger.error(f"Failed to save mapping {short_code} -> {long_url}: {exc}")
            raise ShortenError(f"failed to save URL mapping: {exc}") from exc

        duration = time.perf_counter() - start_time
        URL_SHORTEN_DURATION.observe(duration)
        URL_SHORTEN_REQUESTS_TOTAL.labels(status=ShortenStatus.SUCCESS).inc()
        self._logger.info(f"URL shortened: {short_code} -> {long_url}")
        return short_code

    def get_long_url(self, short_code: str) -> str:
        """Resolve a short code.

        Raises:
            ShortCodeNotFoundError: If the code is not mapped
        """
        long_url = self._store.get(short_code)
        if long_url is None:
            URL_LOOKUP_REQUESTS_TOTAL.labels(status=LookupStatus.NOT_FOUND).inc()
            self._logger.debug(f"Short code not found: {short_code}")
            raise ShortCodeNotFoundError(short_code)

        URL_LOOKUP_REQUESTS_TOTAL.labels(status=LookupStatus.SUCCESS).inc()
        return long_url

    def generate_short_code(self) -> str:
        """Increment the counter and encode the new value in base62."""
        with self._counter_lock:
            if self._counter >= COUNTER_MAX:
                raise CounterExhaustedError("short code counter exhausted")
            self._counter += 1
            value = self._counter
        return base62_encode(value)
