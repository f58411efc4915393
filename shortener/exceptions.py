"""Exceptions raised by the mapping store and the shortening service.

Classes:
    ShortenerError:
        Generic base class for all URL shortener exceptions.

    StorageError:
        Base class for exceptions raised by a MappingStore.

    DuplicateShortCodeError:
        Raised when saving a short code that is already mapped.

    DuplicateLongUrlError:
        Raised when saving a long URL that is already mapped.

    ShortCodeNotFoundError:
        Raised when a short code has no mapping.

    ShortenError:
        Raised when a freshly generated mapping could not be stored.

    CounterExhaustedError:
        Raised when the short code counter has no values left.

Example:
    >>> from shortener.exceptions import ShortCodeNotFoundError
    >>> raise ShortCodeNotFoundError("abc")
    Traceback (most recent call last):
        ...
    shortener.exceptions.ShortCodeNotFoundError: short code not found: 'abc'
"""

__all__ = [
    "ShortenerError",
    "StorageError",
    "DuplicateShortCodeError",
    "DuplicateLongUrlError",
    "ShortCodeNotFoundError",
    "ShortenError",
    "CounterExhaustedError",
]


class ShortenerError(Exception):
    """Generic base class for URL shortener exceptions."""

    pass


class StorageError(ShortenerError):
    """Base class for mapping store exceptions."""

    pass


class DuplicateShortCodeError(StorageError):
    """Exception raised when a short code already exists in the forward mapping."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"short code already exists: {short_code!r}")


class DuplicateLongUrlError(StorageError):
    """Exception raised when a long URL already exists in the reverse mapping."""

    def __init__(self, long_url: str):
        self.long_url = long_url
        super().__init__(f"long URL already shortened: {long_url!r}")


class ShortCodeNotFoundError(ShortenerError):
    """Exception raised when a short code is not mapped to any long URL."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"short code not found: {short_code!r}")


class ShortenError(ShortenerError):
    """Exception raised when a newly generated mapping cannot be saved.

    The underlying StorageError is chained as ``__cause__``.
    """

    pass


class CounterExhaustedError(ShortenerError, OverflowError):
    """Exception raised when the counter would leave the signed 64-bit range."""

    pass
