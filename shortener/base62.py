"""Base62 encoding of non-negative integers.

The alphabet is digits, then uppercase, then lowercase letters, so ``0``
encodes to ``"0"``, ``61`` to ``"z"`` and ``62`` to ``"10"``. Codes are not
padded; their length grows by one symbol each time the value passes a power
of 62.
"""

__all__ = ["BASE62_ALPHABET", "BASE", "base62_encode"]

import string

BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(BASE62_ALPHABET)


def base62_encode(number: int) -> str:
    """Encode a number to base62 string.

    Args:
        number: Number to encode (must be non-negative)

    Returns:
        str: Base62 encoded string

    Example:
        >>> base62_encode(0)
        '0'
        >>> base62_encode(61)
        'z'
        >>> base62_encode(62)
        '10'
    """
    if number < 0:
        raise ValueError("Number must be non-negative")

    if number == 0:
        return BASE62_ALPHABET[0]

    result = []
    while number > 0:
        number, remainder = divmod(number, BASE)
        result.append(BASE62_ALPHABET[remainder])

    return "".join(result[::-1])
