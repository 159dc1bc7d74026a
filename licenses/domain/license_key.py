"""
License key generation and format checks.

Keys look like ``GP-<timestamp>-<random>-<checksum>``:

- ``timestamp``: milliseconds since the epoch in upper-case base 36
- ``random``: 8 random bytes as 16 upper-case hex characters
- ``checksum``: first 4 hex characters of MD5(timestamp + random), upper-case

Keys are opaque identifiers. The checksum only catches typos.
"""

import hashlib
import re
import secrets
import time
from typing import Optional

_BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

DEFAULT_PREFIX = "GP"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _checksum(timestamp: str, random_part: str) -> str:
    digest = hashlib.md5((timestamp + random_part).encode("ascii")).hexdigest()
    return digest[:4].upper()


def _key_pattern(prefix: str) -> "re.Pattern[str]":
    return re.compile(rf"^{re.escape(prefix)}-([A-Z0-9]+)-([A-F0-9]{{16}})-([A-F0-9]{{4}})$")


def generate_license_key(prefix: str = DEFAULT_PREFIX, now_ms: Optional[int] = None) -> str:
    """
    Generate a new license key.

    Args:
        prefix: Key prefix
        now_ms: Timestamp in milliseconds (defaults to the current time)

    Returns:
        License key string
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    timestamp = _to_base36(now_ms)
    random_part = secrets.token_hex(8).upper()
    return f"{prefix}-{timestamp}-{random_part}-{_checksum(timestamp, random_part)}"


def validate_key_format(key: str, prefix: str = DEFAULT_PREFIX) -> bool:
    """
    Check a key's shape and checksum.

    Args:
        key: Candidate license key
        prefix: Expected key prefix

    Returns:
        True if the key is well formed and its checksum matches
    """
    if not key:
        return False
    match = _key_pattern(prefix).match(key)
    if match is None:
        return False
    timestamp, random_part, checksum = match.groups()
    return _checksum(timestamp, random_part) == checksum
