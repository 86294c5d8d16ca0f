"""Hashing utilities."""

import hashlib


def stable_index(value: str, size: int) -> int:
    """Map a string to a stable index in ``range(size)``."""
    if size <= 0:
        raise ValueError("size must be positive")
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()
    return int(digest[:16], 16) % size


def hash_token(token: str) -> str:
    """Hash a bearer token for lookup; raw tokens are never stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
