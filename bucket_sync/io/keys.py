from __future__ import annotations

from bucket_sync.errors import InvalidKeyError


def relative_key(full_key: str, prefix: str | None) -> str:
    """Strip ``prefix`` and one separating slash from the front of ``full_key``.

    The result is empty for the prefix "directory marker" (``prefix`` or
    ``prefix/`` stored as an object).
    """

    remainder = full_key[len(prefix) :] if prefix else full_key
    if prefix and remainder.startswith("/"):
        remainder = remainder[1:]
    return remainder


def format_key(prefix: str | None, key: str | None) -> str:
    """Join a bucket prefix and a relative key into the full store key."""

    parts = [part for part in (prefix, key) if part]
    if not parts:
        raise InvalidKeyError("cannot build a store key without a prefix or key")
    return "/".join(parts)
