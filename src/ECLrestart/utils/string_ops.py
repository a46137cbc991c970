"""String handling helpers."""
from __future__ import annotations


def ensure_bytestring(astring: str | bytes) -> bytes:
    """Return ``astring`` as bytes."""
    if isinstance(astring, bytes):
        return astring
    return astring.encode()


def keyword(name: str | bytes) -> bytes:
    """Return ``name`` as an 8 byte, space padded record keyword."""
    return ensure_bytestring(name).ljust(8)[:8]


__all__ = ["ensure_bytestring", "keyword"]
