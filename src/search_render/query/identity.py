"""Stable query fingerprints used as job and storage keys."""

from __future__ import annotations

from urllib.parse import urlencode

_FNV64_OFFSET_BASIS = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def canonical_query(query: str) -> str:
    """Encode a URL query string that contains only the ``q`` parameter."""

    return urlencode({"q": query})


def fnv1_64(data: bytes) -> int:
    """64-bit FNV-1 (multiply, then xor)."""

    value = _FNV64_OFFSET_BASIS
    for byte in data:
        value = (value * _FNV64_PRIME) & _MASK64
        value ^= byte
    return value


def query_identity(query: str) -> str:
    # No normalization on purpose: "foo" and " foo" are different queries.
    return f"{fnv1_64(canonical_query(query).encode('utf-8')):016x}"
