"""
Digest function used by the finder: BLAKE2s with a 256-bit output.

The finder treats the hash as an opaque bytes → 32-byte callable; tests may
inject another `DigestFn`, production code always uses `blake2s_256`.
"""

from __future__ import annotations

import hashlib
from typing import Callable

DIGEST_SIZE = 32

DigestFn = Callable[[bytes], bytes]


def blake2s_256(data: bytes | bytearray | memoryview) -> bytes:
    """BLAKE2s-256 digest of `data`."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("blake2s_256 expects bytes-like input")
    return hashlib.blake2s(bytes(data), digest_size=DIGEST_SIZE).digest()


__all__ = ["DIGEST_SIZE", "DigestFn", "blake2s_256"]
