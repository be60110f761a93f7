from __future__ import annotations

"""
Entropy source for the search loop.

Every attempt samples a fresh 32-byte buffer. The source is a plain
zero-argument callable so tests can substitute deterministic byte streams;
`system_entropy` (OS CSPRNG) is the production default.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional

from .digest import DigestFn, blake2s_256
from .errors import EntropyError

ENTROPY_SIZE = 32

EntropySource = Callable[[], bytes]


def system_entropy() -> bytes:
    """32 bytes from the operating system CSPRNG."""
    return os.urandom(ENTROPY_SIZE)


def _checked(buf: object) -> bytes:
    if not isinstance(buf, (bytes, bytearray, memoryview)):
        raise EntropyError(
            f"entropy source returned {type(buf).__name__}, expected bytes",
            expected=ENTROPY_SIZE,
        )
    raw = bytes(buf)
    if len(raw) != ENTROPY_SIZE:
        raise EntropyError(
            f"entropy source returned {len(raw)} bytes, expected {ENTROPY_SIZE}",
            expected=ENTROPY_SIZE,
            actual=len(raw),
        )
    return raw


@dataclass(frozen=True)
class Entropy:
    """A single 32-byte entropy buffer."""

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, bytes) or len(self.raw) != ENTROPY_SIZE:
            raise ValueError(f"entropy must be exactly {ENTROPY_SIZE} bytes")

    @classmethod
    def new(cls, source: Optional[EntropySource] = None) -> "Entropy":
        """Sample a fresh buffer from `source` (default: `system_entropy`)."""
        return cls(_checked((source or system_entropy)()))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "Entropy":
        return cls(bytes(data))

    def hash(self, digest: Optional[DigestFn] = None) -> bytes:
        return (digest or blake2s_256)(self.raw)


__all__ = ["ENTROPY_SIZE", "EntropySource", "Entropy", "system_entropy"]
