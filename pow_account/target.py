from __future__ import annotations

"""
Difficulty → 32-byte target encoding.

Difficulty is counted in *leading zero hex digits* (4 bits each). The
target is laid out as two 128-bit halves:

    target = cutoff.to_bytes(16, "big") || b"\\xff" * 16

    cutoff = (1 << (128 - 4·d)) - 1     if 4·d < 128
           = 1                          otherwise (saturated)

A digest qualifies iff int(digest) < int(target) as 256-bit big-endian
integers. With the lower half pinned to all-ones this amounts to "the first
32 hex digits of the digest start with at least d zeros"; the lower half
only makes the comparison span the full digest width.

The saturated cutoff is never 0, so even an absurd difficulty yields a
target some digest can meet (the all-zero digest always does).

Expected attempts per find is 2^(4·d) (geometric distribution).

All functions are pure and side-effect free.
"""

from dataclasses import dataclass

from .errors import DifficultyError

TARGET_SIZE = 32
HALF_BITS = 128
HALF_SIZE = HALF_BITS // 8
BITS_PER_HEX_DIGIT = 4

# five leading zero hex digits (20 bits)
DEFAULT_LEADING_ZEROS = 5


# ─────────────────────────────────────────────────────────────────────────────
# Difficulty arithmetic
# ─────────────────────────────────────────────────────────────────────────────

def validate_leading_zeros(leading_zeros: object) -> int:
    """Return `leading_zeros` if it is a non-negative int, else raise DifficultyError."""
    if isinstance(leading_zeros, bool) or not isinstance(leading_zeros, int):
        raise DifficultyError(leading_zeros)
    if leading_zeros < 0:
        raise DifficultyError(leading_zeros)
    return leading_zeros


def zero_bits(leading_zeros: int) -> int:
    """Required leading zero bits: 4 per hex digit."""
    return BITS_PER_HEX_DIGIT * validate_leading_zeros(leading_zeros)


def cutoff(leading_zeros: int) -> int:
    """
    Upper-half cutoff as a 128-bit integer.

    Saturates to 1 once the zero bits reach the half width; never shifts by a
    negative amount and never returns 0.
    """
    zb = zero_bits(leading_zeros)
    if zb < HALF_BITS:
        return (1 << (HALF_BITS - zb)) - 1
    return 1


def encode_target(leading_zeros: int) -> bytes:
    """32-byte target: big-endian cutoff, then sixteen 0xff bytes."""
    return cutoff(leading_zeros).to_bytes(HALF_SIZE, "big") + b"\xff" * HALF_SIZE


def expected_attempts(leading_zeros: int) -> int:
    """Mean number of attempts a find needs: 2^(4·d), capped at 2^128."""
    return 1 << min(zero_bits(leading_zeros), HALF_BITS)


# ─────────────────────────────────────────────────────────────────────────────
# Target value object
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class Target:
    """
    Immutable 32-byte target. Ordering follows the big-endian integer value
    (lexicographic order of equal-length byte strings).
    """

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, bytes) or len(self.raw) != TARGET_SIZE:
            raise ValueError(f"target must be exactly {TARGET_SIZE} bytes")

    @classmethod
    def from_leading_zeros(cls, leading_zeros: int) -> "Target":
        return cls(encode_target(leading_zeros))

    @classmethod
    def default(cls) -> "Target":
        return cls.from_leading_zeros(DEFAULT_LEADING_ZEROS)

    def as_int(self) -> int:
        return int.from_bytes(self.raw, "big")

    def hex(self) -> str:
        return self.raw.hex()

    def cutoff(self) -> int:
        """Upper half as a 128-bit integer."""
        return int.from_bytes(self.raw[:HALF_SIZE], "big")

    def leading_zero_bits(self) -> int:
        """Leading zero bits of the upper half."""
        return HALF_BITS - self.cutoff().bit_length()

    def is_met_by(self, digest: bytes) -> bool:
        """True iff `digest` (256-bit big-endian) is strictly below the target."""
        if len(digest) != TARGET_SIZE:
            raise ValueError(f"digest must be exactly {TARGET_SIZE} bytes")
        return int.from_bytes(digest, "big") < self.as_int()

    def __repr__(self) -> str:
        return f"Target({self.hex()})"


__all__ = [
    "TARGET_SIZE",
    "HALF_BITS",
    "BITS_PER_HEX_DIGIT",
    "DEFAULT_LEADING_ZEROS",
    "validate_leading_zeros",
    "zero_bits",
    "cutoff",
    "encode_target",
    "expected_attempts",
    "Target",
]
