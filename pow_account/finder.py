"""
HashFinder: search for / verify values whose digest clears a target.

Two variants, fixed at construction:

- ``Variant.SINGLE`` (default): the found value is BLAKE2s(entropy) and is
  itself compared against the target. ``check(hex)`` compares the decoded
  value directly.
- ``Variant.DOUBLE``: the found value (the *origin*) is BLAKE2s(entropy),
  but what is compared is BLAKE2s(origin). The origin need not clear the
  target; a verifier recomputes the re-hash from the claimed origin and
  never learns the entropy.

Usage
-----
    from pow_account import HashFinder, encode

    value = HashFinder.new(4).find()
    HashFinder.new(4).check(encode(value))     # -> True
    HashFinder.new(4).check("zz")              # raises OddLength

`find` is an unbounded loop (expected 2^(4·d) attempts) with no cancellation
hook; callers that need bounded latency must cap it themselves. A finder is
immutable and may be shared between threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .digest import DIGEST_SIZE, DigestFn, blake2s_256
from .entropy import Entropy, EntropySource, system_entropy
from .errors import InvalidStringLength
from .hexcodec import TextLike, decode_to_array, encode
from .target import DEFAULT_LEADING_ZEROS, Target

log = logging.getLogger("pow_account.finder")


class Variant(str, Enum):
    """Which digest is compared against the target."""

    SINGLE = "single"
    DOUBLE = "double"

    @classmethod
    def parse(cls, value: "Variant | str") -> "Variant":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"unknown variant {value!r} (expected one of: "
                + ", ".join(v.value for v in cls)
                + ")"
            ) from None


@dataclass(frozen=True)
class Proof:
    """Result of a successful search."""

    value: bytes
    target_hash: bytes
    attempts: int
    variant: Variant

    @property
    def value_hex(self) -> str:
        return encode(self.value)

    @property
    def target_hash_hex(self) -> str:
        return encode(self.target_hash)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value_hex,
            "targetHash": self.target_hash_hex,
            "attempts": self.attempts,
            "variant": self.variant.value,
        }


@dataclass(frozen=True, order=True)
class HashFinder:
    """
    Finds and checks 32-byte values against a leading-zero-hex-digit target.

    Equality and ordering follow ``(target, variant)``. The entropy source
    and digest function take no part in comparisons.
    """

    target: Target
    variant: Variant = Variant.SINGLE
    entropy: EntropySource = field(default=system_entropy, compare=False, repr=False)
    digest: DigestFn = field(default=blake2s_256, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variant", Variant.parse(self.variant))

    # ── construction ────────────────────────────────────────────────────────

    @classmethod
    def new(
        cls,
        leading_zeros: int,
        variant: Variant | str = Variant.SINGLE,
        *,
        entropy: Optional[EntropySource] = None,
        digest: Optional[DigestFn] = None,
    ) -> "HashFinder":
        """Finder requiring `leading_zeros` leading zero hex digits."""
        return cls(
            Target.from_leading_zeros(leading_zeros),
            Variant.parse(variant),
            entropy or system_entropy,
            digest or blake2s_256,
        )

    @classmethod
    def default(
        cls,
        variant: Variant | str = Variant.SINGLE,
        *,
        entropy: Optional[EntropySource] = None,
        digest: Optional[DigestFn] = None,
    ) -> "HashFinder":
        """Finder at the default difficulty (five leading zero hex digits)."""
        return cls.new(DEFAULT_LEADING_ZEROS, variant, entropy=entropy, digest=digest)

    # ── comparisons ─────────────────────────────────────────────────────────

    def meets_target(self, digest: bytes) -> bool:
        """True iff `digest` is strictly below the target."""
        return self.target.is_met_by(digest)

    def _compared(self, value: bytes) -> bytes:
        if self.variant is Variant.DOUBLE:
            return self.digest(value)
        return value

    # ── search ──────────────────────────────────────────────────────────────

    def find_proof(self) -> Proof:
        """Search until a value clears the target; report the attempt count too."""
        attempts = 0
        while True:
            attempts += 1
            value = Entropy.new(self.entropy).hash(self.digest)
            compared = self._compared(value)
            if self.meets_target(compared):
                log.debug(
                    "found value after %d attempts (variant=%s target=%s)",
                    attempts,
                    self.variant.value,
                    self.target.hex(),
                )
                return Proof(value, compared, attempts, self.variant)

    def find(self) -> bytes:
        """Search until a value clears the target and return the 32-byte value."""
        return self.find_proof().value

    # ── verification ────────────────────────────────────────────────────────

    def check_bytes(self, value: bytes | bytearray | memoryview) -> bool:
        raw = bytes(value)
        if len(raw) != DIGEST_SIZE:
            raise InvalidStringLength(expected=DIGEST_SIZE, actual=len(raw))
        return self.meets_target(self._compared(raw))

    def check(self, value_hex: TextLike) -> bool:
        """
        Decode `value_hex` (64 hex characters, any case) and test it.

        Returns False when the value does not clear the target. Malformed
        input raises the matching `HexDecodeError` subclass instead
        (`InvalidHexCharacter`, `OddLength` or `InvalidStringLength`).
        """
        return self.check_bytes(decode_to_array(value_hex, DIGEST_SIZE))


__all__ = ["HashFinder", "Proof", "Variant"]
