"""
pow-account: client-side proof of work with a leading-zero difficulty.

A client spends measurable effort finding a 32-byte value whose BLAKE2s
digest (or the value itself) sits below a target derived from a count of
leading zero hex digits; a server checks the claimed value cheaply.

    from pow_account import HashFinder, encode

    value = HashFinder.new(4).find()
    assert HashFinder.new(4).check(encode(value))
"""
from __future__ import annotations

from .digest import DIGEST_SIZE, blake2s_256
from .entropy import ENTROPY_SIZE, Entropy, system_entropy
from .errors import (
    DifficultyError,
    EntropyError,
    ErrorCode,
    HexDecodeError,
    InvalidHexCharacter,
    InvalidStringLength,
    OddLength,
    PowError,
)
from .finder import HashFinder, Proof, Variant
from .hexcodec import decode_to_array, encode
from .target import DEFAULT_LEADING_ZEROS, Target, encode_target, expected_attempts
from .version import __version__

__all__ = [
    "HashFinder",
    "Proof",
    "Variant",
    "Target",
    "Entropy",
    "encode_target",
    "expected_attempts",
    "encode",
    "decode_to_array",
    "blake2s_256",
    "system_entropy",
    "DEFAULT_LEADING_ZEROS",
    "DIGEST_SIZE",
    "ENTROPY_SIZE",
    "ErrorCode",
    "PowError",
    "DifficultyError",
    "EntropyError",
    "HexDecodeError",
    "InvalidHexCharacter",
    "OddLength",
    "InvalidStringLength",
    "__version__",
]
