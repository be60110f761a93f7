from __future__ import annotations

"""
Hex helpers with a typed error taxonomy.

`decode_to_array` decodes into a fixed-size buffer and reports *why* a
string was rejected (see `pow_account.errors`). Checks run in a fixed
order: odd length, then wrong length, then the first invalid character.
"""

import binascii
import re
from typing import Union

from .errors import InvalidHexCharacter, InvalidStringLength, OddLength

TextLike = Union[str, bytes, bytearray, memoryview]

_NON_HEX = re.compile(r"[^0-9a-fA-F]")


def encode(data: bytes | bytearray | memoryview) -> str:
    """Lower-case hex of `data`, no prefix."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("encode expects bytes-like input")
    return binascii.hexlify(bytes(data)).decode("ascii")


def _as_text(s: TextLike) -> str:
    if isinstance(s, (bytes, bytearray, memoryview)):
        # one byte per character, so indices match the raw input
        return bytes(s).decode("latin-1")
    if not isinstance(s, str):
        raise TypeError("expected str or bytes-like hex input")
    return s


def decode_to_array(s: TextLike, size: int) -> bytes:
    """
    Decode case-insensitive hex `s` into exactly `size` bytes.

    Raises
    ------
    OddLength
        `s` has an odd number of characters.
    InvalidStringLength
        `s` decodes to a byte count other than `size`.
    InvalidHexCharacter
        `s` contains a character outside [0-9a-fA-F]; the first one is reported.
    """
    text = _as_text(s)
    if len(text) % 2:
        raise OddLength(len(text))
    if len(text) // 2 != size:
        raise InvalidStringLength(expected=size, actual=len(text) // 2)
    m = _NON_HEX.search(text)
    if m is not None:
        raise InvalidHexCharacter(m.group(0), m.start())
    return binascii.unhexlify(text)


__all__ = ["encode", "decode_to_array"]
