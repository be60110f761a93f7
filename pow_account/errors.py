"""
pow-account errors

Structured exceptions raised by the proof-of-work primitive. Each carries a
stable integer code so callers (HTTP handlers, CLIs, tests) can classify a
failure without string-matching.

Hierarchy
---------
- PowError                  : base class.
- DifficultyError           : difficulty is not a non-negative int.
- EntropyError              : entropy source yielded a malformed buffer.
- HexDecodeError            : hex text could not be decoded; one of
    - InvalidHexCharacter   : character outside [0-9a-fA-F] (with index)
    - OddLength             : odd number of hex characters
    - InvalidStringLength   : decodes to the wrong number of bytes

Decode errors compare equal by kind and fields, so a test can assert
``err == InvalidHexCharacter("+", 2)``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(IntEnum):
    """Stable error codes for pow-account exceptions."""
    POW_GENERIC           = 3000
    DIFFICULTY            = 3001
    ENTROPY               = 3002
    HEX_INVALID_CHARACTER = 3101
    HEX_ODD_LENGTH        = 3102
    HEX_INVALID_LENGTH    = 3103


class PowError(Exception):
    """
    Base class for pow-account exceptions.

    ``message`` is the human-readable reason, ``code`` the stable
    `ErrorCode`, and ``context`` the fields that pin down the failure (the
    offending character and its position, the buffer sizes involved). A
    verifier that rejects a client's claimed value can return ``to_dict()``
    as-is.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | int = ErrorCode.POW_GENERIC,
        context: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: int = int(code)
        self.context: Dict[str, Any] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause  # type: ignore[attr-defined]

    @property
    def kind(self) -> str:
        """Class name of the error, e.g. ``"OddLength"``."""
        return type(self).__name__

    @property
    def is_decode_error(self) -> bool:
        """True for malformed hex input, as opposed to a bad difficulty or entropy source."""
        return ErrorCode.HEX_INVALID_CHARACTER <= self.code <= ErrorCode.HEX_INVALID_LENGTH

    def __str__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.kind}[{self.code}]: {self.message}" + (f" ({fields})" if fields else "")

    def to_dict(self) -> Dict[str, Any]:
        """JSON body for a rejected value: kind, code, message and any context fields."""
        out: Dict[str, Any] = {
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
        }
        if self.context:
            out["context"] = self.context
        return out


class DifficultyError(PowError, ValueError):
    """Raised when a difficulty (leading zero hex digits) is not a non-negative int."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"difficulty must be a non-negative integer, got {value!r}",
            code=ErrorCode.DIFFICULTY,
            context={"value": repr(value)},
        )
        self.value = value


class EntropyError(PowError):
    """Raised when an entropy source returns something other than the expected buffer."""

    def __init__(self, message: str, *, expected: int, actual: Optional[int] = None) -> None:
        ctx: Dict[str, Any] = {"expected": expected}
        if actual is not None:
            ctx["actual"] = actual
        super().__init__(message, code=ErrorCode.ENTROPY, context=ctx)
        self.expected = expected
        self.actual = actual


# ─────────────────────────────────────────────────────────────────────────────
# Hex decoding
# ─────────────────────────────────────────────────────────────────────────────

class HexDecodeError(PowError, ValueError):
    """Base class for hex decoding failures."""

    def _key(self) -> tuple:
        return (type(self), self.code)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HexDecodeError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class InvalidHexCharacter(HexDecodeError):
    """A character outside the hex alphabet was found at ``index``."""

    def __init__(self, c: str, index: int) -> None:
        super().__init__(
            f"invalid character {c!r} at position {index}",
            code=ErrorCode.HEX_INVALID_CHARACTER,
            context={"c": c, "index": index},
        )
        self.c = c
        self.index = index

    def _key(self) -> tuple:
        return (type(self), self.c, self.index)

    def __repr__(self) -> str:
        return f"InvalidHexCharacter(c={self.c!r}, index={self.index})"


class OddLength(HexDecodeError):
    """The hex text has an odd number of characters."""

    def __init__(self, length: Optional[int] = None) -> None:
        super().__init__(
            "odd number of digits",
            code=ErrorCode.HEX_ODD_LENGTH,
            context={"length": length} if length is not None else None,
        )
        self.length = length


class InvalidStringLength(HexDecodeError):
    """The hex text does not decode to the required number of bytes."""

    def __init__(self, expected: Optional[int] = None, actual: Optional[int] = None) -> None:
        ctx: Dict[str, Any] = {}
        if expected is not None:
            ctx["expected"] = expected
        if actual is not None:
            ctx["actual"] = actual
        super().__init__(
            "invalid string length",
            code=ErrorCode.HEX_INVALID_LENGTH,
            context=ctx,
        )
        self.expected = expected
        self.actual = actual


__all__ = [
    "ErrorCode",
    "PowError",
    "DifficultyError",
    "EntropyError",
    "HexDecodeError",
    "InvalidHexCharacter",
    "OddLength",
    "InvalidStringLength",
]
