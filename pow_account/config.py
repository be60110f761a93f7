from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .finder import HashFinder, Variant
from .target import DEFAULT_LEADING_ZEROS

LEADING_ZEROS_ENV = "POW_ACCOUNT_LEADING_ZEROS"
VARIANT_ENV = "POW_ACCOUNT_VARIANT"
LOG_LEVEL_ENV = "POW_ACCOUNT_LOG_LEVEL"
BENCH_SECONDS_ENV = "POW_ACCOUNT_BENCH_SECONDS"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


@dataclass
class FinderConfig:
    """
    Settings for a hosting application or the CLI.

    Environment variables (all optional):

      POW_ACCOUNT_LEADING_ZEROS=int       (default: 5)
      POW_ACCOUNT_VARIANT=single|double   (default: single)
      POW_ACCOUNT_LOG_LEVEL=level         (default: INFO)
      POW_ACCOUNT_BENCH_SECONDS=float     (default: 2.0)

    Explicit overrides passed to `from_env` win over the environment.
    """

    leading_zeros: int = DEFAULT_LEADING_ZEROS
    variant: Variant = Variant.SINGLE
    log_level: str = "INFO"
    bench_seconds: float = 2.0

    @classmethod
    def from_env(cls, *, overrides: Optional[Dict[str, Any]] = None) -> "FinderConfig":
        overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

        raw_zeros = overrides.get("leading_zeros", _env(LEADING_ZEROS_ENV, str(DEFAULT_LEADING_ZEROS)))
        try:
            leading_zeros = int(raw_zeros)
        except (TypeError, ValueError):
            raise ValueError(f"leading_zeros must be an integer, got {raw_zeros!r}") from None

        raw_bench = overrides.get("bench_seconds", _env(BENCH_SECONDS_ENV, "2.0"))
        try:
            bench_seconds = float(raw_bench)
        except (TypeError, ValueError):
            raise ValueError(f"bench_seconds must be a number, got {raw_bench!r}") from None

        cfg = cls(
            leading_zeros=leading_zeros,
            variant=Variant.parse(overrides.get("variant", _env(VARIANT_ENV, Variant.SINGLE.value))),
            log_level=str(overrides.get("log_level", _env(LOG_LEVEL_ENV, "INFO"))).upper(),
            bench_seconds=bench_seconds,
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if isinstance(self.leading_zeros, bool) or not isinstance(self.leading_zeros, int):
            raise ValueError("leading_zeros must be an integer")
        if self.leading_zeros < 0:
            raise ValueError("leading_zeros must be >= 0")
        self.variant = Variant.parse(self.variant)
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")
        if self.bench_seconds <= 0:
            raise ValueError("bench_seconds must be positive")

    def build_finder(self) -> HashFinder:
        return HashFinder.new(self.leading_zeros, self.variant)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["variant"] = self.variant.value
        return out


__all__ = [
    "FinderConfig",
    "LEADING_ZEROS_ENV",
    "VARIANT_ENV",
    "LOG_LEVEL_ENV",
    "BENCH_SECONDS_ENV",
]
