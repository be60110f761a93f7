"""
Version helpers for pow-account.

Prefers the installed distribution's metadata; falls back to BASE_VERSION
when running from a source checkout that was never installed.
"""
from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Bump this when making intentional, source-level releases.
BASE_VERSION = "0.2.0"

_PKG_NAME = "pow-account"


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        return _pkg_version(_PKG_NAME)
    except PackageNotFoundError:
        return BASE_VERSION


__version__ = get_version()
__all__ = ["__version__", "get_version", "BASE_VERSION"]
