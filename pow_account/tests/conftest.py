"""Shared fixtures: scripted entropy streams and a pass-through digest."""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List

import pytest

from pow_account.finder import HashFinder


class ScriptedEntropy:
    """Entropy source that replays fixed buffers, then raises if exhausted."""

    def __init__(self, buffers: Iterable[bytes]) -> None:
        self._it: Iterator[bytes] = iter(list(buffers))
        self.calls = 0

    def __call__(self) -> bytes:
        self.calls += 1
        try:
            return next(self._it)
        except StopIteration:
            raise AssertionError("scripted entropy exhausted") from None


def identity_digest(data: bytes) -> bytes:
    return bytes(data)


@pytest.fixture
def scripted():
    return ScriptedEntropy


@pytest.fixture
def passthrough_finder():
    """Build a finder whose digest is the identity, fed by the given buffers."""

    def _make(leading_zeros: int, buffers: List[bytes], variant: str = "single") -> HashFinder:
        return HashFinder.new(
            leading_zeros,
            variant,
            entropy=ScriptedEntropy(buffers),
            digest=identity_digest,
        )

    return _make


@pytest.fixture(autouse=True)
def _clean_pow_env(monkeypatch):
    for name in (
        "POW_ACCOUNT_LEADING_ZEROS",
        "POW_ACCOUNT_VARIANT",
        "POW_ACCOUNT_LOG_LEVEL",
        "POW_ACCOUNT_BENCH_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_package_log_level():
    # the CLI callback sets the package logger level
    logger = logging.getLogger("pow_account")
    level = logger.level
    yield
    logger.setLevel(level)
