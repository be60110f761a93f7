"""Micro-benchmarks for pow-account. Each module exposes ``run(**kwargs) -> dict``."""

from __future__ import annotations

__all__ = ["hashrate"]
