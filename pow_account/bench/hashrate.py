"""
hashrate.py
===========

Micro-benchmark for the finder's inner loop.

What it measures
----------------
- Raw attempt throughput (attempts/sec): entropy sample → BLAKE2s, plus the
  re-hash for the double variant.
- For several difficulties (leading zero hex digits), the expected number of
  attempts 2^(4·d) and the expected seconds per find at the measured rate.
- How many of the measured attempts actually cleared each target, against
  the expected count.

Notes
-----
- Single-threaded on purpose, like `find` itself. Useful as a relative
  number across machines and variants, and for choosing a difficulty.
- A hard attempt cap keeps very fast machines from running long.

Usage
-----
    python -m pow_account.bench.hashrate
    # or programmatically:
    from pow_account.bench.hashrate import run
    stats = run(seconds=1.0, leading_zeros=[1, 2, 3, 4, 5])
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..digest import DigestFn, blake2s_256
from ..entropy import EntropySource, system_entropy
from ..finder import Variant
from ..target import Target, expected_attempts

DEFAULT_LEADING_ZEROS = (1, 2, 3, 4, 5, 6, 8)


@dataclass
class BenchConfig:
    seconds: float = 2.0
    max_attempts: int = 5_000_000
    variant: Variant = Variant.SINGLE
    leading_zeros: List[int] = field(default_factory=lambda: list(DEFAULT_LEADING_ZEROS))
    entropy: EntropySource = system_entropy
    digest: DigestFn = blake2s_256


def _run_inner(cfg: BenchConfig) -> dict:
    targets = [Target.from_leading_zeros(d).as_int() for d in cfg.leading_zeros]
    observed = [0] * len(targets)
    double = cfg.variant is Variant.DOUBLE

    entropy = cfg.entropy
    digest = cfg.digest

    t0 = time.perf_counter()
    deadline = t0 + max(0.01, cfg.seconds)
    total = 0

    while total < cfg.max_attempts:
        # amortize clock reads over a small batch
        for _ in range(1024):
            d = digest(entropy())
            if double:
                d = digest(d)
            x = int.from_bytes(d, "big")
            for i, t in enumerate(targets):
                if x < t:
                    observed[i] += 1
            total += 1
            if total >= cfg.max_attempts:
                break
        if time.perf_counter() >= deadline:
            break

    dt = max(1e-9, time.perf_counter() - t0)
    aps = total / dt

    results = []
    for i, d in enumerate(cfg.leading_zeros):
        mean = expected_attempts(d)
        results.append(
            {
                "leading_zeros": d,
                "expected_attempts": mean,
                "observed": observed[i],
                "expected": total / mean,
                "expected_seconds": mean / aps if aps > 0 else float("inf"),
            }
        )

    return {
        "seconds": dt,
        "total_attempts": total,
        "attempts_per_sec": aps,
        "variant": cfg.variant.value,
        "results": results,
        "env": {
            "python": sys.version.split()[0],
            "platform": sys.platform,
        },
    }


def run(
    seconds: float = 2.0,
    leading_zeros: Optional[Iterable[int]] = None,
    variant: Variant | str = Variant.SINGLE,
    max_attempts: int = 5_000_000,
    entropy: Optional[EntropySource] = None,
    digest: Optional[DigestFn] = None,
) -> dict:
    """
    Run the micro-benchmark.

    Args:
        seconds: target duration (best-effort).
        leading_zeros: difficulties to report on.
        variant: single or double hashing per attempt.
        max_attempts: hard cap on attempts.
        entropy / digest: injectable for tests.

    Returns:
        Dict with throughput and per-difficulty expected attempts and find times.
    """
    cfg = BenchConfig(
        seconds=seconds,
        max_attempts=max_attempts,
        variant=Variant.parse(variant),
        entropy=entropy or system_entropy,
        digest=digest or blake2s_256,
    )
    if leading_zeros is not None:
        cfg.leading_zeros = list(leading_zeros)
    return _run_inner(cfg)


def _fmt_rate(x: float) -> str:
    if x >= 1e9:
        return f"{x/1e9:.2f} G/s"
    if x >= 1e6:
        return f"{x/1e6:.2f} M/s"
    if x >= 1e3:
        return f"{x/1e3:.2f} k/s"
    return f"{x:.2f} /s"


def _fmt_seconds(s: float) -> str:
    if s < 1.0:
        return f"{s*1e3:.1f} ms"
    if s < 3600:
        return f"{s:.1f} s"
    if s < 86400 * 365:
        return f"{s/3600:.1f} h"
    return f"{s/(86400*365):.2e} y"


def format_report(out: dict) -> str:
    lines = [
        "pow-account hashrate micro-bench",
        f"  variant: {out['variant']}   duration: {out['seconds']:.3f}s   "
        f"attempts: {out['total_attempts']:,}   throughput: {_fmt_rate(out['attempts_per_sec'])}",
        f"  python: {out['env']['python']}   platform: {out['env']['platform']}",
        "",
        f"{'zeros':>5}  {'E[attempts]':>14}  {'obs':>8}  {'exp':>10}  {'E[time]':>10}",
    ]
    for r in out["results"]:
        lines.append(
            f"{r['leading_zeros']:5d}  "
            f"{r['expected_attempts']:14.3e}  "
            f"{r['observed']:8d}  "
            f"{r['expected']:10.2f}  "
            f"{_fmt_seconds(r['expected_seconds']):>10}"
        )
    return "\n".join(lines)


def _main(argv: List[str]) -> int:
    seconds = float(os.getenv("POW_ACCOUNT_BENCH_SECONDS", "2.0"))
    variant = os.getenv("POW_ACCOUNT_VARIANT", "single")
    try:
        out = run(seconds=seconds, variant=variant)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2
    print(format_report(out))
    return 0


if __name__ == "__main__":
    raise SystemExit(_main(sys.argv))
