"""
pow-account: command-line front end for the proof-of-work finder.

Commands:
  find         search for a value meeting the difficulty and print it
  check HASH   test a hex value (exit 0 = meets target, 1 = does not, 2 = bad input)
  target       print the target for a difficulty and its expected attempts
  bench        measure attempts/sec and expected find times
  show-config  print the effective configuration

Difficulty and variant default to POW_ACCOUNT_LEADING_ZEROS and
POW_ACCOUNT_VARIANT (see `pow_account.config`).

Examples:
  pow-account find --leading-zeros 4
  pow-account check 0000a1...ff --leading-zeros 4
  pow-account --log-level debug find --variant double --json
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import typer

from .bench import hashrate
from .config import LEADING_ZEROS_ENV, LOG_LEVEL_ENV, VARIANT_ENV, FinderConfig
from .errors import HexDecodeError
from .target import Target, expected_attempts

app = typer.Typer(
    name="pow-account",
    help="Find and check proof-of-work values with a leading-zero difficulty.",
    no_args_is_help=True,
    add_completion=False,
)

log = logging.getLogger("pow_account.cli")

EXIT_MISS = 1
EXIT_BAD_INPUT = 2


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("pow_account").setLevel(level.upper())


def _load_config(**overrides: object) -> FinderConfig:
    try:
        return FinderConfig.from_env(overrides=overrides)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=EXIT_BAD_INPUT)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help=f"Log level (default: ${LOG_LEVEL_ENV} or INFO)"),
) -> None:
    """Proof-of-work finder CLI."""
    cfg = _load_config(log_level=log_level)
    _configure_logging(cfg.log_level)
    ctx.obj = cfg


@app.command("find")
def find(
    leading_zeros: Optional[int] = typer.Option(None, "--leading-zeros", "-z", help="Required leading zero hex digits", envvar=LEADING_ZEROS_ENV),
    variant: Optional[str] = typer.Option(None, "--variant", help="single|double", envvar=VARIANT_ENV),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object instead of the bare value"),
) -> None:
    """Search for a value that clears the target and print it as hex."""
    cfg = _load_config(leading_zeros=leading_zeros, variant=variant)
    finder = cfg.build_finder()
    log.info("searching: leading_zeros=%d variant=%s", cfg.leading_zeros, cfg.variant.value)
    proof = finder.find_proof()
    if as_json:
        typer.echo(json.dumps(proof.to_dict()))
    else:
        typer.echo(proof.value_hex)


@app.command("check")
def check(
    value: str = typer.Argument(..., help="64 hex characters"),
    leading_zeros: Optional[int] = typer.Option(None, "--leading-zeros", "-z", help="Required leading zero hex digits", envvar=LEADING_ZEROS_ENV),
    variant: Optional[str] = typer.Option(None, "--variant", help="single|double", envvar=VARIANT_ENV),
) -> None:
    """Check a hex value against the target."""
    cfg = _load_config(leading_zeros=leading_zeros, variant=variant)
    finder = cfg.build_finder()
    try:
        ok = finder.check(value)
    except HexDecodeError as e:
        typer.echo(f"error: {e.message}", err=True)
        raise typer.Exit(code=EXIT_BAD_INPUT)
    typer.echo("true" if ok else "false")
    if not ok:
        raise typer.Exit(code=EXIT_MISS)


@app.command("target")
def target(
    leading_zeros: Optional[int] = typer.Option(None, "--leading-zeros", "-z", help="Required leading zero hex digits", envvar=LEADING_ZEROS_ENV),
) -> None:
    """Print the 32-byte target and the expected attempts per find."""
    cfg = _load_config(leading_zeros=leading_zeros)
    t = Target.from_leading_zeros(cfg.leading_zeros)
    typer.echo(
        f"Target: {t.hex()}\n"
        f"Leading zero bits: {t.leading_zero_bits()}\n"
        f"Expected attempts: {expected_attempts(cfg.leading_zeros)}"
    )


@app.command("bench")
def bench(
    seconds: Optional[float] = typer.Option(None, "--seconds", help="Benchmark duration"),
    variant: Optional[str] = typer.Option(None, "--variant", help="single|double", envvar=VARIANT_ENV),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON results"),
) -> None:
    """Measure attempts/sec and estimate find times per difficulty."""
    cfg = _load_config(bench_seconds=seconds, variant=variant)
    out = hashrate.run(seconds=cfg.bench_seconds, variant=cfg.variant)
    if as_json:
        typer.echo(json.dumps(out))
    else:
        typer.echo(hashrate.format_report(out))


@app.command("show-config")
def show_config(ctx: typer.Context) -> None:
    """Display the effective configuration."""
    cfg = ctx.obj or _load_config()
    typer.echo(
        f"Leading zeros: {cfg.leading_zeros}\n"
        f"Variant: {cfg.variant.value}\n"
        f"Target: {Target.from_leading_zeros(cfg.leading_zeros).hex()}\n"
        f"Log level: {cfg.log_level}\n"
        f"Bench seconds: {cfg.bench_seconds}"
    )


if __name__ == "__main__":  # pragma: no cover
    app()
