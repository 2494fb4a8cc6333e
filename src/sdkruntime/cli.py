"""Diagnostics entrypoint: print the backoff schedule of the configured policy."""

from __future__ import annotations

import argparse
import logging as py_logging
import random
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .config import RetrySettings, load_settings
from .errors import ErrorCode, SdkRuntimeError, user_facing_error
from .logging import configure_logging, default_log_path
from .retry.context import AttemptContext
from .retry.policy import RetryPolicy

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _attempts_type(value: str) -> int:
    try:
        attempts = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--attempts must be an integer") from exc
    if attempts < 0:
        raise argparse.ArgumentTypeError("--attempts cannot be negative")
    return attempts


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sdkruntime")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [retry] table")
    parser.add_argument(
        "--attempts",
        type=_attempts_type,
        default=None,
        help="Number of retries to show (defaults to the policy's num_retries)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for jittered strategies")
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def build_policy(settings: RetrySettings, *, seed: int | None = None) -> RetryPolicy:
    return settings.to_policy(rng=None if seed is None else random.Random(seed))


def backoff_schedule(policy: RetryPolicy, attempts: int) -> list[int]:
    return [
        policy.compute_delay_before_next_retry(AttemptContext(retries_attempted=retry))
        for retry in range(attempts)
    ]


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    stdout = out or sys.stdout
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    log_path = namespace.log_file.expanduser() if namespace.log_file is not None else default_log_path()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        settings = load_settings(namespace.config)
        policy = build_policy(settings, seed=namespace.seed)
        attempts = settings.num_retries if namespace.attempts is None else namespace.attempts
        logger.debug("Computing %s delays with backoff=%s", attempts, settings.backoff)
        print(f"backoff={settings.backoff} num_retries={settings.num_retries}", file=stdout)
        for retry, delay in enumerate(backoff_schedule(policy, attempts), start=1):
            print(f"retry {retry}: {delay} ms", file=stdout)
        return int(ErrorCode.SUCCESS)
    except SdkRuntimeError as exc:
        logger.error(
            "Handled SdkRuntimeError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
