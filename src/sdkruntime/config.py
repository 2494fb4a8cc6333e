"""Retry settings loaded from TOML."""

from __future__ import annotations

import os
import random
import sys
from contextlib import suppress
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from sdkruntime.retry.backoff import (
    BackoffStrategy,
    EqualJitterBackoffStrategy,
    FixedDelayBackoffStrategy,
    FullJitterBackoffStrategy,
)
from sdkruntime.retry.conditions import (
    OrRetryCondition,
    RetryOnErrorCodeCondition,
    RetryOnExceptionsCondition,
    RetryOnStatusCodeCondition,
)
from sdkruntime.retry.defaults import (
    BASE_DELAY_MS,
    DEFAULT_NUM_RETRIES,
    MAX_BACKOFF_MS,
    NO_RETRY_DELAY_MS,
    RETRYABLE_ERROR_CODES,
    RETRYABLE_STATUS_CODES,
)
from sdkruntime.retry.policy import RetryPolicy

DEFAULT_CONFIG_PATH = Path("~/.config/sdkruntime/config.toml").expanduser()
MAX_RETRIES_ENV = "SDKRUNTIME_MAX_RETRIES"

BackoffKind = Literal["full_jitter", "equal_jitter", "fixed"]
_VALID_BACKOFF = {"full_jitter", "equal_jitter", "fixed"}


class RetrySettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    num_retries: int = Field(default=DEFAULT_NUM_RETRIES, ge=0)
    backoff: BackoffKind = "full_jitter"
    base_delay_ms: int = Field(default=BASE_DELAY_MS, ge=0)
    max_backoff_ms: int = Field(default=MAX_BACKOFF_MS, ge=0)
    fixed_delay_ms: int = Field(default=NO_RETRY_DELAY_MS, ge=0)
    retryable_status_codes: list[int] = Field(default_factory=lambda: sorted(RETRYABLE_STATUS_CODES))
    retryable_error_codes: list[str] = Field(default_factory=lambda: sorted(RETRYABLE_ERROR_CODES))

    @field_validator("backoff")
    @classmethod
    def _validate_backoff(cls, value: str) -> str:
        if value not in _VALID_BACKOFF:
            raise ValueError(f"Invalid backoff strategy: {value}")
        return value

    def to_backoff_strategy(self, *, rng: random.Random | None = None) -> BackoffStrategy:
        if self.backoff == "fixed":
            return FixedDelayBackoffStrategy(self.fixed_delay_ms)
        if self.backoff == "equal_jitter":
            return EqualJitterBackoffStrategy(self.base_delay_ms, self.max_backoff_ms, self.num_retries, rng=rng)
        return FullJitterBackoffStrategy(self.base_delay_ms, self.max_backoff_ms, self.num_retries, rng=rng)

    def to_policy(self, *, rng: random.Random | None = None) -> RetryPolicy:
        condition = OrRetryCondition(
            RetryOnStatusCodeCondition(self.retryable_status_codes),
            RetryOnErrorCodeCondition(self.retryable_error_codes),
            RetryOnExceptionsCondition(),
        )
        return (
            RetryPolicy.builder()
            .num_retries(self.num_retries)
            .backoff_strategy(self.to_backoff_strategy(rng=rng))
            .retry_condition(condition)
            .build()
        )


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _non_negative_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def _normalize_status_codes(value: object) -> list[int] | None:
    if not isinstance(value, list):
        return None
    codes = {item for item in value if not isinstance(item, bool) and isinstance(item, int) and 100 <= item <= 599}
    return sorted(codes)


def _normalize_error_codes(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    codes = {item.strip() for item in value if isinstance(item, str) and item.strip()}
    return sorted(codes)


def _sanitize(raw: dict[str, object]) -> RetrySettings:
    settings = RetrySettings()

    for name in ("num_retries", "base_delay_ms", "max_backoff_ms", "fixed_delay_ms"):
        value = _non_negative_int(raw.get(name))
        if value is not None:
            setattr(settings, name, value)

    backoff = raw.get("backoff", settings.backoff)
    if isinstance(backoff, str) and backoff.strip() in _VALID_BACKOFF:
        settings.backoff = cast(BackoffKind, backoff.strip())

    status_codes = _normalize_status_codes(raw.get("retryable_status_codes"))
    if status_codes is not None:
        settings.retryable_status_codes = status_codes

    error_codes = _normalize_error_codes(raw.get("retryable_error_codes"))
    if error_codes is not None:
        settings.retryable_error_codes = error_codes

    env_retries = os.getenv(MAX_RETRIES_ENV, "").strip()
    if env_retries.isdigit():
        settings.num_retries = int(env_retries)

    return settings


def load_settings(path: str | Path | None = None) -> RetrySettings:
    resolved = get_config_path(path)
    raw: object = {}
    if resolved.exists():
        try:
            with resolved.open("rb") as handle:
                raw = tomllib.load(handle).get("retry", {})
        except (tomllib.TOMLDecodeError, OSError):
            raw = {}
    if not isinstance(raw, dict):
        raw = {}
    return _sanitize(raw)


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_scalar(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def save_settings(settings: RetrySettings, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    lines = ["[retry]"]
    for name in RetrySettings.model_fields:
        lines.append(f"{name} = {_toml_scalar(getattr(settings, name))}")
    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
