"""Delay computation between retry attempts."""

from __future__ import annotations

import random
from typing import Protocol

from sdkruntime.errors import ConfigurationError
from sdkruntime.retry.context import AttemptContext
from sdkruntime.retry.defaults import BASE_DELAY_MS, DEFAULT_NUM_RETRIES, MAX_BACKOFF_MS, NO_RETRY_DELAY_MS


class BackoffStrategy(Protocol):
    def compute_delay_before_next_retry(self, context: AttemptContext) -> int:
        """Milliseconds to wait. Only consulted once a retry has been authorized."""
        ...


def exponential_delay(retries_attempted: int, base_delay: int, max_backoff: int, max_retries: int) -> int:
    """``min(2 ** min(attempt, max_retries) * base, cap)``.

    The exponent stops growing at ``max_retries`` so the delay saturates at the
    cap instead of doubling without bound.
    """
    exponent = min(max(retries_attempted, 0), max_retries)
    return min((1 << exponent) * base_delay, max_backoff)


def _require_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise ConfigurationError(
                f"Backoff setting {name} cannot be negative (got {value}).",
                hint="Use zero or a positive number of milliseconds.",
            )


class FixedDelayBackoffStrategy:
    def __init__(self, delay: int) -> None:
        _require_non_negative(delay=delay)
        self.delay = delay

    def compute_delay_before_next_retry(self, context: AttemptContext) -> int:
        del context
        return self.delay

    def __repr__(self) -> str:
        return f"FixedDelayBackoffStrategy(delay={self.delay})"


class _ExponentialBackoff:
    def __init__(
        self,
        base_delay: int = BASE_DELAY_MS,
        max_backoff_time: int = MAX_BACKOFF_MS,
        num_retries: int = DEFAULT_NUM_RETRIES,
        *,
        rng: random.Random | None = None,
    ) -> None:
        _require_non_negative(base_delay=base_delay, max_backoff_time=max_backoff_time, num_retries=num_retries)
        self.base_delay = base_delay
        self.max_backoff_time = max_backoff_time
        self.num_retries = num_retries
        self._random = rng or random.Random()

    def ceiling(self, context: AttemptContext) -> int:
        return exponential_delay(
            context.retries_attempted,
            self.base_delay,
            self.max_backoff_time,
            self.num_retries,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_delay={self.base_delay}, "
            f"max_backoff_time={self.max_backoff_time}, num_retries={self.num_retries})"
        )


class FullJitterBackoffStrategy(_ExponentialBackoff):
    """Uniform delay in ``[0, ceil]``."""

    def compute_delay_before_next_retry(self, context: AttemptContext) -> int:
        return self._random.randint(0, self.ceiling(context))


class EqualJitterBackoffStrategy(_ExponentialBackoff):
    """Half the ceiling guaranteed, the other half randomized: ``[ceil/2, ceil]``."""

    def compute_delay_before_next_retry(self, context: AttemptContext) -> int:
        half = self.ceiling(context) // 2
        return half + self._random.randint(0, half)


DEFAULT_BACKOFF: BackoffStrategy = FullJitterBackoffStrategy(BASE_DELAY_MS, MAX_BACKOFF_MS, DEFAULT_NUM_RETRIES)
NO_BACKOFF: BackoffStrategy = FixedDelayBackoffStrategy(NO_RETRY_DELAY_MS)
