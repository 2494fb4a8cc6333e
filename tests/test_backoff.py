from __future__ import annotations

import random

import pytest

from sdkruntime.errors import ConfigurationError
from sdkruntime.retry.backoff import (
    DEFAULT_BACKOFF,
    NO_BACKOFF,
    EqualJitterBackoffStrategy,
    FixedDelayBackoffStrategy,
    FullJitterBackoffStrategy,
    exponential_delay,
)
from sdkruntime.retry.context import AttemptContext


class _MaxRandom(random.Random):
    def randint(self, a: int, b: int) -> int:
        return b


class _MinRandom(random.Random):
    def randint(self, a: int, b: int) -> int:
        return a


def test_exponential_delay_doubles_until_cap() -> None:
    assert [exponential_delay(n, 100, 20_000, 10) for n in range(5)] == [100, 200, 400, 800, 1600]
    assert exponential_delay(9, 100, 20_000, 10) == 20_000


def test_exponential_delay_stops_growing_at_max_retries() -> None:
    assert exponential_delay(3, 100, 20_000, 3) == 800
    assert exponential_delay(4, 100, 20_000, 3) == 800
    assert exponential_delay(1_000_000, 100, 20_000, 3) == 800


def test_fixed_delay_ignores_attempt_count() -> None:
    strategy = FixedDelayBackoffStrategy(250)

    assert strategy.compute_delay_before_next_retry(AttemptContext(retries_attempted=0)) == 250
    assert strategy.compute_delay_before_next_retry(AttemptContext(retries_attempted=7)) == 250


def test_no_backoff_is_one_millisecond() -> None:
    assert NO_BACKOFF.compute_delay_before_next_retry(AttemptContext()) == 1


def test_full_jitter_upper_bound_is_exponential_ceiling() -> None:
    strategy = FullJitterBackoffStrategy(100, 20_000, 3, rng=_MaxRandom())

    assert strategy.compute_delay_before_next_retry(AttemptContext(retries_attempted=2)) == 400


def test_full_jitter_lower_bound_is_zero() -> None:
    strategy = FullJitterBackoffStrategy(100, 20_000, 3, rng=_MinRandom())

    assert strategy.compute_delay_before_next_retry(AttemptContext(retries_attempted=2)) == 0


def test_equal_jitter_keeps_half_of_ceiling() -> None:
    low = EqualJitterBackoffStrategy(100, 20_000, 3, rng=_MinRandom())
    high = EqualJitterBackoffStrategy(100, 20_000, 3, rng=_MaxRandom())
    context = AttemptContext(retries_attempted=1)

    assert low.compute_delay_before_next_retry(context) == 100
    assert high.compute_delay_before_next_retry(context) == 200


def test_seeded_strategies_are_reproducible() -> None:
    first = FullJitterBackoffStrategy(rng=random.Random(42))
    second = FullJitterBackoffStrategy(rng=random.Random(42))
    contexts = [AttemptContext(retries_attempted=n) for n in range(5)]

    assert [first.compute_delay_before_next_retry(c) for c in contexts] == [
        second.compute_delay_before_next_retry(c) for c in contexts
    ]


def test_default_backoff_is_full_jitter_with_standard_tunables() -> None:
    assert isinstance(DEFAULT_BACKOFF, FullJitterBackoffStrategy)
    assert DEFAULT_BACKOFF.base_delay == 100
    assert DEFAULT_BACKOFF.max_backoff_time == 20_000
    assert DEFAULT_BACKOFF.num_retries == 3


@pytest.mark.parametrize(
    "factory",
    [
        lambda: FixedDelayBackoffStrategy(-1),
        lambda: FullJitterBackoffStrategy(-5, 100, 3),
        lambda: EqualJitterBackoffStrategy(100, -1, 3),
    ],
)
def test_negative_tunables_are_rejected(factory) -> None:
    with pytest.raises(ConfigurationError):
        factory()
