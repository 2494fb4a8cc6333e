"""RetryPolicy: one backoff strategy plus one retry condition.

The attempt ceiling is always enforced by the policy itself, so a custom
condition never has to restate it::

    policy = RetryPolicy.builder().num_retries(5).build()
    tweaked = policy.to_builder().backoff_strategy(FixedDelayBackoffStrategy(50)).build()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from sdkruntime.errors import ConfigurationError
from sdkruntime.retry.backoff import DEFAULT_BACKOFF, NO_BACKOFF, BackoffStrategy
from sdkruntime.retry.conditions import (
    DEFAULT_CONDITION,
    NEVER_RETRY,
    AndRetryCondition,
    MaxNumberOfRetriesCondition,
    RetryCondition,
)
from sdkruntime.retry.context import AttemptContext
from sdkruntime.retry.defaults import DEFAULT_NUM_RETRIES


@dataclass(frozen=True)
class RetryPolicy:
    num_retries: int
    backoff_strategy: BackoffStrategy
    retry_condition: RetryCondition
    _effective_condition: RetryCondition = field(init=False, repr=False, compare=False)

    DEFAULT: ClassVar[RetryPolicy]
    NONE: ClassVar[RetryPolicy]

    def __post_init__(self) -> None:
        if isinstance(self.num_retries, bool) or not isinstance(self.num_retries, int):
            raise ConfigurationError(
                f"num_retries must be an integer (got {self.num_retries!r}).",
                hint="Pass a whole number of retries.",
            )
        if self.num_retries < 0:
            raise ConfigurationError(
                f"num_retries cannot be negative (got {self.num_retries}).",
                hint="Use 0 to disable retries.",
            )
        effective = AndRetryCondition(MaxNumberOfRetriesCondition(self.num_retries), self.retry_condition)
        object.__setattr__(self, "_effective_condition", effective)

    @staticmethod
    def builder() -> RetryPolicyBuilder:
        return RetryPolicyBuilder()

    def to_builder(self) -> RetryPolicyBuilder:
        return (
            RetryPolicyBuilder()
            .num_retries(self.num_retries)
            .backoff_strategy(self.backoff_strategy)
            .retry_condition(self.retry_condition)
        )

    def should_retry(self, context: AttemptContext) -> bool:
        return self._effective_condition.should_retry(context)

    def compute_delay_before_next_retry(self, context: AttemptContext) -> int:
        return self.backoff_strategy.compute_delay_before_next_retry(context)


class RetryPolicyBuilder:
    """Mutable collector of partial settings; defaults are filled in by build()."""

    def __init__(self) -> None:
        self._num_retries: int | None = None
        self._backoff_strategy: BackoffStrategy | None = None
        self._retry_condition: RetryCondition | None = None

    def num_retries(self, value: int | None) -> RetryPolicyBuilder:
        self._num_retries = value
        return self

    def backoff_strategy(self, value: BackoffStrategy | None) -> RetryPolicyBuilder:
        self._backoff_strategy = value
        return self

    def retry_condition(self, value: RetryCondition | None) -> RetryPolicyBuilder:
        self._retry_condition = value
        return self

    def get_num_retries(self) -> int | None:
        return self._num_retries

    def get_backoff_strategy(self) -> BackoffStrategy | None:
        return self._backoff_strategy

    def get_retry_condition(self) -> RetryCondition | None:
        return self._retry_condition

    def build(self) -> RetryPolicy:
        return RetryPolicy(
            num_retries=DEFAULT_NUM_RETRIES if self._num_retries is None else self._num_retries,
            backoff_strategy=DEFAULT_BACKOFF if self._backoff_strategy is None else self._backoff_strategy,
            retry_condition=DEFAULT_CONDITION if self._retry_condition is None else self._retry_condition,
        )


DEFAULT = RetryPolicy.builder().num_retries(DEFAULT_NUM_RETRIES).build()
NONE = (
    RetryPolicy.builder()
    .num_retries(0)
    .backoff_strategy(NO_BACKOFF)
    .retry_condition(NEVER_RETRY)
    .build()
)
RetryPolicy.DEFAULT = DEFAULT
RetryPolicy.NONE = NONE
