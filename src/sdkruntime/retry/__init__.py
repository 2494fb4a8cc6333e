"""Retry decisions: backoff strategies, retry conditions and policies."""

from .backoff import (
    BackoffStrategy,
    EqualJitterBackoffStrategy,
    FixedDelayBackoffStrategy,
    FullJitterBackoffStrategy,
    exponential_delay,
)
from .conditions import (
    AndRetryCondition,
    MaxNumberOfRetriesCondition,
    OrRetryCondition,
    RetryCondition,
    RetryOnErrorCodeCondition,
    RetryOnExceptionsCondition,
    RetryOnStatusCodeCondition,
)
from .context import AttemptContext
from .executor import run_with_retry, with_retry
from .policy import DEFAULT, NONE, RetryPolicy, RetryPolicyBuilder

__all__ = [
    "AndRetryCondition",
    "AttemptContext",
    "BackoffStrategy",
    "DEFAULT",
    "EqualJitterBackoffStrategy",
    "exponential_delay",
    "FixedDelayBackoffStrategy",
    "FullJitterBackoffStrategy",
    "MaxNumberOfRetriesCondition",
    "NONE",
    "OrRetryCondition",
    "RetryCondition",
    "RetryOnErrorCodeCondition",
    "RetryOnExceptionsCondition",
    "RetryOnStatusCodeCondition",
    "RetryPolicy",
    "RetryPolicyBuilder",
    "run_with_retry",
    "with_retry",
]
