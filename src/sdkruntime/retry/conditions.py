"""Retry predicates and their AND/OR combinators."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from sdkruntime.retry.context import AttemptContext
from sdkruntime.retry.defaults import RETRYABLE_ERROR_CODES, RETRYABLE_EXCEPTIONS, RETRYABLE_STATUS_CODES


class RetryCondition(Protocol):
    def should_retry(self, context: AttemptContext) -> bool:
        """Pure predicate; safe to call repeatedly with the same context."""
        ...


class MaxNumberOfRetriesCondition:
    def __init__(self, max_retries: int) -> None:
        self.max_retries = max_retries

    def should_retry(self, context: AttemptContext) -> bool:
        return context.retries_attempted < self.max_retries

    def __repr__(self) -> str:
        return f"MaxNumberOfRetriesCondition({self.max_retries})"


class RetryOnStatusCodeCondition:
    def __init__(self, status_codes: Iterable[int] = RETRYABLE_STATUS_CODES) -> None:
        self.status_codes = frozenset(status_codes)

    def should_retry(self, context: AttemptContext) -> bool:
        return context.status_code is not None and context.status_code in self.status_codes


class RetryOnErrorCodeCondition:
    """Matches the ``error_code`` carried by a service error."""

    def __init__(self, error_codes: Iterable[str] = RETRYABLE_ERROR_CODES) -> None:
        self.error_codes = frozenset(error_codes)

    def should_retry(self, context: AttemptContext) -> bool:
        error_code = getattr(context.error, "error_code", None)
        return isinstance(error_code, str) and error_code in self.error_codes


class RetryOnExceptionsCondition:
    def __init__(self, exception_types: Iterable[type[BaseException]] = RETRYABLE_EXCEPTIONS) -> None:
        self.exception_types = tuple(exception_types)

    def should_retry(self, context: AttemptContext) -> bool:
        if context.error is None or not self.exception_types:
            return False
        return isinstance(context.error, self.exception_types)


class AndRetryCondition:
    """True only if every child agrees; stops at the first refusal."""

    def __init__(self, *conditions: RetryCondition) -> None:
        self.conditions = tuple(conditions)

    def should_retry(self, context: AttemptContext) -> bool:
        return all(condition.should_retry(context) for condition in self.conditions)

    def __repr__(self) -> str:
        return f"AndRetryCondition{self.conditions!r}"


class OrRetryCondition:
    """True once any child agrees; later children are not evaluated."""

    def __init__(self, *conditions: RetryCondition) -> None:
        self.conditions = tuple(conditions)

    def should_retry(self, context: AttemptContext) -> bool:
        return any(condition.should_retry(context) for condition in self.conditions)

    def __repr__(self) -> str:
        return f"OrRetryCondition{self.conditions!r}"


class _NeverRetry:
    def should_retry(self, context: AttemptContext) -> bool:
        del context
        return False

    def __repr__(self) -> str:
        return "NEVER_RETRY"


DEFAULT_CONDITION: RetryCondition = OrRetryCondition(
    RetryOnStatusCodeCondition(),
    RetryOnErrorCodeCondition(),
    RetryOnExceptionsCondition(),
)
NEVER_RETRY: RetryCondition = _NeverRetry()
