from __future__ import annotations

import pytest

from sdkruntime.errors import SdkServiceError
from sdkruntime.retry.backoff import FixedDelayBackoffStrategy
from sdkruntime.retry.context import AttemptContext
from sdkruntime.retry.executor import run_with_retry, with_retry
from sdkruntime.retry.policy import NONE, RetryPolicy


def _fixed_policy(num_retries: int = 3, delay: int = 250) -> RetryPolicy:
    return RetryPolicy.builder().num_retries(num_retries).backoff_strategy(FixedDelayBackoffStrategy(delay)).build()


def test_run_with_retry_recovers_after_transient_failures() -> None:
    attempts = {"count": 0}
    sleeps: list[float] = []

    def operation(request: str) -> str:
        attempts["count"] += 1
        if attempts["count"] < 3:
            raise ConnectionResetError("temporary")
        return f"ok:{request}"

    result = run_with_retry(operation, "req", policy=_fixed_policy(), sleep=sleeps.append)

    assert result == "ok:req"
    assert attempts["count"] == 3
    assert sleeps == [0.25, 0.25]


def test_run_with_retry_does_not_retry_non_retryable_error() -> None:
    attempts = {"count": 0}

    def operation(_: object) -> str:
        attempts["count"] += 1
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        run_with_retry(operation, None, policy=_fixed_policy(), sleep=lambda _: None)
    assert attempts["count"] == 1


def test_run_with_retry_raises_last_error_unchanged() -> None:
    errors = [SdkServiceError("boom", status_code=503) for _ in range(4)]
    calls = iter(errors)

    def operation(_: object) -> str:
        raise next(calls)

    with pytest.raises(SdkServiceError) as exc:
        run_with_retry(operation, None, policy=_fixed_policy(num_retries=3), sleep=lambda _: None)
    assert exc.value is errors[-1]


def test_run_with_retry_passes_retry_count_to_policy() -> None:
    seen: list[AttemptContext] = []

    class RecordingCondition:
        def should_retry(self, context: AttemptContext) -> bool:
            seen.append(context)
            return True

    def operation(_: object) -> str:
        raise SdkServiceError("down", status_code=500)

    policy = _fixed_policy(num_retries=2).to_builder().retry_condition(RecordingCondition()).build()

    with pytest.raises(SdkServiceError):
        run_with_retry(
            operation,
            "request",
            policy=policy,
            sleep=lambda _: None,
        )
    assert [context.retries_attempted for context in seen] == [0, 1]
    assert all(context.request == "request" for context in seen)
    assert all(context.status_code == 500 for context in seen)


def test_run_with_retry_none_policy_makes_single_attempt() -> None:
    attempts = {"count": 0}

    def operation(_: object) -> str:
        attempts["count"] += 1
        raise OSError("down")

    with pytest.raises(OSError):
        run_with_retry(operation, None, policy=NONE, sleep=lambda _: None)
    assert attempts["count"] == 1


def test_run_with_retry_succeeds_first_try_without_sleeping() -> None:
    sleeps: list[float] = []

    assert run_with_retry(lambda request: request * 2, 21, policy=_fixed_policy(), sleep=sleeps.append) == 42
    assert sleeps == []


def test_run_with_retry_never_catches_keyboard_interrupt() -> None:
    def operation(_: object) -> str:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        run_with_retry(operation, None, policy=_fixed_policy(), sleep=lambda _: None)


def test_with_retry_wraps_operation() -> None:
    attempts = {"count": 0}

    def operation(request: int) -> int:
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise TimeoutError
        return request + 1

    retrying = with_retry(operation, policy=_fixed_policy(), sleep=lambda _: None)

    assert retrying(1) == 2
    assert attempts["count"] == 2
