"""Blocking retry loop around a single physical call."""

from __future__ import annotations

import logging as py_logging
import time
from collections.abc import Callable
from typing import TypeVar

from sdkruntime.retry.context import AttemptContext
from sdkruntime.retry.policy import RetryPolicy

logger = py_logging.getLogger(__name__)

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


def run_with_retry(
    operation: Callable[[RequestT], ResponseT],
    request: RequestT,
    *,
    policy: RetryPolicy = RetryPolicy.DEFAULT,
    sleep: Callable[[float], None] = time.sleep,
) -> ResponseT:
    """Invoke ``operation(request)`` until it succeeds or the policy gives up.

    The last error is re-raised unchanged once no further retry is permitted.
    """
    retries_attempted = 0
    while True:
        try:
            return operation(request)
        except Exception as exc:
            context = AttemptContext.from_error(request, exc, retries_attempted=retries_attempted)
            if not policy.should_retry(context):
                if retries_attempted:
                    logger.warning(
                        "Giving up after %s retr%s: %s",
                        retries_attempted,
                        "y" if retries_attempted == 1 else "ies",
                        type(exc).__name__,
                    )
                raise
            delay_ms = policy.compute_delay_before_next_retry(context)
            logger.debug(
                "Retrying attempt=%s status=%s error=%s delay_ms=%s",
                retries_attempted + 1,
                context.status_code,
                type(exc).__name__,
                delay_ms,
            )
            sleep(delay_ms / 1000.0)
            retries_attempted += 1


def with_retry(
    operation: Callable[[RequestT], ResponseT],
    *,
    policy: RetryPolicy = RetryPolicy.DEFAULT,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[RequestT], ResponseT]:
    def retrying(request: RequestT) -> ResponseT:
        return run_with_retry(operation, request, policy=policy, sleep=sleep)

    return retrying
