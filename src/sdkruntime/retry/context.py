"""Immutable snapshot of one physical attempt."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttemptContext:
    """Outcome of the last attempt, consulted by backoff and retry conditions.

    ``retries_attempted`` is zero on the first failure. A new context is built
    for every attempt; instances are never mutated.
    """

    request: object = None
    error: BaseException | None = None
    status_code: int | None = None
    retries_attempted: int = 0

    @classmethod
    def from_error(cls, request: object, error: BaseException, *, retries_attempted: int) -> AttemptContext:
        status_code = getattr(error, "status_code", None)
        return cls(
            request=request,
            error=error,
            status_code=status_code if isinstance(status_code, int) else None,
            retries_attempted=retries_attempted,
        )
