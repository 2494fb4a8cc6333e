"""Deterministic error model and error code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    SERVICE_ERROR = 5


@dataclass
class SdkRuntimeError(Exception):
    message: str
    code: ErrorCode = ErrorCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ConfigurationError(SdkRuntimeError):
    """Invalid policy or pagination setup, raised before any traversal starts."""

    code: ErrorCode = ErrorCode.CONFIG_ERROR


@dataclass
class SdkServiceError(SdkRuntimeError):
    """Failure reported by the remote service."""

    code: ErrorCode = ErrorCode.SERVICE_ERROR
    error_code: str = ""
    status_code: int | None = None
    request_id: str = ""

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.append(f"(Error Code: {self.error_code})")
        if self.status_code is not None:
            parts.append(f"(Status Code: {self.status_code})")
        if self.request_id:
            parts.append(f"(Request ID: {self.request_id})")
        text = " ".join(parts)
        if self.hint:
            return f"{text} Hint: {self.hint}"
        return text


class RetryableError(Exception):
    """Transient failure that is always eligible for retry."""


class PaginationExhaustedError(StopIteration):
    """Requested the next page or item after the sequence ended."""


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
