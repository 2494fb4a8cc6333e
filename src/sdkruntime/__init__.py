"""Retry and pagination runtime core for generated service clients."""

from .errors import (
    ConfigurationError,
    ErrorCode,
    PaginationExhaustedError,
    RetryableError,
    SdkRuntimeError,
    SdkServiceError,
)
from .logging import configure_logging
from .pagination import ItemSequence, PageSequence, PaginationSpec, Paginator
from .retry import AttemptContext, RetryPolicy

__version__ = "0.1.0"

__all__ = [
    "AttemptContext",
    "ConfigurationError",
    "configure_logging",
    "ErrorCode",
    "ItemSequence",
    "PageSequence",
    "PaginationExhaustedError",
    "PaginationSpec",
    "Paginator",
    "RetryableError",
    "RetryPolicy",
    "SdkRuntimeError",
    "SdkServiceError",
]
