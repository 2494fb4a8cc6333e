"""Well-known retry tunables and retryable code sets."""

from __future__ import annotations

from sdkruntime.errors import RetryableError

BASE_DELAY_MS = 100
MAX_BACKOFF_MS = 20_000
DEFAULT_NUM_RETRIES = 3
NO_RETRY_DELAY_MS = 1

THROTTLING_ERROR_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "ProvisionedThroughputExceededException",
        "SlowDown",
        "TooManyRequestsException",
        "RequestLimitExceeded",
        "BandwidthLimitExceeded",
        "RequestThrottled",
    }
)
CLOCK_SKEW_ERROR_CODES = frozenset(
    {
        "RequestTimeTooSkewed",
        "RequestExpired",
        "InvalidSignatureException",
        "SignatureDoesNotMatch",
        "AuthFailure",
        "RequestInTheFuture",
    }
)
RETRYABLE_ERROR_CODES = THROTTLING_ERROR_CODES | CLOCK_SKEW_ERROR_CODES

# 500, 502, 503, 504
RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})

# ConnectionError and TimeoutError are OSError subclasses.
RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (RetryableError, OSError)
