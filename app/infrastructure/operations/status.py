"""Operation status enumeration.

Classifies the outcome of integration calls (store access, HTTP transports)
so callers can tell a retryable failure from a permanent one.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (bad request, rejected payload)
        UNAUTHORIZED: Credentials missing or rejected
        NOT_FOUND: Target does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
