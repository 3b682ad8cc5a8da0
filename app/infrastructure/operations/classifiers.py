"""Error classifiers for outbound HTTP calls.

Converts ``requests`` responses and exceptions into OperationResult objects
so channel transports report failures uniformly.

Key Functions:
- classify_http_response(): non-2xx ``requests.Response`` -> OperationResult
- classify_request_exception(): ``requests`` exceptions -> OperationResult

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_response,
        classify_request_exception,
    )

    try:
        response = requests.post(url, json=payload, timeout=10)
    except requests.RequestException as exc:
        return classify_request_exception(exc)
    if not response.ok:
        return classify_http_response(response)
"""

from typing import Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER_SECONDS = 60


def _retry_after(response: requests.Response) -> int:
    header_value = response.headers.get("Retry-After")
    if header_value:
        try:
            return int(header_value)
        except (ValueError, TypeError):
            pass
    return DEFAULT_RETRY_AFTER_SECONDS


def classify_http_response(
    response: requests.Response, service: str = "HTTP"
) -> OperationResult:
    """Classify an HTTP response into an OperationResult.

    Status Code Mapping:
    - 2xx: SUCCESS (response JSON, if any, in data)
    - 429: Rate limiting -> TRANSIENT_ERROR with retry_after
    - 401/403: Credentials rejected -> UNAUTHORIZED
    - 404: Not found -> NOT_FOUND
    - 5xx: Server error -> TRANSIENT_ERROR
    - Other: PERMANENT_ERROR

    Args:
        response: Response returned by ``requests``
        service: Service name used in messages (e.g. "Resend", "Webhook")

    Returns:
        OperationResult with status, message and error_code
    """
    status_code: Optional[int] = response.status_code

    if status_code is not None and 200 <= status_code < 300:
        try:
            data = response.json()
        except ValueError:
            data = None
        return OperationResult.success(
            data=data, message=f"{service} request succeeded ({status_code})"
        )

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{service} rate limited",
            error_code="RATE_LIMITED",
            retry_after=_retry_after(response),
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"{service} rejected credentials ({status_code})",
            error_code="UNAUTHORIZED",
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"{service} endpoint not found",
            error_code="NOT_FOUND",
        )

    if status_code is not None and 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"{service} server error ({status_code})",
            error_code="SERVER_ERROR",
        )

    return OperationResult.permanent_error(
        f"{service} client error ({status_code}): {response.text[:200]}",
        error_code=f"HTTP_{status_code}",
    )


def classify_request_exception(
    exc: Exception, service: str = "HTTP"
) -> OperationResult:
    """Classify an exception raised while performing an HTTP call.

    Timeouts and connection failures are transient; anything else raised by
    ``requests`` (invalid URL, bad schema) is permanent.

    Args:
        exc: Exception raised by ``requests``
        service: Service name used in messages

    Returns:
        OperationResult describing the failure
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"{service} request timed out: {exc}",
            error_code="TIMEOUT",
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"{service} connection error: {exc}",
            error_code="CONNECTION_ERROR",
        )

    if isinstance(exc, requests.RequestException):
        return OperationResult.permanent_error(
            f"{service} request error: {type(exc).__name__}: {exc}",
            error_code="REQUEST_ERROR",
        )

    return OperationResult.transient_error(
        f"{service} unexpected error: {type(exc).__name__}: {exc}",
        error_code="UNEXPECTED_ERROR",
    )
