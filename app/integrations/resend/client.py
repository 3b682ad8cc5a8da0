"""Resend email API client."""

from typing import Optional

import requests

from infrastructure.logging import get_module_logger
from infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_exception,
)
from infrastructure.operations.result import OperationResult

logger = get_module_logger()

SERVICE_NAME = "Resend"


def create_authorization_header(api_key: str):
    """Authorization header tuple for the Resend API."""
    return "Authorization", "Bearer {}".format(api_key)


def send_email(
    api_url: str,
    api_key: Optional[str],
    sender: Optional[str],
    recipient: str,
    subject: str,
    text: str,
    html: Optional[str] = None,
    timeout: int = 10,
) -> OperationResult:
    """Send one email through the Resend API.

    A missing API key or sender fails permanently without calling the API.

    Returns:
        OperationResult with ``{"id": ...}`` in data on success
    """
    if not api_key:
        logger.error("resend_send_skipped", error="Missing API key")
        return OperationResult.permanent_error(
            "Resend API key is not configured", error_code="MISSING_API_KEY"
        )
    if not sender:
        logger.error("resend_send_skipped", error="Missing sender address")
        return OperationResult.permanent_error(
            "Email sender address is not configured", error_code="MISSING_SENDER"
        )

    header_key, header_value = create_authorization_header(api_key)
    headers = {header_key: header_value, "Content-Type": "application/json"}
    payload = {
        "from": sender,
        "to": [recipient],
        "subject": subject,
        "html": html or text,
        "text": text,
    }

    try:
        response = requests.post(api_url, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("resend_request_failed", recipient=recipient, error=str(e))
        return classify_request_exception(e, SERVICE_NAME)

    result = classify_http_response(response, SERVICE_NAME)
    if not result.is_success:
        logger.warning(
            "resend_http_error",
            recipient=recipient,
            status_code=response.status_code,
        )
        return result

    email_id = result.data.get("id") if isinstance(result.data, dict) else None
    logger.info("resend_email_sent", recipient=recipient, email_id=email_id)
    return OperationResult.success(data={"id": email_id}, message="Email sent via Resend")
