"""Group bot webhook client.

Posts text or markdown messages to WeCom-compatible bot webhooks
(``https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=...``). The bot
answers HTTP 200 even when it rejects a message, so a non-zero ``errcode``
in the body is treated as a failure.
"""

from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit

import requests

from infrastructure.logging import get_module_logger
from infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_exception,
)
from infrastructure.operations.result import OperationResult

logger = get_module_logger()

SERVICE_NAME = "WebhookBot"
SUPPORTED_MSG_TYPES = ("text", "markdown")


def extract_webhook_key(url: str) -> Optional[str]:
    """Return the ``key`` query parameter of a webhook URL, if any."""
    values = parse_qs(urlsplit(url).query).get("key")
    return values[0] if values else None


def build_payload(content: str, msg_type: str = "text") -> Dict[str, Any]:
    if msg_type not in SUPPORTED_MSG_TYPES:
        msg_type = "text"
    return {"msgtype": msg_type, msg_type: {"content": content}}


def post_message(
    url: str, content: str, msg_type: str = "text", timeout: int = 10
) -> OperationResult:
    """Post one message to a bot webhook.

    Args:
        url: Full webhook URL including its key parameter
        content: Message body
        msg_type: "text" or "markdown"
        timeout: Request timeout in seconds

    Returns:
        OperationResult, successful only for a 2xx answer whose errcode is 0
    """
    try:
        response = requests.post(
            url, json=build_payload(content, msg_type), timeout=timeout
        )
    except requests.RequestException as e:
        logger.warning(
            "webhook_bot_request_failed",
            webhook_key=extract_webhook_key(url),
            error=str(e),
        )
        return classify_request_exception(e, SERVICE_NAME)

    result = classify_http_response(response, SERVICE_NAME)
    if not result.is_success:
        logger.warning(
            "webhook_bot_http_error",
            webhook_key=extract_webhook_key(url),
            status_code=response.status_code,
        )
        return result

    body = result.data if isinstance(result.data, dict) else {}
    errcode = body.get("errcode", 0)
    if errcode != 0:
        logger.warning(
            "webhook_bot_rejected_message",
            webhook_key=extract_webhook_key(url),
            errcode=errcode,
            errmsg=body.get("errmsg"),
        )
        return OperationResult.permanent_error(
            f"{SERVICE_NAME} rejected message: {body.get('errmsg', 'unknown error')}",
            error_code=f"ERRCODE_{errcode}",
        )

    return OperationResult.success(data=body, message="Webhook message delivered")
