"""WeCom-compatible group bot webhook integration."""

from integrations.webhook_bot.client import (
    build_payload,
    extract_webhook_key,
    post_message,
)

__all__ = ["build_payload", "extract_webhook_key", "post_message"]
