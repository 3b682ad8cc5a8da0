"""Resend email API settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class ResendSettings(IntegrationSettings):
    """Resend email API configuration.

    The API key stored here is only a default; a key present in the stored
    channel configuration document takes precedence.

    Environment Variables:
        RESEND_API_URL: Email send endpoint (default: https://api.resend.com/emails)
        RESEND_API_KEY: API key used when the channel configuration has none
    """

    RESEND_API_URL: str = Field(
        default="https://api.resend.com/emails", alias="RESEND_API_URL"
    )
    RESEND_API_KEY: str | None = Field(default=None, alias="RESEND_API_KEY")
