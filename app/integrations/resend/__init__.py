"""Resend email API integration."""

from integrations.resend.client import create_authorization_header, send_email

__all__ = ["create_authorization_header", "send_email"]
