"""Unit tests for EmailTransport."""

from datetime import datetime, timezone

import pytest
import requests
from unittest.mock import MagicMock, patch

from infrastructure.notifications import ChannelType, EmailConfig, EmailTransport

API_URL = "https://api.resend.com/emails"


@pytest.fixture
def transport_factory():
    def _factory(api_key="re_test", sender="reminders@test.com"):
        return EmailTransport(
            EmailConfig(resendApiKey=api_key, fromEmail=sender),
            api_url=API_URL,
            timeout=5,
            now=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

    return _factory


@pytest.mark.unit
class TestEmailTransport:
    def test_channel_type(self, transport_factory):
        assert transport_factory().channel_type is ChannelType.EMAIL

    @patch("integrations.resend.client.requests.post")
    def test_sends_one_email_per_target(
        self, mock_post, transport_factory, mixed_subscriptions
    ):
        response = MagicMock(spec=requests.Response)
        response.status_code = 200
        response.json.return_value = {"id": "email-1"}
        mock_post.return_value = response

        result = transport_factory().send("user@test.com", mixed_subscriptions[:2])

        assert result.is_success
        assert result.data == {"id": "email-1"}
        args, kwargs = mock_post.call_args
        assert args[0] == API_URL
        assert kwargs["headers"]["Authorization"] == "Bearer re_test"
        payload = kwargs["json"]
        assert payload["from"] == "reminders@test.com"
        assert payload["to"] == ["user@test.com"]
        assert "2 subscriptions" in payload["subject"]
        assert "Global Sub" in payload["text"]
        assert "<br>" in payload["html"]

    @patch("integrations.resend.client.requests.post")
    def test_missing_api_key_fails_without_request(
        self, mock_post, transport_factory, mixed_subscriptions
    ):
        result = transport_factory(api_key=None).send(
            "user@test.com", mixed_subscriptions[:1]
        )

        assert not result.is_success
        assert result.error_code == "MISSING_API_KEY"
        mock_post.assert_not_called()

    def test_health_check(self, transport_factory):
        assert transport_factory().health_check().is_success
        assert (
            transport_factory(api_key=None).health_check().error_code
            == "MISSING_API_KEY"
        )
        assert (
            transport_factory(sender=None).health_check().error_code
            == "MISSING_SENDER"
        )
