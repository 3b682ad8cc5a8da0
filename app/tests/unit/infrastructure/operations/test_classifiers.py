"""Unit tests for HTTP error classifiers."""

import pytest
import requests
from unittest.mock import MagicMock

from infrastructure.operations import OperationStatus
from infrastructure.operations.classifiers import (
    DEFAULT_RETRY_AFTER_SECONDS,
    classify_http_response,
    classify_request_exception,
)


def _response(status_code, headers=None, body=None, text=""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


@pytest.mark.unit
class TestClassifyHttpResponse:
    def test_success_with_json_body(self):
        result = classify_http_response(_response(200, body={"ok": True}))

        assert result.is_success
        assert result.data == {"ok": True}

    def test_success_without_json_body(self):
        result = classify_http_response(_response(204))

        assert result.is_success
        assert result.data is None

    def test_rate_limited_uses_retry_after_header(self):
        result = classify_http_response(_response(429, headers={"Retry-After": "12"}))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "RATE_LIMITED"
        assert result.retry_after == 12

    def test_rate_limited_with_bad_header_uses_default(self):
        result = classify_http_response(
            _response(429, headers={"Retry-After": "soon"})
        )

        assert result.retry_after == DEFAULT_RETRY_AFTER_SECONDS

    @pytest.mark.parametrize(
        "status_code,expected",
        [
            (401, OperationStatus.UNAUTHORIZED),
            (403, OperationStatus.UNAUTHORIZED),
            (404, OperationStatus.NOT_FOUND),
            (500, OperationStatus.TRANSIENT_ERROR),
            (503, OperationStatus.TRANSIENT_ERROR),
            (400, OperationStatus.PERMANENT_ERROR),
        ],
    )
    def test_status_mapping(self, status_code, expected):
        result = classify_http_response(_response(status_code), service="Resend")

        assert result.status == expected
        assert "Resend" in result.message

    def test_client_error_includes_body_excerpt(self):
        result = classify_http_response(_response(400, text="x" * 300))

        assert result.error_code == "HTTP_400"
        assert "x" * 200 in result.message
        assert "x" * 201 not in result.message


@pytest.mark.unit
class TestClassifyRequestException:
    def test_timeout(self):
        result = classify_request_exception(requests.Timeout("slow"))

        assert result.error_code == "TIMEOUT"
        assert result.is_transient

    def test_connection_error(self):
        result = classify_request_exception(requests.ConnectionError("refused"))

        assert result.error_code == "CONNECTION_ERROR"
        assert result.is_transient

    def test_invalid_url_is_permanent(self):
        result = classify_request_exception(requests.exceptions.InvalidURL("bad"))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "REQUEST_ERROR"

    def test_unexpected_exception(self):
        result = classify_request_exception(RuntimeError("boom"))

        assert result.error_code == "UNEXPECTED_ERROR"
