"""Tests for response classification."""

import httpx
import pytest

from webapi_sdk._internal.dispatch.classifier import (
    DEFAULT_RETRY_AFTER,
    classify,
    parse_retry_after,
)
from webapi_sdk._internal.http import TransportOutcome
from webapi_sdk.exceptions import HTTPError, PlatformError, RateLimitedError, RequestError


def outcome(status=200, body=None, headers=None, error=None):
    return TransportOutcome(
        method="users.list",
        status_code=None if error else status,
        headers=headers or {},
        body=body,
        error=error,
    )


class TestParseRetryAfter:
    """Tests for parse_retry_after."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("30", 30.0),
            (" 5 ", 5.0),
            ("0.25", 0.25),
            ("0", 0.0),
            (None, DEFAULT_RETRY_AFTER),
            ("soon", DEFAULT_RETRY_AFTER),
            ("-3", DEFAULT_RETRY_AFTER),
            ("nan", DEFAULT_RETRY_AFTER),
            ("", DEFAULT_RETRY_AFTER),
        ],
    )
    def test_values(self, value, expected):
        """Should parse seconds and fall back to one second."""
        assert parse_retry_after(value) == expected


class TestClassify:
    """Tests for classify."""

    def test_success(self):
        """Should return the body on an ok response."""
        result = classify(outcome(body={"ok": True, "members": []}))
        assert result.ok
        assert result.payload == {"ok": True, "members": []}
        assert result.error is None

    def test_success_without_flag(self):
        """Should treat a body without an ok flag as success."""
        assert classify(outcome(body={"members": []})).ok

    def test_network_failure(self):
        """Should classify a missing response as RequestError."""
        original = httpx.ConnectError("refused")
        result = classify(outcome(error=original))
        assert isinstance(result.error, RequestError)
        assert result.error.original is original

    def test_timeout(self):
        """Should classify a timeout as RequestError."""
        result = classify(outcome(error=httpx.ReadTimeout("slow")))
        assert isinstance(result.error, RequestError)

    def test_rate_limited(self):
        """Should classify 429 as RateLimitedError with the header value."""
        result = classify(outcome(status=429, headers={"retry-after": "12"}))
        assert isinstance(result.error, RateLimitedError)
        assert result.error.retry_after == 12.0

    def test_rate_limited_without_header(self):
        """Should fall back to one second when the header is missing."""
        result = classify(outcome(status=429, body={"ok": False, "error": "ratelimited"}))
        assert isinstance(result.error, RateLimitedError)
        assert result.error.retry_after == DEFAULT_RETRY_AFTER

    def test_rate_limit_beats_platform_error(self):
        """Should prefer rate limit over an ok: false body."""
        result = classify(
            outcome(status=429, body={"ok": False, "error": "ratelimited"}, headers={"retry-after": "3"})
        )
        assert isinstance(result.error, RateLimitedError)

    def test_http_error(self):
        """Should classify a non-API error status as HTTPError."""
        result = classify(outcome(status=503, body=None, headers={"x-test": "1"}))
        assert isinstance(result.error, HTTPError)
        assert result.error.status_code == 503
        assert result.error.headers == {"x-test": "1"}

    def test_http_error_with_api_body_is_platform_error(self):
        """Should classify an error status with an API failure body as PlatformError."""
        result = classify(outcome(status=400, body={"ok": False, "error": "invalid_arguments"}))
        assert isinstance(result.error, PlatformError)
        assert result.error.error == "invalid_arguments"

    def test_platform_error(self):
        """Should classify ok: false as PlatformError."""
        body = {"ok": False, "error": "channel_not_found"}
        result = classify(outcome(body=body))
        assert isinstance(result.error, PlatformError)
        assert result.error.error == "channel_not_found"
        assert result.error.data == body
        assert "channel_not_found" in str(result.error)

    def test_platform_error_without_detail(self):
        """Should use a placeholder error when the body has none."""
        result = classify(outcome(body={"ok": False}))
        assert result.error.error == "unknown_error"

    def test_unparsable_body(self):
        """Should classify a 2xx with no JSON object as HTTPError."""
        result = classify(outcome(body=None))
        assert isinstance(result.error, HTTPError)
        assert result.error.status_code == 200
