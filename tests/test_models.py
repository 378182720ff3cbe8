"""Tests for public Pydantic models."""

import pytest
from pydantic import ValidationError

from webapi_sdk.models import (
    FIVE_RETRIES_IN_FIVE_MINUTES,
    RAPID_RETRY_POLICY,
    TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES,
    ClientOptions,
    Request,
    RetryConfig,
)


class TestRequest:
    """Tests for Request model."""

    def test_valid_request(self):
        """Should create a request with defaults."""
        request = Request(method="users.list")
        assert request.method == "users.list"
        assert request.params == {}
        assert request.token is None
        assert request.acting_user is None
        assert request.timeout is None

    def test_empty_method_rejected(self):
        """Should reject an empty method name."""
        with pytest.raises(ValidationError):
            Request(method="")

    def test_slash_method_rejected(self):
        """Should reject method names with leading or trailing slashes."""
        with pytest.raises(ValidationError):
            Request(method="/users.list")

    def test_non_positive_timeout_rejected(self):
        """Should reject zero timeouts."""
        with pytest.raises(ValidationError):
            Request(method="users.list", timeout=0)

    def test_frozen(self):
        """Should not allow reassignment once built."""
        request = Request(method="users.list")
        with pytest.raises(ValidationError):
            request.method = "users.info"

    def test_params_copied(self):
        """Should not share the caller's params dict."""
        params = {"channel": "C1"}
        request = Request(method="conversations.info", params=params)
        params["channel"] = "C2"
        assert request.params == {"channel": "C1"}

    def test_params_keep_order(self):
        """Should preserve parameter order."""
        request = Request(method="chat.postMessage", params={"b": 1, "a": 2, "c": 3})
        assert list(request.params) == ["b", "a", "c"]

    def test_with_params(self):
        """Should return a new request with merged params."""
        request = Request(method="users.list", params={"limit": 10}, token="t")
        follow_up = request.with_params(cursor="abc")
        assert follow_up.params == {"limit": 10, "cursor": "abc"}
        assert follow_up.token == "t"
        assert request.params == {"limit": 10}


class TestRetryConfig:
    """Tests for RetryConfig model."""

    def test_defaults(self):
        """Should default to unbounded randomized backoff capped at 30 minutes."""
        config = RetryConfig()
        assert config.retries is None
        assert config.base_delay == 1.0
        assert config.max_delay == 1800.0
        assert config.factor == 2.0
        assert config.randomize is True
        assert 500 in config.retry_statuses
        assert 599 in config.retry_statuses
        assert 404 not in config.retry_statuses

    def test_zero_retries_allowed(self):
        """Should accept zero retries."""
        assert RetryConfig(retries=0).retries == 0

    def test_negative_retries_rejected(self):
        """Should reject negative retry counts."""
        with pytest.raises(ValidationError):
            RetryConfig(retries=-1)

    def test_jitter_bounds(self):
        """Should reject jitter of 1 or more."""
        with pytest.raises(ValidationError):
            RetryConfig(jitter=1.0)

    def test_presets(self):
        """Should ship bounded presets."""
        assert TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES.retries == 10
        assert FIVE_RETRIES_IN_FIVE_MINUTES.retries == 5
        assert RAPID_RETRY_POLICY.max_delay == 1.0
        assert RAPID_RETRY_POLICY.randomize is False


class TestClientOptions:
    """Tests for ClientOptions model."""

    def test_defaults(self):
        """Should fill in defaults."""
        options = ClientOptions(base_url="https://api.test/api/")
        assert options.max_request_concurrency == 3
        assert options.reject_rate_limited_calls is False
        assert options.page_size == 200
        assert options.timeout == 30.0
        assert isinstance(options.retry_config, RetryConfig)

    def test_base_url_gets_trailing_slash(self):
        """Should append a trailing slash to the base URL."""
        assert ClientOptions(base_url="https://api.test/api").base_url == "https://api.test/api/"

    def test_empty_base_url_rejected(self):
        """Should reject an empty base URL."""
        with pytest.raises(ValidationError):
            ClientOptions(base_url="")

    def test_concurrency_must_be_positive(self):
        """Should reject zero concurrency."""
        with pytest.raises(ValidationError):
            ClientOptions(base_url="https://api.test/", max_request_concurrency=0)

    def test_retry_config_from_dict(self):
        """Should build a RetryConfig from a plain dict."""
        options = ClientOptions(base_url="https://api.test/", retry_config={"retries": 2})
        assert options.retry_config.retries == 2
