"""Tests for the error taxonomy, context chaining and settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from restspine.core.config import Settings, get_settings
from restspine.core.context import chain_context
from restspine.core.exceptions import (
    APIError,
    ClientError,
    FailedToDecodeClientErrorBody,
    FailedToDecodeSuccessBody,
    FailedToEncodeBody,
    FailedToLoadData,
    ResponsePluginFailed,
    RestSpineError,
    UnexpectedResponseType,
    UnexpectedStatusCode,
)


class TestChainContext:
    """Breadcrumb joining."""

    def test_base_and_call(self) -> None:
        """Base and call contexts are joined with ->."""
        assert chain_context("Users", "fetchProfile") == "Users->fetchProfile"

    def test_only_base(self) -> None:
        assert chain_context("Users", None) == "Users"

    def test_only_call(self) -> None:
        assert chain_context(None, "fetchProfile") == "fetchProfile"

    def test_none_is_none(self) -> None:
        """No context at all yields None, never an empty string."""
        assert chain_context(None, None) is None

    def test_empty_parts_skipped(self) -> None:
        """Empty strings count as absent."""
        assert chain_context("", "") is None
        assert chain_context("", "call") == "call"


class TestAPIError:
    """Descriptions, labels and causes."""

    @pytest.mark.parametrize(
        ("error_type", "detail"),
        [
            (ResponsePluginFailed, "Response plugin failed: boom"),
            (FailedToEncodeBody, "Failed to encode body: boom"),
            (FailedToLoadData, "Failed to load data: boom"),
            (FailedToDecodeSuccessBody, "Failed to decode success body: boom"),
            (FailedToDecodeClientErrorBody, "Failed to decode client error body: boom"),
        ],
    )
    def test_cause_cases(self, error_type: type[APIError], detail: str) -> None:
        """Cause-carrying errors describe the failure point and the cause."""
        cause = ValueError("boom")
        error = error_type(cause, "Users->fetchProfile")

        assert str(error) == f"[Users->fetchProfile: Client Error] {detail}"
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.context == "Users->fetchProfile"
        assert error.is_client_error
        assert isinstance(error, APIError)
        assert isinstance(error, RestSpineError)

    def test_without_context(self) -> None:
        """Without context the prefix only names the domain."""
        assert str(FailedToLoadData(OSError("reset"))) == "[Client Error] Failed to load data: reset"
        assert FailedToLoadData(OSError("reset")).context is None

    def test_client_error(self) -> None:
        """Client errors carry the server message."""
        error = ClientError("Not found", "Users")
        assert error.message == "Not found"
        assert error.cause is None
        assert str(error) == "[Users: Client Error] Not found"

    def test_unexpected_status_code(self) -> None:
        """Status code errors are server errors."""
        error = UnexpectedStatusCode(503)
        assert error.status_code == 503
        assert error.is_server_error
        assert str(error) == "[Server Error] Unexpected status code: 503"

    def test_unexpected_response_type(self) -> None:
        """The offending object's type is named."""
        error = UnexpectedResponseType("not a response", "Files")
        assert error.response == "not a response"
        assert str(error) == "[Files: Server Error] Unexpected response type (non-HTTP): str"

    def test_raise_and_catch_as_base(self) -> None:
        """All cases can be caught as APIError."""
        with pytest.raises(APIError) as exc_info:
            raise UnexpectedStatusCode(301, "Redirects")
        assert exc_info.value.context == "Redirects"


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.max_attempts == 5
        assert settings.min_retry_delay == 0.5
        assert settings.max_retry_delay == 5.0
        assert settings.debug is False

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """RESTSPINE_ variables are picked up."""
        monkeypatch.setenv("RESTSPINE_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("RESTSPINE_DEBUG", "true")
        settings = get_settings()
        assert settings.max_attempts == 3
        assert settings.debug is True

    def test_overrides(self) -> None:
        assert get_settings(request_timeout=5.0).request_timeout == 5.0

    def test_invalid_delay_bounds(self) -> None:
        """min_retry_delay may not exceed max_retry_delay."""
        with pytest.raises(ValidationError):
            Settings(min_retry_delay=6.0, max_retry_delay=5.0)
