"""Tests for the built-in request and response plugins."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console

from restspine.models.http import HTTPMethod, Request, Response
from restspine.plugins import (
    HeadersPlugin,
    LogRequestPlugin,
    LogResponsePlugin,
    PrintRequestPlugin,
    PrintResponsePlugin,
    is_sensitive_header,
)
from restspine.plugins.redaction import body_text, redacted_headers
from restspine.protocols import RequestPlugin, ResponsePlugin


def make_request() -> Request:
    return Request(
        HTTPMethod.POST,
        "https://api.example.com/v1/users",
        headers={"Authorization": "Bearer secret", "Content-Type": "application/json"},
        content=b'{"name":"Ada"}',
    )


def make_response() -> Response:
    return Response(200, {"Set-Cookie": "session=abc", "Content-Type": "application/json"}, "https://api.example.com/v1/users/1")


def capture_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


# =============================================================================
# Redaction
# =============================================================================


class TestRedaction:
    """Sensitive header detection."""

    @pytest.mark.parametrize(
        "name",
        ["Authorization", "cookie", "Set-Cookie", "X-API-Key", "x-csrf-token", "X-Refresh-Token", "db-password", "client_secret"],
    )
    def test_sensitive(self, name: str) -> None:
        assert is_sensitive_header(name)

    @pytest.mark.parametrize("name", ["Accept", "Content-Type", "User-Agent", "X-Request-ID"])
    def test_not_sensitive(self, name: str) -> None:
        assert not is_sensitive_header(name)

    def test_sorted_and_masked(self) -> None:
        headers = [("X-Api-Key", "k"), ("Accept", "*/*")]
        assert redacted_headers(headers) == [("Accept", "*/*"), ("X-Api-Key", "[redacted]")]
        assert redacted_headers(headers, redact=False) == [("Accept", "*/*"), ("X-Api-Key", "k")]

    def test_body_text(self) -> None:
        assert body_text(b"") == "No body"
        assert body_text(None) == "No body"
        assert body_text(b"\xff") == "No body"
        assert body_text(b"hi") == "hi"


# =============================================================================
# HeadersPlugin
# =============================================================================


class TestHeadersPlugin:
    """Static header injection."""

    def test_conforms_to_protocol(self) -> None:
        assert isinstance(HeadersPlugin({}), RequestPlugin)

    def test_overwrites_by_default(self) -> None:
        request = HeadersPlugin({"authorization": "Bearer new"}).apply(make_request())
        assert request.headers["Authorization"] == "Bearer new"

    def test_keep_existing(self) -> None:
        plugin = HeadersPlugin({"Authorization": "Bearer new", "X-Client": "cli"}, overwrite=False)
        request = plugin.apply(make_request())
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["X-Client"] == "cli"


# =============================================================================
# Logging plugins
# =============================================================================


class TestLogPlugins:
    """logging-based plugins."""

    def test_conform_to_protocols(self) -> None:
        assert isinstance(LogRequestPlugin(), RequestPlugin)
        assert isinstance(LogResponsePlugin(), ResponsePlugin)

    def test_debug_only_disabled_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        """With debug off, debug-only plugins stay silent."""
        caplog.set_level(logging.DEBUG, logger="restspine.plugins")
        request = make_request()

        assert LogRequestPlugin().apply(request) is request
        assert caplog.records == []

    def test_debug_setting_enables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESTSPINE_DEBUG", "1")
        assert LogRequestPlugin().enabled is True

    def test_request_logged_and_redacted(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="restspine.plugins")
        LogRequestPlugin(debug_only=False).apply(make_request())

        text = caplog.text
        assert "Sending POST request to 'https://api.example.com/v1/users'" in text
        assert "authorization=[redacted]" in text
        assert "Bearer secret" not in text
        assert 'Body: {"name":"Ada"}' in text

    def test_request_unredacted(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="restspine.plugins")
        LogRequestPlugin(debug_only=False, redact_auth_headers=False).apply(make_request())
        assert "authorization=Bearer secret" in caplog.text

    def test_response_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="restspine.plugins")
        response = make_response()

        result = LogResponsePlugin(debug_only=False).apply(response, b"")
        assert result == (response, b"")
        assert "Response 200 from 'https://api.example.com/v1/users/1'" in caplog.text
        assert "set-cookie=[redacted]" in caplog.text
        assert "Body: No body" in caplog.text


# =============================================================================
# Console plugins
# =============================================================================


class TestPrintPlugins:
    """Rich console plugins."""

    def test_request_output(self) -> None:
        console, buffer = capture_console()
        PrintRequestPlugin(debug_only=False, console=console).apply(make_request())

        output = buffer.getvalue()
        assert output.startswith("[RESTClient] Sending POST request to 'https://api.example.com/v1/users'")
        assert "  authorization: [redacted]" in output
        assert "  content-type: application/json" in output
        assert 'Body:\n{"name":"Ada"}' in output

    def test_request_without_headers(self) -> None:
        console, buffer = capture_console()
        PrintRequestPlugin(debug_only=False, console=console).apply(Request(HTTPMethod.GET, "https://x.test"))
        assert "Headers:  (none)" in buffer.getvalue()
        assert "Body:\nNo body" in buffer.getvalue()

    def test_response_output(self) -> None:
        console, buffer = capture_console()
        PrintResponsePlugin(debug_only=False, console=console).apply(make_response(), b'{"id":1}')

        output = buffer.getvalue()
        assert "[RESTClient] Response 200 from 'https://api.example.com/v1/users/1'" in output
        assert "  set-cookie: [redacted]" in output
        assert 'Response body:\n{"id":1}' in output

    def test_silent_when_debug_only(self) -> None:
        console, buffer = capture_console()
        PrintResponsePlugin(console=console).apply(make_response(), b"")
        assert buffer.getvalue() == ""
