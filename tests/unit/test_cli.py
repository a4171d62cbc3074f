"""Tests for the command line interface."""

from __future__ import annotations

import logging

import pytest
from typer.testing import CliRunner

from restspine import __version__
from restspine.cli import app
from restspine.core.logging import LOGGER_NAME
from restspine.testing import MockTransport

runner = CliRunner()


@pytest.fixture
def transport(monkeypatch: pytest.MonkeyPatch) -> MockTransport:
    """Replace the HTTP transport the CLI creates."""
    mock = MockTransport()
    monkeypatch.setattr("restspine.client.HttpxTransport", lambda: mock)
    return mock


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_restspine", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"restspine {__version__}" in result.output


def test_get_prints_body(transport: MockTransport) -> None:
    transport.add(200, b'{"id": 1}')

    result = runner.invoke(app, ["request", "get", "https://api.example.com/users/1", "-q", "fields=id"])

    assert result.exit_code == 0
    assert '{"id": 1}' in result.output
    request = transport.requests[0]
    assert request.method.value == "GET"
    assert request.url == "https://api.example.com/users/1?fields=id"


def test_url_with_query(transport: MockTransport) -> None:
    """Query items are appended to a URL that already has a query."""
    transport.add(200, b"[]")

    result = runner.invoke(app, ["request", "GET", "https://api.example.com/search?q=a", "--query", "page=2"])

    assert result.exit_code == 0
    assert transport.requests[0].url == "https://api.example.com/search?q=a&page=2"


def test_json_body_and_headers(transport: MockTransport) -> None:
    transport.add(201, b"{}")

    result = runner.invoke(
        app,
        ["request", "post", "https://api.example.com/users", "--json", '{"name": "Ada"}', "-H", "X-Client: cli"],
    )

    assert result.exit_code == 0
    request = transport.requests[0]
    assert request.content == b'{"name":"Ada"}'
    assert request.headers["content-type"] == "application/json"
    assert request.headers["x-client"] == "cli"


def test_client_error_exits_nonzero(transport: MockTransport) -> None:
    """API errors are reported with their context and exit code 1."""
    transport.add(404, b'{"message": "Not found"}')

    result = runner.invoke(app, ["request", "get", "https://api.example.com/users/9", "--context", "Users"])

    assert result.exit_code == 1
    assert "[Users: Client Error] Not found" in result.output


def test_invalid_header(transport: MockTransport) -> None:
    result = runner.invoke(app, ["request", "get", "https://api.example.com/", "-H", "no-colon"])
    assert result.exit_code != 0
    assert transport.call_count == 0


def test_invalid_json(transport: MockTransport) -> None:
    result = runner.invoke(app, ["request", "post", "https://api.example.com/", "--json", "{nope"])
    assert result.exit_code != 0
    assert transport.call_count == 0


def test_verbose_prints_exchange(transport: MockTransport) -> None:
    transport.add(200, b"ok")

    result = runner.invoke(
        app, ["request", "get", "https://api.example.com/ping", "-v", "-H", "Authorization: Bearer secret"]
    )

    assert result.exit_code == 0
    assert "[RESTClient] Sending GET request to 'https://api.example.com/ping'" in result.output
    assert "authorization: [redacted]" in result.output
    assert "Bearer secret" not in result.output


def test_relative_url_rejected(transport: MockTransport) -> None:
    result = runner.invoke(app, ["request", "get", "api.example.com/users"])
    assert result.exit_code != 0
    assert transport.call_count == 0
