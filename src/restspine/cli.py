"""CLI entry point."""

from __future__ import annotations

import asyncio
import json
from urllib.parse import urlsplit, urlunsplit

import typer
from rich.console import Console
from rich.markup import escape

from restspine.client import ClientConfig, RESTClient
from restspine.core.config import get_settings
from restspine.core.exceptions import APIError, ConfigurationError
from restspine.core.logging import configure_logging
from restspine.http.retry import RetryPolicy
from restspine.models.body import JSONBody, StringBody
from restspine.models.http import HTTPMethod
from restspine.plugins import PrintRequestPlugin, PrintResponsePlugin

app = typer.Typer(
    name="restspine",
    help="Async REST API client",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _split_pairs(values: list[str], separator: str, option: str) -> list[tuple[str, str]]:
    pairs = []
    for value in values:
        key, sep, item = value.partition(separator)
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected KEY{separator}VALUE, got {value!r}", param_hint=option)
        pairs.append((key.strip(), item.strip() if separator == ":" else item))
    return pairs


@app.command()
def version() -> None:
    """Show version."""
    from restspine import __version__

    console.print(f"restspine {__version__}")


@app.command()
def request(
    method: HTTPMethod = typer.Argument(..., help="HTTP method", case_sensitive=False),
    url: str = typer.Argument(..., help="Absolute URL"),
    header: list[str] = typer.Option([], "--header", "-H", help="Header as 'Name: value'"),
    query: list[str] = typer.Option([], "--query", "-q", help="Query item as 'key=value'"),
    json_body: str | None = typer.Option(None, "--json", help="JSON request body"),
    data: str | None = typer.Option(None, "--data", "-d", help="Plain text request body"),
    context: str | None = typer.Option(None, "--context", help="Error context label"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print request and response"),
) -> None:
    """Send a single request and print the response body."""
    if json_body is not None and data is not None:
        raise typer.BadParameter("use either --json or --data", param_hint="--json")

    body = None
    if json_body is not None:
        try:
            body = JSONBody(json.loads(json_body))
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"invalid JSON: {e}", param_hint="--json") from e
    elif data is not None:
        body = StringBody(data)

    parts = urlsplit(url)
    base_url = urlunsplit((parts.scheme, parts.netloc, "", "", ""))
    path = parts.path
    query_items = _split_pairs(query, "=", "--query")
    headers = dict(_split_pairs(header, ":", "--header"))
    if parts.query:
        base_url = f"{base_url}{path}?{parts.query}"
        path = ""

    try:
        config = ClientConfig(
            base_url=base_url,
            base_error_context=context,
            retry_policy=RetryPolicy.from_settings(get_settings()),
        )
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="URL") from e

    if verbose:
        configure_logging(level="DEBUG")
        config = config.with_request_plugin(PrintRequestPlugin(debug_only=False, console=err_console))
        config = config.with_response_plugin(PrintResponsePlugin(debug_only=False, console=err_console))

    async def run() -> bytes:
        async with RESTClient(config) as client:
            return await client.fetch_data(
                method,
                path,
                body,
                extra_headers=headers,
                extra_query_items=query_items,
            )

    try:
        content = asyncio.run(run())
    except APIError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from e

    console.print(content.decode("utf-8", errors="replace"), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
