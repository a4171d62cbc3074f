"""Sensitive header detection and formatting shared by the debug plugins.

Example:
    >>> from restspine.plugins.redaction import is_sensitive_header
    >>> is_sensitive_header("Authorization")
    True
    >>> is_sensitive_header("X-Client-Secret")
    True
    >>> is_sensitive_header("Content-Type")
    False
"""

from __future__ import annotations

from collections.abc import Iterable

REDACTED = "[redacted]"

SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
        "x-auth-token",
        "x-access-token",
        "bearer",
        "apikey",
        "api-key",
        "access-token",
        "refresh-token",
        "jwt",
        "session-token",
        "csrf-token",
        "x-csrf-token",
        "x-session-id",
    }
)

SENSITIVE_PATTERNS = ("password", "secret", "token")


def is_sensitive_header(name: str) -> bool:
    lowered = name.lower()
    return lowered in SENSITIVE_HEADERS or any(pattern in lowered for pattern in SENSITIVE_PATTERNS)


def redacted_headers(headers: Iterable[tuple[str, str]], redact: bool = True) -> list[tuple[str, str]]:
    """Sort headers by name and mask sensitive values.

    Example:
        >>> redacted_headers([("x-api-key", "abc"), ("accept", "*/*")])
        [('accept', '*/*'), ('x-api-key', '[redacted]')]
    """
    return [
        (name, REDACTED if redact and is_sensitive_header(name) else value)
        for name, value in sorted(headers, key=lambda item: item[0].lower())
    ]


def body_text(body: bytes | None) -> str:
    """Decode a body for display, or ``No body`` when empty or not UTF-8."""
    if not body:
        return "No body"
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return "No body"


__all__ = [
    "REDACTED",
    "is_sensitive_header",
    "redacted_headers",
    "body_text",
]
