"""Error context chaining.

Errors raised by the client carry a breadcrumb describing where they
happened. The breadcrumb joins the client's base context with the
call-specific context using ``->``.

Example:
    >>> from restspine.core.context import chain_context
    >>> chain_context("Users", "fetchProfile")
    'Users->fetchProfile'
    >>> chain_context(None, "fetchProfile")
    'fetchProfile'
    >>> chain_context(None, None) is None
    True
"""

from __future__ import annotations

CONTEXT_SEPARATOR = "->"


def chain_context(*parts: str | None) -> str | None:
    """Join non-empty context parts, or return None when nothing is left.

    Example:
        >>> chain_context("Users", "", "avatar")
        'Users->avatar'
        >>> chain_context("", None) is None
        True
    """
    context = CONTEXT_SEPARATOR.join(part for part in parts if part)
    return context or None


__all__ = [
    "CONTEXT_SEPARATOR",
    "chain_context",
]
