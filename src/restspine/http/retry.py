"""Retry policy for rate-limited (HTTP 429) responses.

Throttled calls are the only failures retried automatically. The delay
before the next attempt honours the server hint when it has one:

1. ``retry-after-ms`` header (milliseconds)
2. ``retry-after`` header (seconds)
3. the attempt number, in seconds

and is always clamped to ``[min_delay, max_delay]``.

Example:
    >>> from restspine.http.retry import RetryPolicy
    >>> policy = RetryPolicy()
    >>> policy.calculate_delay(1, {"retry-after": "10"})
    5.0
    >>> policy.calculate_delay(1, {"retry-after": "0.1"})
    0.5
    >>> policy.calculate_delay(3, {})
    3.0
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restspine.core.config import Settings

TOO_MANY_REQUESTS = 429


def _parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for 429 retry behavior.

    Attributes:
        max_attempts: Maximum total attempts (including first try)
        min_delay: Lower bound of any delay, in seconds
        max_delay: Upper bound of any delay, in seconds
    """

    max_attempts: int = 5
    min_delay: float = 0.5
    max_delay: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        """Build a policy from library settings."""
        return cls(
            max_attempts=settings.max_attempts,
            min_delay=settings.min_retry_delay,
            max_delay=settings.max_retry_delay,
        )

    def should_retry(self, status_code: int, attempt: int) -> bool:
        """Determine if a response on the given attempt (1-indexed) is retried."""
        return status_code == TOO_MANY_REQUESTS and attempt < self.max_attempts

    def clamp(self, seconds: float) -> float:
        return max(self.min_delay, min(seconds, self.max_delay))

    def calculate_delay(self, attempt: int, headers: Mapping[str, str]) -> float:
        """Calculate the delay before retrying after the given attempt.

        Header lookup is case-insensitive when ``headers`` is an
        ``httpx.Headers``; plain dicts are expected to use lowercase keys.
        Unparseable header values fall through to the next source.

        Args:
            attempt: Attempt number that received the 429 (1-indexed)
            headers: Response headers

        Returns:
            Delay in seconds
        """
        retry_after_ms = _parse_float(headers.get("retry-after-ms"))
        if retry_after_ms is not None:
            return self.clamp(retry_after_ms / 1000)

        retry_after = _parse_float(headers.get("retry-after"))
        if retry_after is not None:
            return self.clamp(retry_after)

        return self.clamp(float(attempt))


DEFAULT_RETRY_POLICY = RetryPolicy()


__all__ = [
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "TOO_MANY_REQUESTS",
]
