"""restspine HTTP layer.

Provides the 429 retry policy, the transport controller and the default
httpx-backed transport.

Example:
    >>> from restspine.http import RetryPolicy
    >>> RetryPolicy().max_attempts
    5
"""

from restspine.http.controller import TransportController
from restspine.http.retry import DEFAULT_RETRY_POLICY, RetryPolicy
from restspine.http.transport import HttpxTransport

__all__ = [
    "TransportController",
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "HttpxTransport",
]
