"""Protocol definitions - all extension points."""

from restspine.protocols.plugin import RequestPlugin, ResponsePlugin
from restspine.protocols.transport import Transport

__all__ = [
    # Plugins
    "RequestPlugin",
    "ResponsePlugin",
    # Transport
    "Transport",
]
