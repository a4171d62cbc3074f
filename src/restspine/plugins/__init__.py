"""Built-in request and response plugins.

Example:
    >>> from restspine.plugins import HeadersPlugin, LogRequestPlugin
    >>> plugins = [HeadersPlugin({"X-Client": "restspine"}), LogRequestPlugin()]
"""

from restspine.plugins.console import PrintRequestPlugin, PrintResponsePlugin
from restspine.plugins.headers import HeadersPlugin
from restspine.plugins.log import LogRequestPlugin, LogResponsePlugin
from restspine.plugins.redaction import is_sensitive_header

__all__ = [
    "HeadersPlugin",
    "LogRequestPlugin",
    "LogResponsePlugin",
    "PrintRequestPlugin",
    "PrintResponsePlugin",
    "is_sensitive_header",
]
