"""
Real HTTP transport.

Must implement the same Transport interface as the mock transport.
Errors raised by httpx (connection failures, timeouts, HTTP status errors)
propagate to the caller unchanged.
"""

from .transport import HttpxTransport

__all__ = ["HttpxTransport"]
