"""
Mock transport.

Returns fake (but realistically encoded) Direct Plus replies without calling
the processor. Must follow the SAME Transport interface as the real client.
"""

from .transport import MockTransport, RecordedPost, build_reply

__all__ = ["MockTransport", "RecordedPost", "build_reply"]
