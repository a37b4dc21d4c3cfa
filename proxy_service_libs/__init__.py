"""
GAS Proxy Service Libraries Package.

Shared infrastructure for the proxy service: the Result type used by
outbound clients, structured logging and envelope-based error handling.
"""

from .result import Result

__all__ = ["Result"]
