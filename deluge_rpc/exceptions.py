"""
Exceptions raised by the Deluge RPC client.

Every failure of a remote call surfaces as one of these, all derived from
DelugeError:
- SerializationError: the request envelope could not be encoded
- TransportError: the HTTP request itself failed (connection, DNS, TLS, timeout)
- HTTPStatusError: the daemon answered with a non-200 status
- ProtocolError: a 200 response body is not a valid response envelope
- RemoteError: the envelope carried a non-null error
- AuthenticationFailed: auth.login did not return true
- UnexpectedResultShape: a result did not have the shape its method requires
"""

from typing import Any


class DelugeError(Exception):
    """Base exception for all Deluge RPC errors."""
    pass


class SerializationError(DelugeError):
    """Raised when a request envelope cannot be encoded as JSON."""
    pass


class TransportError(DelugeError):
    """Raised when the HTTP round trip fails before a response is received."""
    pass


class HTTPStatusError(DelugeError):
    """Raised when the daemon responds with a status other than 200."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Received non-OK status to HTTP request: {status_code}")


class ProtocolError(DelugeError):
    """Raised when a response body does not decode as a response envelope."""
    pass


class RemoteError(DelugeError):
    """Raised when the daemon reports an error for a call."""

    def __init__(self, method: str, request_id: int, error: Any):
        self.method = method
        self.request_id = request_id
        self.error = error
        if isinstance(error, dict) and "message" in error:
            detail = error["message"]
        else:
            detail = error
        super().__init__(f"{method} (id {request_id}) failed: {detail}")


class AuthenticationFailed(DelugeError):
    """Raised when the daemon rejects the password."""
    pass


class UnexpectedResultShape(DelugeError):
    """Raised when a result does not match the type its method returns."""

    def __init__(self, method: str, expected: str, result: Any):
        self.method = method
        self.expected = expected
        self.result = result
        super().__init__(f"{method} returned {type(result).__name__}, expected {expected}: {result!r}")
