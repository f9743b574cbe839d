"""
Request/Response envelopes for the Deluge Web JSON-RPC API.

Request:  {"method": "core.get_torrent_status", "id": 3, "params": ["<id>", []]}
Response: {"result": {...}, "error": null, "id": 3}
Error:    {"result": null, "error": {"message": "...", "code": 2}, "id": 3}
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .exceptions import ProtocolError, SerializationError


@dataclass(frozen=True)
class Request:
    """A single remote call: method name, request id and positional params."""

    method: str
    id: int
    params: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Response:
    """A decoded response envelope. result is not validated here."""

    result: Any = None
    error: Any = None
    id: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def encode_request(req: Request) -> bytes:
    """Serialize a Request to JSON bytes."""
    try:
        return json.dumps({"method": req.method, "id": req.id, "params": req.params}, allow_nan=False).encode()
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode {req.method} request: {e}") from e


def decode_response(data: bytes) -> Response:
    """Deserialize JSON bytes into a Response, requiring both result and error keys."""
    try:
        obj = json.loads(data)
    except RecursionError as e:
        raise ProtocolError("Response body is nested too deeply to decode") from e
    except ValueError as e:
        raise ProtocolError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(obj, dict):
        raise ProtocolError(f"Response body is not a JSON object: {type(obj).__name__}")

    missing = [key for key in ("result", "error") if key not in obj]
    if missing:
        raise ProtocolError(f"Response envelope missing keys: {', '.join(missing)}")

    return Response(result=obj["result"], error=obj["error"], id=obj.get("id"))
