"""HTTP request and response values and the JSON envelopes the API answers with."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, is_dataclass
from http import HTTPStatus
from typing import Any


@dataclass
class Request:
    """An incoming request as seen by a handler."""

    method: str = "GET"
    path: str = "/"
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: bytes | str = b""

    def param(self, name: str) -> str:
        """Return a path parameter, or an empty string when it is absent."""
        return self.params.get(name, "")

    def query_value(self, name: str) -> str:
        """Return a query-string value, or an empty string when it is absent."""
        return self.query.get(name, "")


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"{type(value).__name__} is not JSON serialisable")


@dataclass
class Response:
    """A status code and an optional JSON body."""

    status: int
    body: dict[str, Any] | None = None

    def json(self) -> str:
        """Serialise the body; a response without a body gives an empty string."""
        if self.body is None:
            return ""
        return json.dumps(self.body, default=_encode)


def _status_code_name(status: int) -> str:
    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        return ""
    return phrase.lower().replace(" ", "_")


def success(status: int, data: Any) -> Response:
    """Wrap data in the success envelope; 204 responses carry no body."""
    if status == HTTPStatus.NO_CONTENT:
        return Response(status)
    return Response(status, {"data": data})


def error(status: int, message: str, *args: Any) -> Response:
    """Build the error envelope, formatting the message with args when given."""
    text = message % args if args else message
    return Response(status, {"code": _status_code_name(status), "message": text})