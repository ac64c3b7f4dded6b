"""URL routing for the API and a WSGI entry point."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs

from .section_handler import SectionHandler
from .seller_handler import SellerHandler
from .services import SectionService, SellerService, WarehouseService
from .warehouse_handler import WarehouseHandler
from .web import Request, Response, error

Handler = Callable[[Request], Response]

API_PREFIX = "/api/v1"


def _segments(path: str) -> tuple[str, ...]:
    return tuple(part for part in path.split("/") if part)


@dataclass(frozen=True)
class _Route:
    method: str
    segments: tuple[str, ...]
    handler: Handler

    @property
    def wildcards(self) -> int:
        return sum(1 for s in self.segments if s.startswith(":"))

    def match(self, method: str, parts: tuple[str, ...]) -> dict[str, str] | None:
        if method != self.method or len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for pattern, part in zip(self.segments, parts):
            if pattern.startswith(":"):
                params[pattern[1:]] = part
            elif pattern != part:
                return None
        return params


def _parse_query(query: Mapping[str, str] | str | None) -> dict[str, str]:
    if query is None:
        return {}
    if isinstance(query, str):
        return {key: values[0] for key, values in parse_qs(query).items()}
    return dict(query)


class Router:
    """Maps method and path to the section, seller and warehouse handlers."""

    def __init__(
        self,
        section_service: Any = None,
        seller_service: Any = None,
        warehouse_service: Any = None,
    ) -> None:
        self._section_service = section_service if section_service is not None else SectionService()
        self._seller_service = seller_service if seller_service is not None else SellerService()
        self._warehouse_service = (
            warehouse_service if warehouse_service is not None else WarehouseService()
        )
        self._routes: list[_Route] = []

    def map_routes(self) -> None:
        """Register every API route."""
        self._build_seller_routes()
        self._build_section_routes()
        self._build_warehouse_routes()

    def _build_seller_routes(self) -> None:
        handler = SellerHandler(self._seller_service)
        base = f"{API_PREFIX}/sellers"
        self.add("POST", base, handler.create)
        self.add("GET", base, handler.get_all)
        self.add("GET", f"{base}/:id", handler.get)
        self.add("PATCH", f"{base}/:id", handler.update)
        self.add("DELETE", f"{base}/:id", handler.delete)

    def _build_section_routes(self) -> None:
        handler = SectionHandler(self._section_service)
        base = f"{API_PREFIX}/sections"
        self.add("GET", f"{base}/", handler.get_all)
        self.add("GET", f"{base}/:id", handler.get)
        self.add("POST", f"{base}/", handler.create)
        self.add("PATCH", f"{base}/:id", handler.update)
        self.add("DELETE", f"{base}/:id", handler.delete)
        self.add("GET", f"{base}/reportProducts", handler.get_section_products)

    def _build_warehouse_routes(self) -> None:
        handler = WarehouseHandler(self._warehouse_service)
        base = f"{API_PREFIX}/warehouses"
        self.add("GET", f"{base}/", handler.get_all)
        self.add("GET", f"{base}/:id", handler.get)
        self.add("POST", f"{base}/", handler.create)
        self.add("PATCH", f"{base}/:id", handler.update)
        self.add("DELETE", f"{base}/:id", handler.delete)

    def add(self, method: str, path: str, handler: Handler) -> None:
        """Register handler for method and path; ':name' segments capture parameters."""
        self._routes.append(_Route(method.upper(), _segments(path), handler))

    def dispatch(
        self,
        method: str,
        path: str,
        query: Mapping[str, str] | str | None = None,
        body: bytes | str = b"",
    ) -> Response:
        """Run the handler for a request; static segments win over parameters."""
        method = method.upper()
        parts = _segments(path)
        matches = [
            (route, params)
            for route in self._routes
            if (params := route.match(method, parts)) is not None
        ]
        if not matches:
            return error(HTTPStatus.NOT_FOUND, "404 page not found")
        route, params = min(matches, key=lambda item: item[0].wildcards)
        request = Request(
            method=method,
            path=path,
            params=params,
            query=_parse_query(query),
            body=body,
        )
        return route.handler(request)

    def wsgi_app(self, environ: dict[str, Any], start_response: Callable) -> list[bytes]:
        """Serve the routes as a WSGI application."""
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        stream = environ.get("wsgi.input")
        body = stream.read(length) if stream is not None and length > 0 else b""
        response = self.dispatch(
            environ.get("REQUEST_METHOD", "GET"),
            environ.get("PATH_INFO", "/"),
            environ.get("QUERY_STRING", ""),
            body,
        )
        payload = response.json().encode("utf-8")
        try:
            phrase = HTTPStatus(response.status).phrase
        except ValueError:
            phrase = ""
        headers = [("Content-Length", str(len(payload)))]
        if payload:
            headers.insert(0, ("Content-Type", "application/json; charset=utf-8"))
        start_response(f"{int(response.status)} {phrase}".rstrip(), headers)
        return [payload]