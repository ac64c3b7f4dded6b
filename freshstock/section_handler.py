"""HTTP handlers for sections."""

from __future__ import annotations

import functools
import logging
import re
from http import HTTPStatus
from typing import Any, Callable, Iterable

from .models import Section
from .requests import BindError, MissingFieldError, PatchSection, PostSection, bind_json
from .services import UNSET_TEMPERATURE, AlreadyExistsError, NotFoundError, ServiceError
from .web import Request, Response, error, success

_log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

_NOT_FOUND = "The section with id %d does not exists"
_CONFLICT = "a section with the section_number %d already exists"

_ErrorMapping = Iterable[tuple[Any, Callable[[ServiceError], Response]]]


class _Abort(Exception):
    """Carries a ready response out of a handler."""

    def __init__(self, response: Response) -> None:
        super().__init__(response)
        self.response = response


def _handles(method):
    @functools.wraps(method)
    def wrapper(self, request: Request) -> Response:
        try:
            return method(self, request)
        except _Abort as abort:
            return abort.response

    return wrapper


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'parsing "{text}": value out of range')
    return value


def _path_id(raw: str, message: str | None = None) -> int:
    """Parse an id, aborting with 400 and the given message or the parse error."""
    try:
        return _atoi(raw)
    except ValueError as exc:
        _log.error("%s", exc)
        raise _Abort(error(HTTPStatus.BAD_REQUEST, message or str(exc))) from exc


def _bind(cls, body, status: HTTPStatus, missing_message: str | None = None):
    """Bind a JSON body, aborting with the given status when it does not fit."""
    try:
        return bind_json(cls, body)
    except BindError as exc:
        _log.error("%s", exc)
        if missing_message and isinstance(exc, MissingFieldError):
            raise _Abort(error(HTTPStatus.BAD_REQUEST, missing_message)) from exc
        raise _Abort(error(status, str(exc))) from exc


def _run(
    ok_status: HTTPStatus,
    call: Callable[[], Any],
    handlers: _ErrorMapping = (),
    quiet: tuple[type[ServiceError], ...] = (),
) -> Response:
    """Run a service call and map its errors to responses; unknown errors give 500."""
    try:
        result = call()
    except ServiceError as exc:
        if not isinstance(exc, quiet):
            _log.error("%s", exc)
        for exc_type, respond in handlers:
            if isinstance(exc, exc_type):
                return respond(exc)
        return error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
    return success(ok_status, result)


def _not_found(section_id: int):
    return NotFoundError, lambda _exc: error(HTTPStatus.NOT_FOUND, _NOT_FOUND, section_id)


def _conflict(section_number: int):
    return AlreadyExistsError, lambda _exc: error(HTTPStatus.CONFLICT, _CONFLICT, section_number)


def _to_section(section_id: int, req, current_temperature: int, minimum_temperature: int) -> Section:
    return Section(
        id=section_id,
        section_number=req.section_number,
        current_temperature=current_temperature,
        minimum_temperature=minimum_temperature,
        current_capacity=req.current_capacity,
        minimum_capacity=req.minimum_capacity,
        maximum_capacity=req.maximum_capacity,
        warehouse_id=req.warehouse_id,
        product_type_id=req.product_type_id,
    )


def _or_unset(value: int | None) -> int:
    return UNSET_TEMPERATURE if value is None else value


class SectionHandler:
    """Turns requests into section service calls and responses."""

    def __init__(self, service) -> None:
        self._service = service

    def get_all(self, request: Request) -> Response:
        return _run(HTTPStatus.OK, lambda: self._service.get_all() or [])

    @_handles
    def get(self, request: Request) -> Response:
        section_id = _path_id(request.param("id"))
        return _run(HTTPStatus.OK, lambda: self._service.get(section_id), [_not_found(section_id)])

    @_handles
    def create(self, request: Request) -> Response:
        req = _bind(PostSection, request.body, HTTPStatus.UNPROCESSABLE_ENTITY)
        section = _to_section(0, req, req.current_temperature, req.minimum_temperature)
        return _run(
            HTTPStatus.CREATED,
            lambda: self._service.create(section),
            [_conflict(req.section_number)],
        )

    @_handles
    def update(self, request: Request) -> Response:
        section_id = _path_id(request.param("id"))
        req = _bind(PatchSection, request.body, HTTPStatus.BAD_REQUEST)
        section = _to_section(
            section_id, req, _or_unset(req.current_temperature), _or_unset(req.minimum_temperature)
        )
        return _run(
            HTTPStatus.OK,
            lambda: self._service.update(section),
            [_not_found(section_id), _conflict(req.section_number)],
            quiet=(AlreadyExistsError,),
        )

    @_handles
    def delete(self, request: Request) -> Response:
        section_id = _path_id(request.param("id"))

        def remove() -> str:
            self._service.delete(section_id)
            return ""

        return _run(HTTPStatus.NO_CONTENT, remove, [_not_found(section_id)])

    @_handles
    def get_section_products(self, request: Request) -> Response:
        raw = request.query_value("id")
        section_id = _path_id(raw) if raw else 0
        return _run(
            HTTPStatus.OK,
            lambda: self._service.get_section_products(section_id),
            [_not_found(section_id)],
        )