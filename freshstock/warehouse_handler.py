"""HTTP handlers for warehouses."""

from __future__ import annotations

import logging
import re
from http import HTTPStatus

from .requests import BindError, WarehousePatchRequest, WarehousePostRequest, bind_json
from .services import (
    AlreadyExistsError,
    BadRequestError,
    BodyValidationError,
    NotFoundError,
    ServiceError,
)
from .web import Request, Response, error, success

_log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def _parse_id(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'parsing "{text}": value out of range')
    return value


def _bad_request() -> Response:
    exc = BadRequestError()
    _log.error("%s", exc)
    return error(HTTPStatus.BAD_REQUEST, str(exc))


def _invalid_body() -> Response:
    exc = BodyValidationError()
    _log.error("%s", exc)
    return error(HTTPStatus.UNPROCESSABLE_ENTITY, str(exc))


class WarehouseHandler:
    """Turns requests into warehouse service calls and responses."""

    def __init__(self, service) -> None:
        self._service = service

    def get(self, request: Request) -> Response:
        try:
            warehouse_id = _parse_id(request.param("id"))
        except ValueError:
            return _bad_request()
        try:
            warehouse = self._service.get(warehouse_id)
        except NotFoundError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.NOT_FOUND, str(exc))
        except ServiceError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return success(HTTPStatus.OK, warehouse)

    def get_all(self, request: Request) -> Response:
        try:
            warehouses = self._service.get_all()
        except ServiceError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return success(HTTPStatus.OK, warehouses)

    def create(self, request: Request) -> Response:
        try:
            req = bind_json(WarehousePostRequest, request.body)
        except BindError:
            return _invalid_body()
        try:
            created = self._service.create(
                req.address,
                req.telephone,
                req.warehouse_code,
                req.minimum_capacity,
                req.minimum_temperature,
            )
        except AlreadyExistsError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.CONFLICT, str(exc))
        except ServiceError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return success(HTTPStatus.CREATED, created)

    def update(self, request: Request) -> Response:
        try:
            warehouse_id = _parse_id(request.param("id"))
        except ValueError:
            return _bad_request()
        try:
            req = bind_json(WarehousePatchRequest, request.body)
        except BindError:
            return _invalid_body()
        try:
            updated = self._service.update(
                warehouse_id,
                req.address,
                req.telephone,
                req.warehouse_code,
                req.minimum_capacity,
                req.minimum_temperature,
            )
        except AlreadyExistsError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.CONFLICT, str(exc))
        except NotFoundError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.NOT_FOUND, str(exc))
        except ServiceError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return success(HTTPStatus.OK, updated)

    def delete(self, request: Request) -> Response:
        try:
            warehouse_id = _parse_id(request.param("id"))
        except ValueError:
            return _bad_request()
        try:
            self._service.delete(warehouse_id)
        except NotFoundError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.NOT_FOUND, str(exc))
        except ServiceError as exc:
            _log.error("%s", exc)
            return error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        return success(HTTPStatus.NO_CONTENT, "")