"""HTTP handlers for sellers."""

from __future__ import annotations

from http import HTTPStatus

from .models import Seller
from .requests import SellerPatchRequest, SellerPostRequest
from .section_handler import _bind, _handles, _path_id, _run
from .services import AlreadyExistsError, ForeignKeyConstraintError, NotFoundError
from .web import Request, Response, error

_INVALID_ID = "Invalid ID"
_NOT_FOUND = "Id %d does not exist"
_MISSING_FIELDS = "Bad Request, missing required fields"

_CONFLICT = (
    (AlreadyExistsError, ForeignKeyConstraintError),
    lambda exc: error(HTTPStatus.CONFLICT, str(exc)),
)


def _not_found(seller_id: int):
    return NotFoundError, lambda _exc: error(HTTPStatus.NOT_FOUND, _NOT_FOUND, seller_id)


def _seller_id(request: Request) -> int:
    return _path_id(request.param("id"), _INVALID_ID)


class SellerHandler:
    """Turns requests into seller service calls and responses."""

    def __init__(self, service) -> None:
        self._service = service

    def get_all(self, request: Request) -> Response:
        return _run(HTTPStatus.OK, self._service.get_all)

    @_handles
    def get(self, request: Request) -> Response:
        seller_id = _seller_id(request)
        return _run(HTTPStatus.OK, lambda: self._service.get(seller_id), [_not_found(seller_id)])

    @_handles
    def create(self, request: Request) -> Response:
        req = _bind(
            SellerPostRequest, request.body, HTTPStatus.UNPROCESSABLE_ENTITY, _MISSING_FIELDS
        )
        seller = Seller(
            cid=req.cid,
            company_name=req.company_name,
            address=req.address,
            telephone=req.telephone,
            locality_id=req.locality_id,
        )
        return _run(HTTPStatus.CREATED, lambda: self._service.create(seller), [_CONFLICT])

    @_handles
    def update(self, request: Request) -> Response:
        seller_id = _seller_id(request)
        req = _bind(SellerPatchRequest, request.body, HTTPStatus.UNPROCESSABLE_ENTITY)
        return _run(
            HTTPStatus.OK,
            lambda: self._service.update(
                seller_id, req.cid, req.company_name, req.address, req.telephone, req.locality_id
            ),
            [_not_found(seller_id), _CONFLICT],
        )

    @_handles
    def delete(self, request: Request) -> Response:
        seller_id = _seller_id(request)

        def remove() -> str:
            self._service.delete(seller_id)
            return ""

        return _run(HTTPStatus.NO_CONTENT, remove, [_not_found(seller_id)])