"""Request bodies accepted by the API and binding of JSON into them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, TypeVar

from .models import ISO8601, Product, ProductRecord

T = TypeVar("T")


class BindError(ValueError):
    """The body could not be decoded into the requested shape."""


class MissingFieldError(BindError):
    """Decoding worked but required fields were missing or empty."""

    def __init__(self, type_name: str, names: list[str]) -> None:
        self.fields = tuple(names)
        message = "\n".join(
            f"Key: '{type_name}.{name}' Error:Field validation for '{name}' failed on the 'required' tag"
            for name in names
        )
        super().__init__(message)


_ZERO: dict[type, Any] = {int: 0, float: 0.0, str: ""}


def _spec(kind: type, *, required: bool = False, pointer: bool = False) -> Any:
    """Declare a body field: its JSON kind, whether it is required, and whether null is kept."""
    default = None if pointer else _ZERO[kind]
    return field(default=default, metadata={"kind": kind, "required": required, "pointer": pointer})


def _coerce(kind: type, name: str, value: Any) -> Any:
    if isinstance(value, bool):
        ok = False
    elif kind is int:
        ok = isinstance(value, int)
    elif kind is float:
        ok = isinstance(value, (int, float))
        if ok:
            value = float(value)
    else:
        ok = isinstance(value, str)
    if not ok:
        raise BindError(f"field '{name}': expected {kind.__name__}, got {type(value).__name__}")
    return value


def _is_blank(value: Any, kind: type, pointer: bool) -> bool:
    if pointer:
        return value is None
    return value == _ZERO[kind]


def bind_json(cls: type[T], body: bytes | str | None) -> T:
    """Decode a JSON body into cls, then check its required fields."""
    if isinstance(body, (bytes, bytearray)):
        try:
            text = bytes(body).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BindError("body is not valid UTF-8") from exc
    else:
        text = body or ""
    if not text.strip():
        raise BindError("EOF")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BindError(f"invalid JSON: {exc.msg}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise BindError(f"cannot bind JSON {type(payload).__name__} into {cls.__name__}")

    values: dict[str, Any] = {}
    for spec in fields(cls):
        raw = payload.get(spec.name)
        if raw is not None:
            values[spec.name] = _coerce(spec.metadata["kind"], spec.name, raw)
    instance = cls(**values)

    missing = [
        spec.name
        for spec in fields(cls)
        if spec.metadata["required"]
        and _is_blank(getattr(instance, spec.name), spec.metadata["kind"], spec.metadata["pointer"])
    ]
    if missing:
        raise MissingFieldError(cls.__name__, missing)
    return instance


def string_to_mysql_date(date: str) -> datetime:
    """Parse a date in the storage format; raises ValueError when it does not match."""
    return datetime.strptime(date, ISO8601)


@dataclass
class RequestBuyerPost:
    id: int = _spec(int)
    card_number_id: str = _spec(str, required=True)
    first_name: str = _spec(str, required=True)
    last_name: str = _spec(str, required=True)


@dataclass
class RequestBuyerPatch:
    id: int = _spec(int)
    card_number_id: str = _spec(str)
    first_name: str = _spec(str)
    last_name: str = _spec(str)


@dataclass
class CarryPostRequest:
    cid: str | None = _spec(str, required=True, pointer=True)
    company_name: str | None = _spec(str, required=True, pointer=True)
    address: str | None = _spec(str, required=True, pointer=True)
    telephone: str | None = _spec(str, required=True, pointer=True)
    locality_id: str | None = _spec(str, required=True, pointer=True)


@dataclass
class EmployeeDTOPost:
    card_number_id: str | None = _spec(str, required=True, pointer=True)
    first_name: str | None = _spec(str, required=True, pointer=True)
    last_name: str | None = _spec(str, required=True, pointer=True)
    warehouse_id: int | None = _spec(int, required=True, pointer=True)


@dataclass
class EmployeeDTOPatch:
    first_name: str = _spec(str)
    last_name: str = _spec(str)
    warehouse_id: int = _spec(int)


@dataclass
class InboundOrderDTOPost:
    order_date: str | None = _spec(str, required=True, pointer=True)
    order_number: str | None = _spec(str, required=True, pointer=True)
    employee_id: int | None = _spec(int, required=True, pointer=True)
    product_batch_id: int | None = _spec(int, required=True, pointer=True)
    warehouse_id: int | None = _spec(int, required=True, pointer=True)


@dataclass
class ProductPostRequest:
    description: str | None = _spec(str, required=True, pointer=True)
    expiration_rate: int | None = _spec(int, required=True, pointer=True)
    freezing_rate: int | None = _spec(int, required=True, pointer=True)
    height: float | None = _spec(float, required=True, pointer=True)
    length: float | None = _spec(float, required=True, pointer=True)
    net_weight: float | None = _spec(float, required=True, pointer=True)
    product_code: str | None = _spec(str, required=True, pointer=True)
    recommended_freezing_temperature: float | None = _spec(float, required=True, pointer=True)
    width: float | None = _spec(float, required=True, pointer=True)
    product_type_id: int | None = _spec(int, required=True, pointer=True)
    seller_id: int | None = _spec(int, pointer=True)

    def to_domain(self) -> Product:
        return Product(
            description=self.description,
            expiration_rate=self.expiration_rate,
            freezing_rate=self.freezing_rate,
            height=self.height,
            length=self.length,
            net_weight=self.net_weight,
            product_code=self.product_code,
            recommended_freezing_temperature=self.recommended_freezing_temperature,
            width=self.width,
            product_type_id=self.product_type_id,
            seller_id=self.seller_id,
        )


@dataclass
class ProductPatchRequest:
    description: str | None = _spec(str, pointer=True)
    expiration_rate: int | None = _spec(int, pointer=True)
    freezing_rate: int | None = _spec(int, pointer=True)
    height: float | None = _spec(float, pointer=True)
    length: float | None = _spec(float, pointer=True)
    net_weight: float | None = _spec(float, pointer=True)
    product_code: str | None = _spec(str, pointer=True)
    recommended_freezing_temperature: float | None = _spec(float, pointer=True)
    width: float | None = _spec(float, pointer=True)
    product_type_id: int | None = _spec(int, pointer=True)
    seller_id: int | None = _spec(int, pointer=True)

    def to_domain(self) -> Product:
        """Build a product; absent fields become zero values, seller_id stays absent."""

        def pick(value: Any, zero: Any) -> Any:
            return zero if value is None else value

        return Product(
            description=pick(self.description, ""),
            expiration_rate=pick(self.expiration_rate, 0),
            freezing_rate=pick(self.freezing_rate, 0),
            height=pick(self.height, 0.0),
            length=pick(self.length, 0.0),
            net_weight=pick(self.net_weight, 0.0),
            product_code=pick(self.product_code, ""),
            recommended_freezing_temperature=pick(self.recommended_freezing_temperature, 0.0),
            width=pick(self.width, 0.0),
            product_type_id=pick(self.product_type_id, 0),
            seller_id=self.seller_id,
        )


@dataclass
class PostProductBatch:
    batch_number: int = _spec(int, required=True)
    current_quantity: int = _spec(int, required=True)
    current_temperature: int = _spec(int, required=True)
    due_date: str = _spec(str, required=True)
    initial_quantity: int = _spec(int, required=True)
    manufacturing_date: str = _spec(str, required=True)
    manufacturing_hour: int = _spec(int, required=True)
    minimum_temperature: int = _spec(int, required=True)
    product_id: int = _spec(int, required=True)
    section_id: int = _spec(int, required=True)


@dataclass
class ProductRecordPostRequest:
    last_update_date: str = _spec(str, required=True)
    purchase_price: float | None = _spec(float, required=True, pointer=True)
    sale_price: float | None = _spec(float, required=True, pointer=True)
    product_id: int | None = _spec(int, required=True, pointer=True)

    def to_domain(self) -> ProductRecord:
        """Build a product record; raises ValueError for a malformed date."""
        return ProductRecord(
            last_update_date=string_to_mysql_date(self.last_update_date),
            purchase_price=self.purchase_price,
            sale_price=self.sale_price,
            product_id=self.product_id,
        )


@dataclass
class RequestPurchaseOrdersPost:
    id: int = _spec(int)
    order_number: str = _spec(str, required=True)
    order_date: str = _spec(str, required=True)
    tracking_code: str = _spec(str, required=True)
    buyer_id: int = _spec(int, required=True)
    product_record_id: int = _spec(int, required=True)
    order_status_id: int = _spec(int, required=True)


@dataclass
class PostSection:
    section_number: int = _spec(int, required=True)
    current_temperature: int | None = _spec(int, required=True, pointer=True)
    minimum_temperature: int | None = _spec(int, required=True, pointer=True)
    current_capacity: int = _spec(int, required=True)
    minimum_capacity: int = _spec(int, required=True)
    maximum_capacity: int = _spec(int, required=True)
    warehouse_id: int = _spec(int, required=True)
    product_type_id: int = _spec(int, required=True)


@dataclass
class PatchSection:
    section_number: int = _spec(int)
    current_temperature: int | None = _spec(int, pointer=True)
    minimum_temperature: int | None = _spec(int, pointer=True)
    current_capacity: int = _spec(int)
    minimum_capacity: int = _spec(int)
    maximum_capacity: int = _spec(int)
    warehouse_id: int = _spec(int)
    product_type_id: int = _spec(int)


@dataclass
class SellerPostRequest:
    cid: int | None = _spec(int, required=True, pointer=True)
    company_name: str | None = _spec(str, required=True, pointer=True)
    address: str | None = _spec(str, required=True, pointer=True)
    telephone: str | None = _spec(str, required=True, pointer=True)
    locality_id: str | None = _spec(str, required=True, pointer=True)


@dataclass
class SellerPatchRequest:
    cid: int | None = _spec(int, pointer=True)
    company_name: str | None = _spec(str, pointer=True)
    address: str | None = _spec(str, pointer=True)
    telephone: str | None = _spec(str, pointer=True)
    locality_id: str | None = _spec(str, pointer=True)


@dataclass
class WarehousePostRequest:
    address: str | None = _spec(str, required=True, pointer=True)
    telephone: str | None = _spec(str, required=True, pointer=True)
    warehouse_code: str | None = _spec(str, required=True, pointer=True)
    minimum_capacity: int | None = _spec(int, required=True, pointer=True)
    minimum_temperature: int | None = _spec(int, required=True, pointer=True)


@dataclass
class WarehousePatchRequest:
    address: str | None = _spec(str, pointer=True)
    telephone: str | None = _spec(str, pointer=True)
    warehouse_code: str | None = _spec(str, pointer=True)
    minimum_capacity: int | None = _spec(int, pointer=True)
    minimum_temperature: int | None = _spec(int, pointer=True)