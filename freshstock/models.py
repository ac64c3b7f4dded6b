"""Domain records handled by the API."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

ISO8601 = "%Y-%m-%d %H:%M:%S"


@dataclass
class Section:
    id: int = 0
    section_number: int = 0
    current_temperature: int = 0
    minimum_temperature: int = 0
    current_capacity: int = 0
    minimum_capacity: int = 0
    maximum_capacity: int = 0
    warehouse_id: int = 0
    product_type_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the section as a JSON-ready mapping."""
        return asdict(self)


@dataclass
class ProductsBySection:
    section_id: int = 0
    section_number: int = 0
    products_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the report row as a JSON-ready mapping."""
        return asdict(self)


@dataclass
class Seller:
    id: int = 0
    cid: int = 0
    company_name: str = ""
    address: str = ""
    telephone: str = ""
    locality_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the seller as a JSON-ready mapping."""
        return asdict(self)


@dataclass
class Warehouse:
    id: int = 0
    address: str = ""
    telephone: str = ""
    warehouse_code: str = ""
    minimum_capacity: int = 0
    minimum_temperature: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the warehouse as a JSON-ready mapping."""
        return asdict(self)


@dataclass
class Product:
    id: int = 0
    description: str = ""
    expiration_rate: int = 0
    freezing_rate: int = 0
    height: float = 0.0
    length: float = 0.0
    net_weight: float = 0.0
    product_code: str = ""
    recommended_freezing_temperature: float = 0.0
    width: float = 0.0
    product_type_id: int = 0
    seller_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the product as a JSON-ready mapping."""
        return asdict(self)


@dataclass
class ProductRecord:
    last_update_date: datetime
    purchase_price: float
    sale_price: float
    product_id: int
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON-ready mapping with a formatted date."""
        data = asdict(self)
        data["last_update_date"] = self.last_update_date.strftime(ISO8601)
        return data