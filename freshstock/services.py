"""Service errors and in-memory services for sections, sellers and warehouses."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace

from .models import ProductsBySection, Section, Seller, Warehouse

# A temperature no section can have; an update carrying it leaves the field as it is.
UNSET_TEMPERATURE = -273


class ServiceError(Exception):
    """Base class for errors reported by a service."""

    default_message = "service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class NotFoundError(ServiceError):
    default_message = "not found"


class AlreadyExistsError(ServiceError):
    default_message = "already exists"


class InternalError(ServiceError):
    default_message = "internal server error"


class ForeignKeyConstraintError(ServiceError):
    default_message = "foreign key constraint failed"


class BadRequestError(ServiceError):
    default_message = "bad request"


class BodyValidationError(ServiceError):
    default_message = "invalid request body"


def _next_id(ids: Iterable[int]) -> int:
    return max(ids, default=0) + 1


class SectionService:
    """Sections kept in memory, with a count of products per section."""

    _PLAIN_FIELDS = (
        "section_number",
        "current_capacity",
        "minimum_capacity",
        "maximum_capacity",
        "warehouse_id",
        "product_type_id",
    )
    _TEMPERATURE_FIELDS = ("current_temperature", "minimum_temperature")

    def __init__(
        self,
        sections: Iterable[Section] = (),
        product_counts: Mapping[int, int] | None = None,
    ) -> None:
        self._sections = {section.id: replace(section) for section in sections}
        self._product_counts = dict(product_counts or {})

    def _find(self, section_id: int) -> Section:
        try:
            return self._sections[section_id]
        except KeyError:
            raise NotFoundError("section not found") from None

    def _check_number(self, number: int, exclude_id: int = 0) -> None:
        if any(
            s.section_number == number and s.id != exclude_id for s in self._sections.values()
        ):
            raise AlreadyExistsError("section already exists")

    def get_all(self) -> list[Section]:
        return [replace(s) for s in sorted(self._sections.values(), key=lambda s: s.id)]

    def get(self, section_id: int) -> Section:
        return replace(self._find(section_id))

    def create(self, section: Section) -> Section:
        self._check_number(section.section_number)
        stored = replace(section, id=_next_id(self._sections))
        self._sections[stored.id] = stored
        return replace(stored)

    def update(self, section: Section) -> Section:
        """Apply the non-zero fields of section (and set temperatures) to the stored one."""
        current = self._find(section.id)
        changes = {
            name: getattr(section, name)
            for name in self._PLAIN_FIELDS
            if getattr(section, name) != 0
        }
        changes.update(
            (name, getattr(section, name))
            for name in self._TEMPERATURE_FIELDS
            if getattr(section, name) != UNSET_TEMPERATURE
        )
        if "section_number" in changes:
            self._check_number(changes["section_number"], exclude_id=section.id)
        updated = replace(current, **changes)
        self._sections[updated.id] = updated
        return replace(updated)

    def delete(self, section_id: int) -> None:
        self._find(section_id)
        del self._sections[section_id]
        self._product_counts.pop(section_id, None)

    def get_section_products(self, section_id: int = 0) -> list[ProductsBySection]:
        """Product counts for one section, or for all of them when section_id is 0."""
        if section_id:
            chosen = [self._find(section_id)]
        else:
            chosen = sorted(self._sections.values(), key=lambda s: s.id)
        return [
            ProductsBySection(
                section_id=s.id,
                section_number=s.section_number,
                products_count=self._product_counts.get(s.id, 0),
            )
            for s in chosen
        ]


class SellerService:
    """Sellers kept in memory; localities, when given, restrict locality_id."""

    def __init__(
        self,
        sellers: Iterable[Seller] = (),
        localities: Iterable[str] | None = None,
    ) -> None:
        self._sellers = {seller.id: replace(seller) for seller in sellers}
        self._localities = None if localities is None else set(localities)

    def _find(self, seller_id: int) -> Seller:
        try:
            return self._sellers[seller_id]
        except KeyError:
            raise NotFoundError("seller not found") from None

    def _check(self, seller: Seller) -> None:
        if any(s.cid == seller.cid and s.id != seller.id for s in self._sellers.values()):
            raise AlreadyExistsError("seller already exists")
        if self._localities is not None and seller.locality_id not in self._localities:
            raise ForeignKeyConstraintError("locality does not exist")

    def get_all(self) -> list[Seller]:
        return [replace(s) for s in sorted(self._sellers.values(), key=lambda s: s.id)]

    def get(self, seller_id: int) -> Seller:
        return replace(self._find(seller_id))

    def create(self, seller: Seller) -> Seller:
        stored = replace(seller, id=_next_id(self._sellers))
        self._check(stored)
        self._sellers[stored.id] = stored
        return replace(stored)

    def update(
        self,
        seller_id: int,
        cid: int | None = None,
        company_name: str | None = None,
        address: str | None = None,
        telephone: str | None = None,
        locality_id: str | None = None,
    ) -> Seller:
        """Replace the fields that are given; the others keep their values."""
        current = self._find(seller_id)
        given = {
            "cid": cid,
            "company_name": company_name,
            "address": address,
            "telephone": telephone,
            "locality_id": locality_id,
        }
        updated = replace(current, **{k: v for k, v in given.items() if v is not None})
        self._check(updated)
        self._sellers[seller_id] = updated
        return replace(updated)

    def delete(self, seller_id: int) -> None:
        self._find(seller_id)
        del self._sellers[seller_id]


class WarehouseService:
    """Warehouses kept in memory, unique by warehouse code."""

    def __init__(self, warehouses: Iterable[Warehouse] = ()) -> None:
        self._warehouses = {w.id: replace(w) for w in warehouses}

    def _find(self, warehouse_id: int) -> Warehouse:
        try:
            return self._warehouses[warehouse_id]
        except KeyError:
            raise NotFoundError("warehouse not found") from None

    def _check_code(self, code: str, exclude_id: int = 0) -> None:
        if any(
            w.warehouse_code == code and w.id != exclude_id for w in self._warehouses.values()
        ):
            raise AlreadyExistsError("warehouse already exists")

    def get(self, warehouse_id: int) -> Warehouse:
        return replace(self._find(warehouse_id))

    def get_all(self) -> list[Warehouse]:
        return [replace(w) for w in sorted(self._warehouses.values(), key=lambda w: w.id)]

    def create(
        self,
        address: str,
        telephone: str,
        warehouse_code: str,
        minimum_capacity: int,
        minimum_temperature: int,
    ) -> Warehouse:
        self._check_code(warehouse_code)
        stored = Warehouse(
            id=_next_id(self._warehouses),
            address=address,
            telephone=telephone,
            warehouse_code=warehouse_code,
            minimum_capacity=minimum_capacity,
            minimum_temperature=minimum_temperature,
        )
        self._warehouses[stored.id] = stored
        return replace(stored)

    def update(
        self,
        warehouse_id: int,
        address: str | None = None,
        telephone: str | None = None,
        warehouse_code: str | None = None,
        minimum_capacity: int | None = None,
        minimum_temperature: int | None = None,
    ) -> Warehouse:
        """Replace the fields that are given; the others keep their values."""
        current = self._find(warehouse_id)
        if warehouse_code is not None:
            self._check_code(warehouse_code, exclude_id=warehouse_id)
        given = {
            "address": address,
            "telephone": telephone,
            "warehouse_code": warehouse_code,
            "minimum_capacity": minimum_capacity,
            "minimum_temperature": minimum_temperature,
        }
        updated = replace(current, **{k: v for k, v in given.items() if v is not None})
        self._warehouses[warehouse_id] = updated
        return replace(updated)

    def delete(self, warehouse_id: int) -> None:
        self._find(warehouse_id)
        del self._warehouses[warehouse_id]