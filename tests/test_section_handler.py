import json

import pytest

from freshstock.models import ProductsBySection, Section
from freshstock.section_handler import SectionHandler
from freshstock.services import AlreadyExistsError, InternalError, NotFoundError, SectionService
from freshstock.web import Request

FULL_BODY = (
    '{"section_number":1,"current_temperature":-1,"minimum_temperature":-5,'
    '"current_capacity":1,"minimum_capacity":1,"maximum_capacity":1,'
    '"warehouse_id":1,"product_type_id":1}'
)
ID_ONE = {"id": "1"}
NOT_FOUND_MESSAGE = "The section with id 1 does not exists"


class FailingSectionService:
    def __init__(self, exc):
        self.exc = exc

    def _fail(self, *args, **kwargs):
        raise self.exc

    get_all = get = create = update = delete = get_section_products = _fail


def section_one():
    return Section(
        id=1,
        section_number=1,
        current_temperature=-1,
        minimum_temperature=-5,
        current_capacity=1,
        minimum_capacity=1,
        maximum_capacity=1,
        warehouse_id=1,
        product_type_id=1,
    )


def call(service, method, **request_kwargs):
    return getattr(SectionHandler(service), method)(Request(**request_kwargs))


def body_of(response):
    return json.loads(response.json())


def _report_service():
    return SectionService(
        [section_one(), Section(id=2, section_number=2)], product_counts={1: 10, 2: 20}
    )


def test_create_ok():
    response = call(SectionService(), "create", body=FULL_BODY)
    assert response.status == 201
    assert body_of(response)["data"] == section_one().to_dict()


def test_create_fail_empty_body():
    assert call(SectionService(), "create", body="").status == 422


def test_create_conflict():
    response = call(SectionService([section_one()]), "create", body=FULL_BODY)
    assert response.status == 409
    assert body_of(response)["message"] == "a section with the section_number 1 already exists"


@pytest.mark.parametrize(
    "method, request_kwargs",
    [
        ("get_all", {}),
        ("get", {"params": ID_ONE}),
        ("create", {"body": FULL_BODY}),
        ("update", {"params": ID_ONE, "body": '{"section_number":2}'}),
        ("delete", {"params": ID_ONE}),
        ("get_section_products", {}),
    ],
)
def test_internal_error(method, request_kwargs):
    response = call(FailingSectionService(InternalError()), method, **request_kwargs)
    assert response.status == 500
    assert body_of(response)["message"] == str(InternalError())


@pytest.mark.parametrize(
    "service, data, expected_len",
    [([section_one()], None, 1), ([], [], 0)],
)
def test_find_all(service, data, expected_len):
    response = call(SectionService(service), "get_all")
    assert response.status == 200
    assert len(body_of(response)["data"]) == expected_len


def test_find_all_none_becomes_empty_list():
    class NoneService:
        def get_all(self):
            return None

    assert body_of(call(NoneService(), "get_all"))["data"] == []


@pytest.mark.parametrize("method", ["get", "update", "delete"])
def test_invalid_path_id(method):
    assert call(SectionService(), method, params={"id": "a"}).status == 400


@pytest.mark.parametrize(
    "service, method, request_kwargs",
    [
        (SectionService(), "get", {"params": ID_ONE}),
        (SectionService(), "update", {"params": ID_ONE, "body": "{}"}),
        (SectionService(), "delete", {"params": ID_ONE}),
        (FailingSectionService(NotFoundError()), "get_section_products", {"query": ID_ONE}),
    ],
)
def test_not_found(service, method, request_kwargs):
    response = call(service, method, **request_kwargs)
    assert response.status == 404
    assert body_of(response)["message"] == NOT_FOUND_MESSAGE


def test_find_by_id_existent():
    response = call(SectionService([section_one()]), "get", params=ID_ONE)
    assert response.status == 200
    assert body_of(response)["data"] == section_one().to_dict()


def test_update_ok():
    handler = SectionHandler(SectionService([section_one()]))
    first = handler.update(Request(params=ID_ONE, body="{}"))
    assert first.status == 200
    assert body_of(first)["data"] == section_one().to_dict()

    body = (
        '{"section_number":2,"current_temperature":1,"minimum_temperature":-10,'
        '"current_capacity":2,"minimum_capacity":2,"maximum_capacity":2,'
        '"warehouse_id":2,"product_type_id":2}'
    )
    second = handler.update(Request(params=ID_ONE, body=body))
    expected = Section(
        id=1,
        section_number=2,
        current_temperature=1,
        minimum_temperature=-10,
        current_capacity=2,
        minimum_capacity=2,
        maximum_capacity=2,
        warehouse_id=2,
        product_type_id=2,
    )
    assert second.status == 200
    assert body_of(second)["data"] == expected.to_dict()


def test_update_fail_empty_body():
    assert call(SectionService([section_one()]), "update", params=ID_ONE, body="").status == 400


@pytest.mark.parametrize(
    "service",
    [
        SectionService([section_one(), Section(id=2, section_number=2)]),
        FailingSectionService(AlreadyExistsError()),
    ],
)
def test_update_existent_section_number(service):
    response = call(service, "update", params=ID_ONE, body='{"section_number":2}')
    assert response.status == 409
    assert body_of(response)["message"] == "a section with the section_number 2 already exists"


def test_delete_existent():
    service = SectionService([section_one()])
    response = call(service, "delete", params=ID_ONE)
    assert response.status == 204
    assert response.json() == ""
    assert len(service.get_all()) == 0


@pytest.mark.parametrize(
    "query, expected",
    [
        ({}, [
            ProductsBySection(section_id=1, section_number=1, products_count=10),
            ProductsBySection(section_id=2, section_number=2, products_count=20),
        ]),
        (ID_ONE, [ProductsBySection(section_id=1, section_number=1, products_count=10)]),
    ],
)
def test_get_section_products(query, expected):
    response = call(_report_service(), "get_section_products", query=query)
    assert response.status == 200
    assert body_of(response)["data"] == [item.to_dict() for item in expected]


@pytest.mark.parametrize("raw", ["a", "1.5", " 1", "99999999999999999999"])
def test_get_section_products_invalid_id(raw):
    response = call(_report_service(), "get_section_products", query={"id": raw})
    assert response.status == 400