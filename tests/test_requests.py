import json
from datetime import datetime

import pytest

from freshstock.models import Product
from freshstock.requests import (
    BindError,
    MissingFieldError,
    PatchSection,
    PostProductBatch,
    PostSection,
    ProductPatchRequest,
    ProductPostRequest,
    ProductRecordPostRequest,
    RequestBuyerPost,
    SellerPostRequest,
    WarehousePatchRequest,
    WarehousePostRequest,
    bind_json,
    string_to_mysql_date,
)

SECTION_BODY = (
    '{"section_number":1,"current_temperature":-1,"minimum_temperature":-5,'
    '"current_capacity":1,"minimum_capacity":1,"maximum_capacity":1,'
    '"warehouse_id":1,"product_type_id":1}'
)


def test_bind_post_section():
    req = bind_json(PostSection, SECTION_BODY)
    assert req == PostSection(
        section_number=1,
        current_temperature=-1,
        minimum_temperature=-5,
        current_capacity=1,
        minimum_capacity=1,
        maximum_capacity=1,
        warehouse_id=1,
        product_type_id=1,
    )


def test_bind_accepts_bytes():
    req = bind_json(PostSection, SECTION_BODY.encode())
    assert req.minimum_temperature == -5


def test_zero_in_required_plain_field_is_rejected():
    body = json.loads(SECTION_BODY)
    body["section_number"] = 0
    with pytest.raises(MissingFieldError) as info:
        bind_json(PostSection, json.dumps(body))
    assert info.value.fields == ("section_number",)


def test_zero_in_required_nullable_field_is_accepted():
    body = json.loads(SECTION_BODY)
    body["current_temperature"] = 0
    assert bind_json(PostSection, json.dumps(body)).current_temperature == 0


def test_empty_body_is_bind_error_not_missing_field():
    with pytest.raises(BindError) as info:
        bind_json(PostSection, "")
    assert not isinstance(info.value, MissingFieldError)


def test_json_string_body_is_bind_error():
    with pytest.raises(BindError) as info:
        bind_json(WarehousePatchRequest, '""')
    assert not isinstance(info.value, MissingFieldError)


def test_wrong_type_is_bind_error():
    with pytest.raises(BindError) as info:
        bind_json(PatchSection, '{"section_number":"two"}')
    assert not isinstance(info.value, MissingFieldError)


def test_bool_is_not_an_int():
    with pytest.raises(BindError):
        bind_json(PatchSection, '{"warehouse_id":true}')


def test_patch_section_empty_object_uses_defaults():
    req = bind_json(PatchSection, "{}")
    assert req.section_number == 0
    assert req.current_temperature is None
    assert req.minimum_temperature is None


def test_null_body_binds_to_defaults():
    assert bind_json(PatchSection, "null") == PatchSection()


def test_missing_seller_fields_are_reported():
    body = {"cid": 1, "address": "Junin 323", "telephone": "555", "locality_id": "5700"}
    with pytest.raises(MissingFieldError) as info:
        bind_json(SellerPostRequest, json.dumps(body))
    assert info.value.fields == ("company_name",)
    assert "company_name" in str(info.value)


def test_warehouse_post_only_address_lists_all_missing():
    with pytest.raises(MissingFieldError) as info:
        bind_json(WarehousePostRequest, '{"address":"Monroe 1230"}')
    assert set(info.value.fields) == {
        "telephone",
        "warehouse_code",
        "minimum_capacity",
        "minimum_temperature",
    }


def test_empty_string_in_required_plain_field_is_rejected():
    body = {"card_number_id": "", "first_name": "Ana", "last_name": "Diaz"}
    with pytest.raises(MissingFieldError) as info:
        bind_json(RequestBuyerPost, json.dumps(body))
    assert info.value.fields == ("card_number_id",)


def test_product_batch_requires_every_field():
    with pytest.raises(MissingFieldError) as info:
        bind_json(PostProductBatch, "{}")
    assert len(info.value.fields) == 10


def test_float_field_accepts_integer():
    req = bind_json(ProductPatchRequest, '{"height": 3}')
    assert req.height == 3.0


def test_product_post_to_domain():
    body = {
        "description": "milk",
        "expiration_rate": 1,
        "freezing_rate": 2,
        "height": 1.5,
        "length": 2.5,
        "net_weight": 3.5,
        "product_code": "P1",
        "recommended_freezing_temperature": -4.0,
        "width": 1.0,
        "product_type_id": 7,
    }
    product = bind_json(ProductPostRequest, json.dumps(body)).to_domain()
    assert product == Product(seller_id=None, **body)


def test_product_patch_to_domain_fills_zero_values():
    req = bind_json(ProductPatchRequest, '{"description":"cheese","seller_id":9}')
    product = req.to_domain()
    assert product.description == "cheese"
    assert product.product_code == ""
    assert product.width == 0.0
    assert product.product_type_id == 0
    assert product.seller_id == 9
    assert req.product_code is None


def test_product_record_to_domain():
    body = {"last_update_date": "2022-10-05 12:30:00", "purchase_price": 10, "sale_price": 12.5, "product_id": 3}
    record = bind_json(ProductRecordPostRequest, json.dumps(body)).to_domain()
    assert record.last_update_date == datetime(2022, 10, 5, 12, 30, 0)
    assert record.purchase_price == 10.0
    assert record.sale_price == 12.5
    assert record.product_id == 3


def test_product_record_bad_date_raises():
    req = ProductRecordPostRequest(last_update_date="yesterday", purchase_price=1.0, sale_price=1.0, product_id=1)
    with pytest.raises(ValueError):
        req.to_domain()


def test_string_to_mysql_date_round_trip():
    moment = datetime(2021, 1, 2, 3, 4, 5)
    assert string_to_mysql_date(moment.strftime("%Y-%m-%d %H:%M:%S")) == moment