from datetime import datetime

import pytest

import payloads
from payloads import build_payload

PRODUCT_ID = "65f1c2a9e4b0a1b2c3d4e5f6"
USER_ID = "65f1c2a9e4b0a1b2c3d4e5f7"


def item(**overrides):
    base = {"productId": PRODUCT_ID, "quantity": 2, "price": 100, "unit": "kg"}
    base.update(overrides)
    return base


def test_non_mapping_bodies_are_rejected():
    assert build_payload(payloads.CategoryCreate, None) is None
    assert build_payload(payloads.CategoryCreate, ["name"]) is None
    assert build_payload(payloads.CategoryCreate, "Mithai") is None


def test_strings_are_trimmed():
    payload = build_payload(payloads.CategoryCreate, {"name": "  Diwali Sweets  ", "description": " festive "})
    assert payload.name == "Diwali Sweets"
    assert payload.description == "festive"


def test_whitespace_only_string_is_rejected():
    assert build_payload(payloads.CategoryCreate, {"name": "   "}) is None


def test_create_description_that_is_not_text_is_ignored():
    payload = build_payload(payloads.CategoryCreate, {"name": "Namkeen", "description": 42})
    assert payload is not None
    assert payload.to_document() == {"name": "Namkeen"}


def test_patch_description_must_be_text():
    assert build_payload(payloads.CategoryPatch, {"description": 42}) is None


@pytest.mark.parametrize("model", [payloads.CategoryPatch, payloads.ProductPatch, payloads.CartPatch,
                                   payloads.OrderPatch, payloads.RatingPatch, payloads.TestimonialPatch])
def test_empty_patch_is_rejected(model):
    assert build_payload(model, {}) is None
    assert build_payload(model, {"unknownField": 1}) is None


def test_patch_keeps_only_supplied_fields():
    payload = build_payload(payloads.ProductPatch, {"price": "12.5"})
    assert payload.to_changes() == {"price": 12.5}


def test_patch_rejects_explicit_null():
    assert build_payload(payloads.ProductPatch, {"name": None}) is None


def test_product_create_rejects_fields_outside_whitelist():
    body = {"name": "Peda", "images": ["a.jpg"], "price": 10, "category": PRODUCT_ID, "rating": 5}
    assert build_payload(payloads.ProductCreate, body) is None


def test_product_images_drop_blank_entries_but_need_one():
    body = {"name": "Peda", "images": [" a.jpg ", "", 7], "price": 10, "category": PRODUCT_ID}
    assert build_payload(payloads.ProductCreate, body).images == ["a.jpg"]
    body["images"] = ["  ", 7]
    assert build_payload(payloads.ProductCreate, body) is None
    body["images"] = []
    assert build_payload(payloads.ProductCreate, body) is None


def test_price_must_be_finite_and_not_negative():
    body = {"name": "Peda", "images": ["a.jpg"], "price": -1, "category": PRODUCT_ID}
    assert build_payload(payloads.ProductCreate, body) is None
    body["price"] = "Infinity"
    assert build_payload(payloads.ProductCreate, body) is None
    body["price"] = 0
    assert build_payload(payloads.ProductCreate, body).price == 0


def test_cart_items_are_all_or_nothing():
    good = {"userId": USER_ID, "items": [item(), item(unit="pcs", quantity=1)]}
    assert build_payload(payloads.CartCreate, good) is not None

    for bad_item in (item(unit="litre"), item(quantity=0), item(price=-5), item(productId="nope"),
                     item(extra=True), "not-an-object"):
        body = {"userId": USER_ID, "items": [item(), bad_item]}
        assert build_payload(payloads.CartCreate, body) is None


def test_cart_needs_at_least_one_item():
    assert build_payload(payloads.CartCreate, {"userId": USER_ID, "items": []}) is None
    assert build_payload(payloads.CartCreate, {"userId": USER_ID}) is None


def test_cart_patch_cannot_change_owner():
    assert build_payload(payloads.CartPatch, {"userId": USER_ID, "items": [item()]}) is None


def test_order_create_parses_delivery_date_and_validates_status():
    body = {
        "userId": USER_ID,
        "items": [item()],
        "address": "12 Station Road",
        "phoneNumber": "9000000001",
        "expectedDeliveryDate": "2030-05-01",
    }
    payload = build_payload(payloads.OrderCreate, body)
    assert isinstance(payload.expectedDeliveryDate, datetime)
    assert payload.status is None

    assert build_payload(payloads.OrderCreate, {**body, "status": "shipped"}).status == "shipped"
    assert build_payload(payloads.OrderCreate, {**body, "status": "lost"}) is None
    assert build_payload(payloads.OrderCreate, {**body, "expectedDeliveryDate": "soon"}) is None


def test_order_create_rejects_client_total():
    body = {
        "userId": USER_ID,
        "items": [item()],
        "address": "12 Station Road",
        "phoneNumber": "9000000001",
        "expectedDeliveryDate": "2030-05-01",
        "totalAmount": 1,
    }
    assert build_payload(payloads.OrderCreate, body) is None


def test_rating_bounds():
    body = {"userId": USER_ID, "productId": PRODUCT_ID, "rating": 5}
    assert build_payload(payloads.RatingCreate, body) is not None
    assert build_payload(payloads.RatingCreate, {**body, "rating": 6}) is None
    assert build_payload(payloads.RatingCreate, {**body, "rating": 0}) is None
    assert build_payload(payloads.RatingPatch, {"userId": USER_ID}) is None


def test_testimonial_images_may_end_up_empty():
    payload = build_payload(payloads.TestimonialCreate, {"rating": 4, "comment": "Lovely", "images": ["  "]})
    assert payload.images == []
    assert build_payload(payloads.TestimonialCreate, {"rating": 4, "comment": "  "}) is None


def test_register_normalizes_email_and_checks_role():
    body = {
        "firstName": "Asha",
        "lastName": "Verma",
        "phoneNumber": " 9000000001 ",
        "address": "12 Station Road",
        "password": "secret",
        "emailAddress": " Asha.Verma@Sanwariya.in ",
    }
    payload = build_payload(payloads.RegisterPayload, body)
    assert payload.emailAddress == "asha.verma@sanwariya.in"
    assert payload.phoneNumber == "9000000001"
    assert payload.role is None
    assert build_payload(payloads.RegisterPayload, {**body, "role": "superuser"}) is None
    assert build_payload(payloads.RegisterPayload, {**body, "role": "deliveryPartner"}).role == "deliveryPartner"


def test_login_whitelist():
    assert build_payload(payloads.LoginPayload, {"phoneNumber": "1", "password": "x"}) is not None
    assert build_payload(payloads.LoginPayload, {"phoneNumber": "1", "password": "x", "role": "admin"}) is None
