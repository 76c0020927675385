from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import CartCreate, CartPatch
from routers.common import ListQuery, check_object_id, check_optional_object_id, found, parse_body
from services import CartService

router = APIRouter(prefix="/carts", tags=["carts"])

INVALID_BODY = "Invalid request body. Required fields: userId, items"
NOT_FOUND = "Cart not found"


def get_service(db: Database = Depends(get_db)) -> CartService:
    return CartService(db)


@router.get("")
def list_carts(
    query: ListQuery = Depends(),
    user_id: Optional[str] = Query(None, alias="userId"),
    service: CartService = Depends(get_service),
):
    check_optional_object_id(user_id, "user")
    result = service.list(query.page, query.limit, query.sort, user_id=user_id)
    return envelope("Carts fetched successfully", result)


@router.get("/{cart_id}")
def get_cart(cart_id: str, service: CartService = Depends(get_service)):
    check_object_id(cart_id, "cart")
    cart = found(service.get(cart_id), NOT_FOUND)
    return envelope("Cart fetched successfully", {"cart": cart})


@router.post("", status_code=201)
def create_cart(body: Any = Body(None), service: CartService = Depends(get_service)):
    payload = parse_body(CartCreate, body, INVALID_BODY)
    cart = service.create(payload)
    return envelope("Cart created successfully", {"cart": cart})


@router.put("/{cart_id}")
def replace_cart(cart_id: str, body: Any = Body(None), service: CartService = Depends(get_service)):
    check_object_id(cart_id, "cart")
    payload = parse_body(CartCreate, body, INVALID_BODY)
    cart = found(service.replace(cart_id, payload), NOT_FOUND)
    return envelope("Cart replaced successfully", {"cart": cart})


@router.patch("/{cart_id}")
def update_cart(cart_id: str, body: Any = Body(None), service: CartService = Depends(get_service)):
    check_object_id(cart_id, "cart")
    payload = parse_body(CartPatch, body, "Invalid request body for update")
    cart = found(service.update(cart_id, payload), NOT_FOUND)
    return envelope("Cart updated successfully", {"cart": cart})


@router.delete("/{cart_id}")
def delete_cart(cart_id: str, service: CartService = Depends(get_service)):
    check_object_id(cart_id, "cart")
    cart = found(service.delete(cart_id), NOT_FOUND)
    return envelope("Cart deleted successfully", {"cart": cart})
