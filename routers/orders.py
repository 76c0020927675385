from typing import Any, Optional, get_args

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import OrderCreate, OrderPatch
from routers.common import ListQuery, check_object_id, check_optional_object_id, found, parse_body
from schemas import OrderStatus
from services import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])

INVALID_BODY = "Invalid request body. Required fields: userId, items, address, phoneNumber, expectedDeliveryDate"
NOT_FOUND = "Order not found"


def get_service(db: Database = Depends(get_db)) -> OrderService:
    return OrderService(db)


@router.get("")
def list_orders(
    query: ListQuery = Depends(),
    user_id: Optional[str] = Query(None, alias="userId"),
    status: Optional[str] = None,
    service: OrderService = Depends(get_service),
):
    check_optional_object_id(user_id, "user")
    if status and status not in get_args(OrderStatus):
        raise HTTPException(status_code=400, detail="Invalid status")
    result = service.list(query.page, query.limit, query.sort, user_id=user_id, status=status or None)
    return envelope("Orders fetched successfully", result)


@router.get("/{order_id}")
def get_order(order_id: str, service: OrderService = Depends(get_service)):
    check_object_id(order_id, "order")
    order = found(service.get(order_id), NOT_FOUND)
    return envelope("Order fetched successfully", {"order": order})


@router.post("", status_code=201)
def create_order(body: Any = Body(None), service: OrderService = Depends(get_service)):
    payload = parse_body(OrderCreate, body, INVALID_BODY)
    order = service.create(payload)
    return envelope("Order created successfully", {"order": order})


@router.put("/{order_id}")
def replace_order(order_id: str, body: Any = Body(None), service: OrderService = Depends(get_service)):
    check_object_id(order_id, "order")
    payload = parse_body(OrderCreate, body, INVALID_BODY)
    order = found(service.replace(order_id, payload), NOT_FOUND)
    return envelope("Order replaced successfully", {"order": order})


@router.patch("/{order_id}")
def update_order(order_id: str, body: Any = Body(None), service: OrderService = Depends(get_service)):
    check_object_id(order_id, "order")
    payload = parse_body(OrderPatch, body, "Invalid request body for update")
    order = found(service.update(order_id, payload), NOT_FOUND)
    return envelope("Order updated successfully", {"order": order})


@router.delete("/{order_id}")
def delete_order(order_id: str, service: OrderService = Depends(get_service)):
    check_object_id(order_id, "order")
    order = found(service.delete(order_id), NOT_FOUND)
    return envelope("Order deleted successfully", {"order": order})
