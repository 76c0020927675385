from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import ProductCreate, ProductPatch
from routers.common import ListQuery, check_object_id, check_optional_object_id, found, parse_body
from services import ProductService

router = APIRouter(prefix="/products", tags=["products"])

INVALID_BODY = "Invalid request body. Required fields: name, images, price, category"
NOT_FOUND = "Product not found"


def get_service(db: Database = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("")
def list_products(
    query: ListQuery = Depends(),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    service: ProductService = Depends(get_service),
):
    check_optional_object_id(category_id, "category")
    result = service.list(query.page, query.limit, query.sort, category_id=category_id)
    return envelope("Products fetched successfully", result)


@router.get("/{product_id}")
def get_product(product_id: str, service: ProductService = Depends(get_service)):
    check_object_id(product_id, "product")
    product = found(service.get(product_id), NOT_FOUND)
    return envelope("Product fetched successfully", {"product": product})


@router.post("", status_code=201)
def create_product(body: Any = Body(None), service: ProductService = Depends(get_service)):
    payload = parse_body(ProductCreate, body, INVALID_BODY)
    check_object_id(payload.category, "category")
    product = service.create(payload)
    return envelope("Product created successfully", {"product": product})


@router.put("/{product_id}")
def replace_product(product_id: str, body: Any = Body(None), service: ProductService = Depends(get_service)):
    check_object_id(product_id, "product")
    payload = parse_body(ProductCreate, body, INVALID_BODY)
    check_object_id(payload.category, "category")
    product = found(service.replace(product_id, payload), NOT_FOUND)
    return envelope("Product replaced successfully", {"product": product})


@router.patch("/{product_id}")
def update_product(product_id: str, body: Any = Body(None), service: ProductService = Depends(get_service)):
    check_object_id(product_id, "product")
    payload = parse_body(ProductPatch, body, "Invalid request body for update")
    check_optional_object_id(payload.category, "category")
    product = found(service.update(product_id, payload), NOT_FOUND)
    return envelope("Product updated successfully", {"product": product})


@router.delete("/{product_id}")
def delete_product(product_id: str, service: ProductService = Depends(get_service)):
    check_object_id(product_id, "product")
    product = found(service.delete(product_id), NOT_FOUND)
    return envelope("Product deleted successfully", {"product": product})
