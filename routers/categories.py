from typing import Any

from fastapi import APIRouter, Body, Depends
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import CategoryCreate, CategoryPatch
from routers.common import ListQuery, check_object_id, found, parse_body
from services import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])

INVALID_BODY = "Invalid request body. Required fields: name"
NOT_FOUND = "Category not found"


def get_service(db: Database = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


@router.get("")
def list_categories(query: ListQuery = Depends(), service: CategoryService = Depends(get_service)):
    result = service.list(query.page, query.limit, query.sort)
    return envelope("Categories fetched successfully", result)


@router.get("/{category_id}")
def get_category(category_id: str, service: CategoryService = Depends(get_service)):
    check_object_id(category_id, "category")
    category = found(service.get(category_id), NOT_FOUND)
    return envelope("Category fetched successfully", {"category": category})


@router.post("", status_code=201)
def create_category(body: Any = Body(None), service: CategoryService = Depends(get_service)):
    payload = parse_body(CategoryCreate, body, INVALID_BODY)
    category = service.create(payload)
    return envelope("Category created successfully", {"category": category})


@router.put("/{category_id}")
def replace_category(category_id: str, body: Any = Body(None), service: CategoryService = Depends(get_service)):
    check_object_id(category_id, "category")
    payload = parse_body(CategoryCreate, body, INVALID_BODY)
    category = found(service.replace(category_id, payload), NOT_FOUND)
    return envelope("Category replaced successfully", {"category": category})


@router.patch("/{category_id}")
def update_category(category_id: str, body: Any = Body(None), service: CategoryService = Depends(get_service)):
    check_object_id(category_id, "category")
    payload = parse_body(CategoryPatch, body, "Invalid request body for update")
    category = found(service.update(category_id, payload), NOT_FOUND)
    return envelope("Category updated successfully", {"category": category})


@router.delete("/{category_id}")
def delete_category(category_id: str, service: CategoryService = Depends(get_service)):
    check_object_id(category_id, "category")
    category = found(service.delete(category_id), NOT_FOUND)
    return envelope("Category deleted successfully", {"category": category})
