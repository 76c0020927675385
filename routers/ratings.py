from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import RatingCreate, RatingPatch
from routers.common import ListQuery, check_object_id, check_optional_object_id, found, parse_body
from services import RatingService

router = APIRouter(prefix="/ratings", tags=["ratings"])

INVALID_BODY = "Invalid request body. Required fields: userId, productId, rating"
NOT_FOUND = "Rating not found"


def get_service(db: Database = Depends(get_db)) -> RatingService:
    return RatingService(db)


@router.get("")
def list_ratings(
    query: ListQuery = Depends(),
    user_id: Optional[str] = Query(None, alias="userId"),
    product_id: Optional[str] = Query(None, alias="productId"),
    service: RatingService = Depends(get_service),
):
    check_optional_object_id(user_id, "user")
    check_optional_object_id(product_id, "product")
    result = service.list(query.page, query.limit, query.sort, user_id=user_id, product_id=product_id)
    return envelope("Ratings fetched successfully", result)


@router.get("/{rating_id}")
def get_rating(rating_id: str, service: RatingService = Depends(get_service)):
    check_object_id(rating_id, "rating")
    rating = found(service.get(rating_id), NOT_FOUND)
    return envelope("Rating fetched successfully", {"rating": rating})


@router.post("", status_code=201)
def create_rating(body: Any = Body(None), service: RatingService = Depends(get_service)):
    payload = parse_body(RatingCreate, body, INVALID_BODY)
    rating = service.create(payload)
    return envelope("Rating created successfully", {"rating": rating})


@router.put("/{rating_id}")
def replace_rating(rating_id: str, body: Any = Body(None), service: RatingService = Depends(get_service)):
    check_object_id(rating_id, "rating")
    payload = parse_body(RatingCreate, body, INVALID_BODY)
    rating = found(service.replace(rating_id, payload), NOT_FOUND)
    return envelope("Rating replaced successfully", {"rating": rating})


@router.patch("/{rating_id}")
def update_rating(rating_id: str, body: Any = Body(None), service: RatingService = Depends(get_service)):
    check_object_id(rating_id, "rating")
    payload = parse_body(RatingPatch, body, "Invalid request body for update")
    rating = found(service.update(rating_id, payload), NOT_FOUND)
    return envelope("Rating updated successfully", {"rating": rating})


@router.delete("/{rating_id}")
def delete_rating(rating_id: str, service: RatingService = Depends(get_service)):
    check_object_id(rating_id, "rating")
    rating = found(service.delete(rating_id), NOT_FOUND)
    return envelope("Rating deleted successfully", {"rating": rating})
