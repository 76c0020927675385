from typing import Any

from fastapi import APIRouter, Body, Depends
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import TestimonialCreate, TestimonialPatch
from routers.common import ListQuery, check_object_id, found, parse_body
from services import TestimonialService

# Mounted at the root and again under /admin.
router = APIRouter(prefix="/testimonials", tags=["testimonials"])

INVALID_BODY = "Invalid request body. Required fields: rating, comment"
NOT_FOUND = "Testimonial not found"


def get_service(db: Database = Depends(get_db)) -> TestimonialService:
    return TestimonialService(db)


@router.get("")
def list_testimonials(query: ListQuery = Depends(), service: TestimonialService = Depends(get_service)):
    result = service.list(query.page, query.limit, query.sort)
    return envelope("Testimonials fetched successfully", result)


@router.get("/{testimonial_id}")
def get_testimonial(testimonial_id: str, service: TestimonialService = Depends(get_service)):
    check_object_id(testimonial_id, "testimonial")
    testimonial = found(service.get(testimonial_id), NOT_FOUND)
    return envelope("Testimonial fetched successfully", {"testimonial": testimonial})


@router.post("", status_code=201)
def create_testimonial(body: Any = Body(None), service: TestimonialService = Depends(get_service)):
    payload = parse_body(TestimonialCreate, body, INVALID_BODY)
    testimonial = service.create(payload)
    return envelope("Testimonial created successfully", {"testimonial": testimonial})


@router.put("/{testimonial_id}")
def replace_testimonial(
    testimonial_id: str, body: Any = Body(None), service: TestimonialService = Depends(get_service)
):
    check_object_id(testimonial_id, "testimonial")
    payload = parse_body(TestimonialCreate, body, INVALID_BODY)
    testimonial = found(service.replace(testimonial_id, payload), NOT_FOUND)
    return envelope("Testimonial replaced successfully", {"testimonial": testimonial})


@router.patch("/{testimonial_id}")
def update_testimonial(
    testimonial_id: str, body: Any = Body(None), service: TestimonialService = Depends(get_service)
):
    check_object_id(testimonial_id, "testimonial")
    payload = parse_body(TestimonialPatch, body, "Invalid request body for update")
    testimonial = found(service.update(testimonial_id, payload), NOT_FOUND)
    return envelope("Testimonial updated successfully", {"testimonial": testimonial})


@router.delete("/{testimonial_id}")
def delete_testimonial(testimonial_id: str, service: TestimonialService = Depends(get_service)):
    check_object_id(testimonial_id, "testimonial")
    testimonial = found(service.delete(testimonial_id), NOT_FOUND)
    return envelope("Testimonial deleted successfully", {"testimonial": testimonial})
