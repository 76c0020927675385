from typing import Any, Dict, Optional

from payloads import TestimonialCreate, TestimonialPatch
from schemas import Testimonial
from services.base import CollectionService


class TestimonialService(CollectionService):
    """Testimonials are not linked to a user."""

    collection_name = "testimonial"
    plural = "testimonials"
    schema = Testimonial
    sort_fields = frozenset({"createdAt", "updatedAt", "rating"})

    def create(self, payload: TestimonialCreate) -> Dict[str, Any]:
        return self._insert(payload.to_document())

    def replace(self, testimonial_id: str, payload: TestimonialCreate) -> Optional[Dict[str, Any]]:
        return self._replace(testimonial_id, payload.to_document())

    def update(self, testimonial_id: str, payload: TestimonialPatch) -> Optional[Dict[str, Any]]:
        return self._update(testimonial_id, payload.to_changes())
