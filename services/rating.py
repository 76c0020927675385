from typing import Any, Dict, Optional

from bson.objectid import ObjectId

from database import serialize_doc
from errors import NotFoundError
from payloads import RatingCreate, RatingPatch
from schemas import Rating
from services.base import CollectionService, resolve_product, resolve_user


class RatingService(CollectionService):
    # A user may rate the same product more than once.
    collection_name = "rating"
    plural = "ratings"
    schema = Rating
    sort_fields = frozenset({"createdAt", "updatedAt", "rating"})

    def present(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return serialize_doc(
            {
                **doc,
                "userId": resolve_user(self.db, doc.get("userId")),
                "productId": resolve_product(self.db, doc.get("productId")),
            }
        )

    def _ensure_references_exist(self, user_id: str, product_id: str) -> None:
        if self.db["user"].count_documents({"_id": ObjectId(user_id)}) == 0:
            raise NotFoundError("User not found")
        if self.db["product"].count_documents({"_id": ObjectId(product_id)}) == 0:
            raise NotFoundError("Product not found")

    def list(
        self,
        page: int,
        limit: int,
        sort: Optional[str] = None,
        user_id: Optional[str] = None,
        product_id: Optional[str] = None,
    ):
        return super().list(
            page,
            limit,
            sort,
            userId=ObjectId(user_id) if user_id else None,
            productId=ObjectId(product_id) if product_id else None,
        )

    def create(self, payload: RatingCreate) -> Dict[str, Any]:
        self._ensure_references_exist(payload.userId, payload.productId)
        return self._insert(payload.to_document())

    def replace(self, rating_id: str, payload: RatingCreate) -> Optional[Dict[str, Any]]:
        self._ensure_references_exist(payload.userId, payload.productId)
        return self._replace(rating_id, payload.to_document())

    def update(self, rating_id: str, payload: RatingPatch) -> Optional[Dict[str, Any]]:
        return self._update(rating_id, payload.to_changes())
