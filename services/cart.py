from typing import Any, Dict, Optional

from bson.objectid import ObjectId

from database import serialize_doc
from errors import ConflictError, conflict_on_duplicate
from payloads import CartCreate, CartPatch
from schemas import Cart
from services.base import (
    CollectionService,
    ensure_products_exist,
    ensure_user_exists,
    resolve_items,
    resolve_user,
)

CART_EXISTS = "Cart already exists for this user"


class CartService(CollectionService):
    """One cart per user. The unique index on userId backs the pre-checks."""

    collection_name = "cart"
    plural = "carts"
    schema = Cart

    def present(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return serialize_doc(
            {
                **doc,
                "userId": resolve_user(self.db, doc.get("userId")),
                "items": resolve_items(self.db, doc.get("items", [])),
            }
        )

    def list(self, page: int, limit: int, sort: Optional[str] = None, user_id: Optional[str] = None):
        return super().list(page, limit, sort, userId=ObjectId(user_id) if user_id else None)

    def create(self, payload: CartCreate) -> Dict[str, Any]:
        data = payload.to_document()
        ensure_user_exists(self.db, data["userId"])
        ensure_products_exist(self.db, data["items"])

        if self.collection.find_one({"userId": ObjectId(data["userId"])}):
            raise ConflictError(CART_EXISTS)

        with conflict_on_duplicate(CART_EXISTS):
            return self._insert(data)

    def replace(self, cart_id: str, payload: CartCreate) -> Optional[Dict[str, Any]]:
        data = payload.to_document()
        ensure_user_exists(self.db, data["userId"])
        ensure_products_exist(self.db, data["items"])

        another = self.collection.find_one({"userId": ObjectId(data["userId"]), "_id": {"$ne": ObjectId(cart_id)}})
        if another:
            raise ConflictError(CART_EXISTS)

        with conflict_on_duplicate(CART_EXISTS):
            return self._replace(cart_id, data)

    def update(self, cart_id: str, payload: CartPatch) -> Optional[Dict[str, Any]]:
        changes = payload.to_changes()
        if "items" in changes:
            ensure_products_exist(self.db, changes["items"])
        return self._update(cart_id, changes)
