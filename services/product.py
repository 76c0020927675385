from typing import Any, Dict, Optional

from bson.objectid import ObjectId

from database import serialize_doc
from errors import NotFoundError
from payloads import ProductCreate, ProductPatch
from schemas import Product
from services.base import CollectionService, resolve_category


class ProductService(CollectionService):
    collection_name = "product"
    plural = "products"
    schema = Product
    sort_fields = frozenset({"createdAt", "updatedAt", "name", "price"})

    def present(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return serialize_doc({**doc, "category": resolve_category(self.db, doc.get("category"))})

    def _ensure_category_exists(self, category_id: str) -> None:
        if self.db["category"].count_documents({"_id": ObjectId(category_id)}) == 0:
            raise NotFoundError("Category not found")

    def list(self, page: int, limit: int, sort: Optional[str] = None, category_id: Optional[str] = None):
        return super().list(page, limit, sort, category=ObjectId(category_id) if category_id else None)

    def create(self, payload: ProductCreate) -> Dict[str, Any]:
        self._ensure_category_exists(payload.category)
        return self._insert(payload.to_document())

    def replace(self, product_id: str, payload: ProductCreate) -> Optional[Dict[str, Any]]:
        self._ensure_category_exists(payload.category)
        return self._replace(product_id, payload.to_document())

    def update(self, product_id: str, payload: ProductPatch) -> Optional[Dict[str, Any]]:
        changes = payload.to_changes()
        if changes.get("category"):
            self._ensure_category_exists(changes["category"])
        return self._update(product_id, changes)
