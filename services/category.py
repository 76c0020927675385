from typing import Any, Dict, Optional

from bson.objectid import ObjectId

from errors import ConflictError, conflict_on_duplicate
from payloads import CategoryCreate, CategoryPatch
from schemas import Category
from services.base import CollectionService

CATEGORY_EXISTS = "Category with this name already exists"


class CategoryService(CollectionService):
    collection_name = "category"
    plural = "categories"
    schema = Category
    sort_fields = frozenset({"createdAt", "updatedAt", "name"})

    def _ensure_name_is_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        query: Dict[str, Any] = {"name": name}
        if exclude_id:
            query["_id"] = {"$ne": ObjectId(exclude_id)}
        if self.collection.find_one(query):
            raise ConflictError(CATEGORY_EXISTS)

    def create(self, payload: CategoryCreate) -> Dict[str, Any]:
        self._ensure_name_is_unique(payload.name)
        with conflict_on_duplicate(CATEGORY_EXISTS):
            return self._insert(payload.to_document())

    def replace(self, category_id: str, payload: CategoryCreate) -> Optional[Dict[str, Any]]:
        self._ensure_name_is_unique(payload.name, category_id)
        with conflict_on_duplicate(CATEGORY_EXISTS):
            return self._replace(category_id, payload.to_document())

    def update(self, category_id: str, payload: CategoryPatch) -> Optional[Dict[str, Any]]:
        changes = payload.to_changes()
        if changes.get("name"):
            self._ensure_name_is_unique(changes["name"], category_id)
        with conflict_on_duplicate(CATEGORY_EXISTS):
            return self._update(category_id, changes)
