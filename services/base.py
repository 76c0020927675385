"""
Shared plumbing for the domain services: paginated listing, CRUD against one
collection, reference resolution and the referential checks used by several
entities.
"""
import logging
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, Optional, Tuple, Type

from bson.objectid import ObjectId
from pydantic import BaseModel
from pymongo.database import Database

from database import (
    create_document,
    get_documents,
    replace_document,
    serialize_doc,
    update_document,
)
from errors import NotFoundError
from validators import build_pagination, parse_sort

log = logging.getLogger(__name__)

PRODUCTS_NOT_FOUND = "One or more products were not found"


def resolve_category(db: Database, category_id: Any) -> Optional[Dict[str, Any]]:
    return db["category"].find_one({"_id": category_id})


def resolve_user(db: Database, user_id: Any) -> Optional[Dict[str, Any]]:
    return db["user"].find_one({"_id": user_id}, {"password": 0})


def resolve_product(db: Database, product_id: Any) -> Optional[Dict[str, Any]]:
    product = db["product"].find_one({"_id": product_id})
    if product is not None:
        product["category"] = resolve_category(db, product.get("category"))
    return product


def resolve_items(db: Database, items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{**item, "productId": resolve_product(db, item.get("productId"))} for item in items]


def ensure_user_exists(db: Database, user_id: str) -> None:
    if db["user"].count_documents({"_id": ObjectId(user_id)}) == 0:
        raise NotFoundError("User not found")


def ensure_products_exist(db: Database, items: Iterable[Dict[str, Any]]) -> None:
    product_ids = {ObjectId(item["productId"]) for item in items}
    count = db["product"].count_documents({"_id": {"$in": list(product_ids)}})
    if count < len(product_ids):
        raise NotFoundError(PRODUCTS_NOT_FOUND)


class CollectionService:
    """CRUD over one collection. Lookups by id return None when nothing matches."""

    collection_name: ClassVar[str]
    plural: ClassVar[str]
    schema: ClassVar[Type[BaseModel]]
    sort_fields: ClassVar[FrozenSet[str]] = frozenset({"createdAt", "updatedAt"})

    def __init__(self, db: Database):
        self.db = db
        self.collection = db[self.collection_name]

    def present(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return serialize_doc(doc)

    def _page(
        self, filter_dict: Dict[str, Any], page: int, limit: int, sort: Optional[str]
    ) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
        docs = get_documents(
            self.db,
            self.collection_name,
            filter_dict,
            sort=parse_sort(sort, self.sort_fields),
            skip=(page - 1) * limit,
            limit=limit,
        )
        total = self.collection.count_documents(filter_dict)
        return [self.present(doc) for doc in docs], build_pagination(page, limit, total)

    def list(self, page: int, limit: int, sort: Optional[str] = None, **filters: Any) -> Dict[str, Any]:
        filter_dict = {key: value for key, value in filters.items() if value is not None}
        items, pagination = self._page(filter_dict, page, limit, sort)
        return {self.plural: items, "pagination": pagination}

    def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self.collection.find_one({"_id": ObjectId(doc_id)})
        return self.present(doc) if doc else None

    def delete(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self.collection.find_one_and_delete({"_id": ObjectId(doc_id)})
        if doc:
            log.info("Deleted %s %s", self.collection_name, doc_id)
        return self.present(doc) if doc else None

    def _insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        doc = create_document(self.db, self.collection_name, self.schema(**data))
        return self.present(doc)

    def _replace(self, doc_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = replace_document(self.db, self.collection_name, ObjectId(doc_id), self.schema(**data))
        return self.present(doc) if doc else None

    def _update(self, doc_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = update_document(self.db, self.collection_name, self.schema, ObjectId(doc_id), changes)
        return self.present(doc) if doc else None
