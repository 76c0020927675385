"""
Store-wide listings for administrators. No filters, only pagination and sort.
"""
from typing import Any, Dict, Optional

from pymongo.database import Database

from database import get_documents, serialize_doc
from services.order import OrderService
from services.product import ProductService
from validators import build_pagination, parse_sort

USER_SORT_FIELDS = frozenset({"createdAt", "updatedAt", "firstName", "phoneNumber", "orders"})


class AdminService:
    def __init__(self, db: Database):
        self.db = db
        self.orders = OrderService(db)
        self.products = ProductService(db)

    def list_all_orders(self, page: int, limit: int, sort: Optional[str] = None) -> Dict[str, Any]:
        return self.orders.list(page, limit, sort)

    def list_all_products(self, page: int, limit: int, sort: Optional[str] = None) -> Dict[str, Any]:
        return self.products.list(page, limit, sort)

    def list_all_users(self, page: int, limit: int, sort: Optional[str] = None) -> Dict[str, Any]:
        users = self.db["user"].find({}, {"password": 0}).sort(parse_sort(sort, USER_SORT_FIELDS))
        users = list(users.skip((page - 1) * limit).limit(limit))
        for user in users:
            user["orders"] = get_documents(self.db, "order", {"_id": {"$in": user.get("orders", [])}})
        total = self.db["user"].count_documents({})
        return {"users": serialize_doc(users), "pagination": build_pagination(page, limit, total)}
