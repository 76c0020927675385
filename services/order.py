import logging
from datetime import timezone
from typing import Any, Dict, Iterable, Optional

from bson.objectid import ObjectId

from database import create_document, serialize_doc
from payloads import OrderCreate, OrderPatch
from schemas import Order
from services.base import (
    CollectionService,
    ensure_products_exist,
    ensure_user_exists,
    resolve_items,
    resolve_user,
)

log = logging.getLogger(__name__)


def calculate_total_amount(items: Iterable[Dict[str, Any]]) -> float:
    return sum(item["price"] * item["quantity"] for item in items)


class OrderService(CollectionService):
    """
    totalAmount is derived from the items on every write that carries items;
    clients cannot set it.
    """

    collection_name = "order"
    plural = "orders"
    schema = Order
    sort_fields = frozenset({"createdAt", "updatedAt", "expectedDeliveryDate"})

    def present(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return serialize_doc(
            {
                **doc,
                "userId": resolve_user(self.db, doc.get("userId")),
                "items": resolve_items(self.db, doc.get("items", [])),
            }
        )

    def list(
        self,
        page: int,
        limit: int,
        sort: Optional[str] = None,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ):
        return super().list(page, limit, sort, userId=ObjectId(user_id) if user_id else None, status=status)

    def _record_purchase(self, order: Dict[str, Any]) -> None:
        purchased_at = order["createdAt"].replace(tzinfo=timezone.utc)
        self.db["user"].update_one(
            {"_id": order["userId"]},
            {
                "$push": {"orders": order["_id"]},
                "$inc": {"totalPurchaseAmount": order["totalAmount"]},
                "$set": {"lastPurchaseDate": int(purchased_at.timestamp() * 1000)},
            },
        )

    def create(self, payload: OrderCreate) -> Dict[str, Any]:
        data = payload.to_document()
        ensure_user_exists(self.db, data["userId"])
        ensure_products_exist(self.db, data["items"])

        data["totalAmount"] = calculate_total_amount(data["items"])
        doc = create_document(self.db, self.collection_name, self.schema(**data))
        self._record_purchase(doc)
        log.info("Order %s created for user %s, total %s", doc["_id"], doc["userId"], doc["totalAmount"])
        return self.present(doc)

    def replace(self, order_id: str, payload: OrderCreate) -> Optional[Dict[str, Any]]:
        data = payload.to_document()
        ensure_user_exists(self.db, data["userId"])
        ensure_products_exist(self.db, data["items"])

        data["totalAmount"] = calculate_total_amount(data["items"])
        return self._replace(order_id, data)

    def update(self, order_id: str, payload: OrderPatch) -> Optional[Dict[str, Any]]:
        changes = payload.to_changes()
        if "items" in changes:
            ensure_products_exist(self.db, changes["items"])
            changes["totalAmount"] = calculate_total_amount(changes["items"])
        return self._update(order_id, changes)
