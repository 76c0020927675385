"""
MongoDB access.

The client is created lazily on first use and shared by every request.
Collection names are the lowercase of the schema class name.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from bson.objectid import ObjectId
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.database import Database

from config import get_settings

log = logging.getLogger(__name__)

META_FIELDS = ("_id", "createdAt", "updatedAt")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_lock = threading.Lock()


def get_db() -> Database:
    global _client, _db
    if _db is None:
        with _lock:
            if _db is None:
                settings = get_settings()
                client = MongoClient(settings.database_url)
                database = client[settings.database_name]
                ensure_indexes(database)
                _client, _db = client, database
                log.info("Connected to database %s", settings.database_name)
    return _db


def close_db() -> None:
    global _client, _db
    with _lock:
        if _client is not None:
            _client.close()
        _client, _db = None, None


def ensure_indexes(db: Database) -> None:
    db["user"].create_index([("phoneNumber", ASCENDING)], unique=True)
    db["user"].create_index([("emailAddress", ASCENDING)], unique=True, sparse=True)
    db["category"].create_index([("name", ASCENDING)], unique=True)
    db["cart"].create_index([("userId", ASCENDING)], unique=True)
    db["product"].create_index([("category", ASCENDING)])


def _now() -> datetime:
    # BSON dates carry millisecond precision
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _to_document(data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_none=True)
    return {k: v for k, v in data.items() if v is not None}


def create_document(db: Database, collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Insert a document stamped with createdAt/updatedAt and return it as stored."""
    document = _to_document(data)
    now = _now()
    document["createdAt"] = now
    document["updatedAt"] = now
    result = db[collection_name].insert_one(document)
    return db[collection_name].find_one({"_id": result.inserted_id})


def get_documents(
    db: Database,
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    sort: Optional[Sequence[Tuple[str, int]]] = None,
    skip: int = 0,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    cursor = db[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(list(sort))
    if skip:
        cursor = cursor.skip(skip)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def replace_document(
    db: Database, collection_name: str, doc_id: ObjectId, data: Union[BaseModel, Dict[str, Any]]
) -> Optional[Dict[str, Any]]:
    """Overwrite every field except _id and createdAt. Returns None when nothing matched."""
    collection = db[collection_name]
    existing = collection.find_one({"_id": doc_id}, {"createdAt": 1})
    if existing is None:
        return None
    now = _now()
    document = _to_document(data)
    document["createdAt"] = existing.get("createdAt", now)
    document["updatedAt"] = now
    return collection.find_one_and_replace({"_id": doc_id}, document, return_document=ReturnDocument.AFTER)


def update_document(
    db: Database,
    collection_name: str,
    schema: Type[BaseModel],
    doc_id: ObjectId,
    changes: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Apply a partial update.

    The stored document merged with the changes is validated against the
    collection schema first, so a change that would leave the document invalid
    raises pydantic.ValidationError and nothing is written. Only the changed
    fields are $set.
    """
    collection = db[collection_name]
    existing = collection.find_one({"_id": doc_id})
    if existing is None:
        return None

    merged = {k: v for k, v in existing.items() if k not in META_FIELDS}
    merged.update(changes)
    validated = schema.model_validate(merged).model_dump()

    update = {key: validated[key] for key in changes if key in validated}
    update["updatedAt"] = _now()
    return collection.find_one_and_update({"_id": doc_id}, {"$set": update}, return_document=ReturnDocument.AFTER)


def serialize_doc(doc: Any) -> Any:
    """Make a stored document JSON friendly: _id -> id, ObjectId -> str, datetime -> ISO string."""
    if isinstance(doc, dict):
        out = {}
        for key, value in doc.items():
            if key == "_id":
                out["id"] = str(value)
            else:
                out[key] = serialize_doc(value)
        return out
    if isinstance(doc, list):
        return [serialize_doc(item) for item in doc]
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, datetime):
        return doc.isoformat()
    return doc
