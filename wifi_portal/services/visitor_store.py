"""
Visitor record storage

Two interchangeable backends behind one interface:

* ``MongoVisitorStore``: the visitor collection in MongoDB.
* ``MemoryVisitorStore``: a process-lifetime list, used whenever MongoDB is
  unreachable.

``StoreProvider.active()`` picks one per operation from the live connection
state. The backends are never reconciled: records written to memory while
MongoDB is down stay invisible to MongoDB and are lost on restart.
"""

import copy
import threading
import uuid
from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import structlog
from bson import ObjectId
from pymongo import ReturnDocument

logger = structlog.get_logger(__name__)

Query = Dict[str, Any]


class VisitorStore(ABC):
    """Storage operations used by the request handlers"""

    name = "base"

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new record and return it with its id"""

    @abstractmethod
    async def find(self, query: Optional[Query] = None, skip: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Matching records, newest first"""

    @abstractmethod
    async def find_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def update(self, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Overwrite the given top-level fields; None if the record is absent"""

    @abstractmethod
    async def record_contact(self, record_id: str, entry: Dict[str, Any], attempted_at: datetime) -> Optional[Dict[str, Any]]:
        """Append a communication history entry and bump the attempt counter"""

    @abstractmethod
    async def count(self, query: Optional[Query] = None) -> int:
        pass

    @abstractmethod
    async def count_by(self, field: str, query: Optional[Query] = None, limit: Optional[int] = None) -> List[Tuple[Any, int]]:
        """(value, count) pairs, largest count first"""


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

_MISSING = object()


def resolve_path(doc: Dict[str, Any], path: str) -> Any:
    value = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _equals(value: Any, target: Any) -> bool:
    if value is _MISSING:
        return target is None
    if isinstance(value, list) and not isinstance(target, list):
        return target in value
    return value == target


def _compare(value: Any, target: Any, op: Callable[[Any, Any], bool]) -> bool:
    if value is _MISSING or value is None:
        return False
    try:
        return op(value, target)
    except TypeError:
        return False


_OPERATORS = {
    "$eq": lambda value, target: _equals(value, target),
    "$ne": lambda value, target: not _equals(value, target),
    "$in": lambda value, targets: any(_equals(value, t) for t in targets),
    "$nin": lambda value, targets: not any(_equals(value, t) for t in targets),
    "$exists": lambda value, flag: (value is not _MISSING) == bool(flag),
    "$gt": lambda value, target: _compare(value, target, lambda a, b: a > b),
    "$gte": lambda value, target: _compare(value, target, lambda a, b: a >= b),
    "$lt": lambda value, target: _compare(value, target, lambda a, b: a < b),
    "$lte": lambda value, target: _compare(value, target, lambda a, b: a <= b),
}


def matches(doc: Dict[str, Any], query: Optional[Query]) -> bool:
    """Evaluate the subset of the MongoDB query language the service builds"""
    for key, condition in (query or {}).items():
        if key == "$and":
            if not all(matches(doc, clause) for clause in condition):
                return False
        elif key == "$or":
            if not any(matches(doc, clause) for clause in condition):
                return False
        else:
            value = resolve_path(doc, key)
            if isinstance(condition, dict) and condition and all(op.startswith("$") for op in condition):
                for op, target in condition.items():
                    if op not in _OPERATORS:
                        raise ValueError(f"Unsupported query operator: {op}")
                    if not _OPERATORS[op](value, target):
                        return False
            elif not _equals(value, condition):
                return False
    return True


class MemoryVisitorStore(VisitorStore):
    """Fallback store: an ordered list that lives as long as the process"""

    name = "memory"

    def __init__(self):
        self._records: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._records)

    def _get(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self._records:
            if record["id"] == record_id:
                return record
        return None

    def _newest_first(self, query: Optional[Query]) -> List[Dict[str, Any]]:
        # reversed() puts later inserts first among equal timestamps
        selected = [r for r in reversed(self._records) if matches(r, query)]
        return sorted(selected, key=lambda r: r["createdAt"], reverse=True)

    async def create(self, data):
        record = copy.deepcopy(data)
        record["id"] = uuid.uuid4().hex
        with self._lock:
            self._records.append(record)
        return copy.deepcopy(record)

    async def find(self, query=None, skip=0, limit=None):
        with self._lock:
            selected = self._newest_first(query)
            end = skip + limit if limit else None
            return copy.deepcopy(selected[skip:end])

    async def find_by_id(self, record_id):
        with self._lock:
            record = self._get(record_id)
            return copy.deepcopy(record) if record else None

    async def update(self, record_id, fields):
        with self._lock:
            record = self._get(record_id)
            if record is None:
                return None
            record.update(copy.deepcopy(fields))
            return copy.deepcopy(record)

    async def record_contact(self, record_id, entry, attempted_at):
        with self._lock:
            record = self._get(record_id)
            if record is None:
                return None
            record.setdefault("communicationHistory", []).append(copy.deepcopy(entry))
            record["contactAttempts"] = record.get("contactAttempts", 0) + 1
            record["lastContactAttempt"] = attempted_at
            record["updatedAt"] = attempted_at
            return copy.deepcopy(record)

    async def count(self, query=None):
        with self._lock:
            return sum(1 for r in self._records if matches(r, query))

    async def count_by(self, field, query=None, limit=None):
        with self._lock:
            counter = Counter()
            for record in self._records:
                if matches(record, query):
                    value = resolve_path(record, field)
                    counter[None if value is _MISSING else value] += 1

        pairs = sorted(counter.items(), key=lambda item: (-item[1], str(item[0])))
        return pairs[:limit] if limit else pairs


# ---------------------------------------------------------------------------
# MongoDB backend
# ---------------------------------------------------------------------------

def serialize_document(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Replace Mongo's ObjectId ``_id`` with a string ``id``"""
    if doc is None:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


class MongoVisitorStore(VisitorStore):
    """Durable store backed by a motor collection"""

    name = "mongodb"

    NEWEST_FIRST = [("createdAt", -1), ("_id", -1)]

    def __init__(self, collection):
        self.collection = collection

    @staticmethod
    def _object_id(record_id: str) -> Optional[ObjectId]:
        return ObjectId(record_id) if ObjectId.is_valid(record_id) else None

    async def create(self, data):
        doc = {key: value for key, value in data.items() if key != "id"}
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_document(doc)

    async def find(self, query=None, skip=0, limit=None):
        cursor = self.collection.find(query or {}).sort(self.NEWEST_FIRST).skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [serialize_document(doc) for doc in await cursor.to_list(length=None)]

    async def find_by_id(self, record_id):
        oid = self._object_id(record_id)
        if oid is None:
            return None
        return serialize_document(await self.collection.find_one({"_id": oid}))

    async def update(self, record_id, fields):
        oid = self._object_id(record_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_document(doc)

    async def record_contact(self, record_id, entry, attempted_at):
        oid = self._object_id(record_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {
                "$push": {"communicationHistory": entry},
                "$inc": {"contactAttempts": 1},
                "$set": {"lastContactAttempt": attempted_at, "updatedAt": attempted_at},
            },
            return_document=ReturnDocument.AFTER,
        )
        return serialize_document(doc)

    async def count(self, query=None):
        return await self.collection.count_documents(query or {})

    async def count_by(self, field, query=None, limit=None):
        pipeline = [
            {"$match": query or {}},
            {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
        ]
        if limit:
            pipeline.append({"$limit": limit})
        rows = await self.collection.aggregate(pipeline).to_list(length=None)
        return [(row["_id"], row["count"]) for row in rows]


# ---------------------------------------------------------------------------
# Backend selection
# ---------------------------------------------------------------------------

class StoreProvider:
    """
    Hands out the durable store while it is reachable, the fallback otherwise.

    ``is_available`` is consulted on every call to ``active()``.
    """

    def __init__(
        self,
        fallback: Optional[MemoryVisitorStore] = None,
        durable: Optional[VisitorStore] = None,
        is_available: Optional[Callable[[], bool]] = None,
    ):
        self.fallback = fallback or MemoryVisitorStore()
        self.durable = durable
        self.is_available = is_available or (lambda: False)
        self._last_used = None

    @property
    def durable_connected(self) -> bool:
        return self.durable is not None and bool(self.is_available())

    def active(self) -> VisitorStore:
        store = self.durable if self.durable_connected else self.fallback
        if store.name != self._last_used:
            if self._last_used is not None:
                logger.warning("Storage backend switched", previous=self._last_used, current=store.name)
            self._last_used = store.name
        return store
