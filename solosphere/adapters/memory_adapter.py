"""
In-memory implementation of StorePort.

Used for local development and the test suite. Every write runs under a
single lock, so insert-if-absent and increment are atomic.
"""

import copy
import uuid
from threading import Lock
from typing import Any

from solosphere.domain.exceptions import DuplicateKeyError
from solosphere.domain.models import DeleteResult, StoreQuery, UpdateResult
from solosphere.ports.store_port import StorePort

_MISSING = object()


def _get_path(document: dict[str, Any], path: str) -> Any:
    """Resolve a dotted field path ("buyer.email") or return _MISSING."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _sort_key(value: Any) -> tuple[int, Any]:
    # same type order as jsonb: null < string < number < boolean < array < object
    if value is _MISSING or value is None:
        return (0, 0)
    if isinstance(value, str):
        return (1, value)
    if isinstance(value, bool):
        return (3, value)
    if isinstance(value, (int, float)):
        return (2, value)
    if isinstance(value, list):
        return (4, str(value))
    return (5, str(value))


def _matches(document: dict[str, Any], query: StoreQuery) -> bool:
    for path, expected in query.equals.items():
        if _get_path(document, path) != expected:
            return False
    for path, needle in query.contains.items():
        value = _get_path(document, path)
        if not isinstance(value, str):
            return False
        if needle.casefold() not in value.casefold():
            return False
    return True


class InMemoryStore(StorePort):
    """Dict-of-dicts store: {collection: {id: document}}."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = Lock()

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    # ── Reads ─────────────────────────────────────────────────

    async def find(
        self, collection: str, query: StoreQuery | None = None
    ) -> list[dict[str, Any]]:
        query = query or StoreQuery()
        with self._lock:
            docs = [
                d for d in self._collection(collection).values() if _matches(d, query)
            ]
            docs = copy.deepcopy(docs)

        if query.sort_by:
            docs.sort(
                key=lambda d: _sort_key(_get_path(d, query.sort_by)),
                reverse=query.descending,
            )

        start = max(query.skip, 0)
        if query.limit is None:
            return docs[start:]
        return docs[start:start + max(query.limit, 0)]

    async def find_one(
        self, collection: str, equals: dict[str, Any]
    ) -> dict[str, Any] | None:
        docs = await self.find(collection, StoreQuery(equals=equals, limit=1))
        return docs[0] if docs else None

    async def count_documents(
        self, collection: str, query: StoreQuery | None = None
    ) -> int:
        query = query or StoreQuery()
        with self._lock:
            return sum(
                1 for d in self._collection(collection).values() if _matches(d, query)
            )

    # ── Writes ────────────────────────────────────────────────

    async def insert_one(
        self,
        collection: str,
        document: dict[str, Any],
        unique_on: tuple[str, ...] = (),
    ) -> str:
        doc = copy.deepcopy(document)
        doc_id = str(doc.get("id") or uuid.uuid4())
        doc["id"] = doc_id

        with self._lock:
            docs = self._collection(collection)
            if unique_on:
                key = {field: _get_path(doc, field) for field in unique_on}
                for existing in docs.values():
                    if all(_get_path(existing, f) == v for f, v in key.items()):
                        raise DuplicateKeyError(collection, key)
            if doc_id in docs:
                raise DuplicateKeyError(collection, {"id": doc_id})
            docs[doc_id] = doc

        return doc_id

    async def update_one(
        self,
        collection: str,
        doc_id: str,
        changes: dict[str, Any],
        upsert: bool = False,
        set_on_insert: dict[str, Any] | None = None,
    ) -> UpdateResult:
        changes = copy.deepcopy(changes)
        changes.pop("id", None)

        with self._lock:
            docs = self._collection(collection)
            existing = docs.get(doc_id)
            if existing is None:
                if not upsert:
                    return UpdateResult()
                seed = copy.deepcopy(set_on_insert or {})
                docs[doc_id] = {**seed, **changes, "id": doc_id}
                return UpdateResult(upserted_id=doc_id)

            modified = any(
                existing.get(k, _MISSING) != v for k, v in changes.items()
            )
            existing.update(changes)
            return UpdateResult(matched_count=1, modified_count=int(modified))

    async def increment(
        self, collection: str, doc_id: str, field: str, amount: int = 1
    ) -> UpdateResult:
        with self._lock:
            existing = self._collection(collection).get(doc_id)
            if existing is None:
                return UpdateResult()
            existing[field] = (existing.get(field) or 0) + amount
            return UpdateResult(matched_count=1, modified_count=1)

    async def compare_and_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        expected: Any,
        value: Any,
    ) -> UpdateResult:
        with self._lock:
            existing = self._collection(collection).get(doc_id)
            if existing is None or existing.get(field) != expected:
                return UpdateResult()
            existing[field] = copy.deepcopy(value)
            return UpdateResult(matched_count=1, modified_count=int(expected != value))

    async def delete_one(self, collection: str, doc_id: str) -> DeleteResult:
        with self._lock:
            removed = self._collection(collection).pop(doc_id, None)
        return DeleteResult(deleted_count=0 if removed is None else 1)
