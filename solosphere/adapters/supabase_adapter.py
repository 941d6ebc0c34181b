"""
Concrete implementation of StorePort using the Supabase Python client.

Each collection is a table `(id text primary key, seq bigserial, doc jsonb)`;
`doc` holds the whole document including its id. Predicate reads and the
atomic write primitives go through the SQL functions in `sql/schema.sql`.
"""

import logging
import uuid
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from solosphere.domain.exceptions import DuplicateKeyError, StoreUnavailable
from solosphere.domain.models import DeleteResult, StoreQuery, UpdateResult
from solosphere.ports.store_port import StorePort

logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
_UNIQUE_VIOLATION = "23505"


class SupabaseStore(StorePort):
    """All record I/O goes through the Supabase REST client."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _execute(
        self, request: Any, operation: str, conflict_ok: bool = False
    ) -> Any:
        try:
            return request.execute()
        except APIError as exc:
            if conflict_ok and exc.code == _UNIQUE_VIOLATION:
                raise
            logger.error(f"Store {operation} failed: {exc.message}")
            raise StoreUnavailable(f"{operation} failed: {exc.message}") from exc
        except httpx.HTTPError as exc:
            logger.error(f"Store {operation} unreachable: {exc}")
            raise StoreUnavailable(f"{operation} failed: {exc}") from exc

    # ── Reads ─────────────────────────────────────────────────

    async def find(
        self, collection: str, query: StoreQuery | None = None
    ) -> list[dict[str, Any]]:
        query = query or StoreQuery()
        result = self._execute(
            self._client.rpc(
                "find_documents",
                {
                    "p_collection": collection,
                    "p_equals": query.equals,
                    "p_contains": query.contains,
                    "p_sort_by": query.sort_by,
                    "p_descending": query.descending,
                    "p_skip": max(query.skip, 0),
                    "p_limit": None if query.limit is None else max(query.limit, 0),
                },
            ),
            f"find on {collection}",
        )
        return [row["doc"] for row in result.data or []]

    async def find_one(
        self, collection: str, equals: dict[str, Any]
    ) -> dict[str, Any] | None:
        docs = await self.find(collection, StoreQuery(equals=equals, limit=1))
        return docs[0] if docs else None

    async def count_documents(
        self, collection: str, query: StoreQuery | None = None
    ) -> int:
        query = query or StoreQuery()
        result = self._execute(
            self._client.rpc(
                "count_documents",
                {
                    "p_collection": collection,
                    "p_equals": query.equals,
                    "p_contains": query.contains,
                },
            ),
            f"count on {collection}",
        )
        return int(result.data or 0)

    # ── Writes ────────────────────────────────────────────────

    async def insert_one(
        self,
        collection: str,
        document: dict[str, Any],
        unique_on: tuple[str, ...] = (),
    ) -> str:
        # unique_on is enforced by the unique indexes declared in sql/schema.sql
        doc_id = str(document.get("id") or uuid.uuid4())
        doc = {**document, "id": doc_id}
        try:
            self._execute(
                self._client.table(collection).insert({"id": doc_id, "doc": doc}),
                f"insert into {collection}",
                conflict_ok=True,
            )
        except APIError as exc:
            key = {field: doc.get(field) for field in unique_on} or {"id": doc_id}
            raise DuplicateKeyError(collection, key) from exc
        return doc_id

    async def update_one(
        self,
        collection: str,
        doc_id: str,
        changes: dict[str, Any],
        upsert: bool = False,
        set_on_insert: dict[str, Any] | None = None,
    ) -> UpdateResult:
        changes = {k: v for k, v in changes.items() if k != "id"}
        result = self._execute(
            self._client.rpc(
                "merge_document",
                {
                    "p_collection": collection,
                    "p_id": doc_id,
                    "p_changes": changes,
                    "p_upsert": upsert,
                    "p_on_insert": set_on_insert or {},
                },
            ),
            f"update on {collection}",
        )
        outcome = result.data or {}
        return UpdateResult(
            matched_count=outcome.get("matched", 0),
            modified_count=outcome.get("modified", 0),
            upserted_id=outcome.get("upserted"),
        )

    async def increment(
        self, collection: str, doc_id: str, field: str, amount: int = 1
    ) -> UpdateResult:
        result = self._execute(
            self._client.rpc(
                "increment_field",
                {
                    "p_collection": collection,
                    "p_id": doc_id,
                    "p_field": field,
                    "p_amount": amount,
                },
            ),
            f"increment on {collection}",
        )
        matched = int(result.data or 0)
        return UpdateResult(matched_count=matched, modified_count=matched)

    async def compare_and_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        expected: Any,
        value: Any,
    ) -> UpdateResult:
        result = self._execute(
            self._client.rpc(
                "compare_and_set_field",
                {
                    "p_collection": collection,
                    "p_id": doc_id,
                    "p_field": field,
                    "p_expected": expected,
                    "p_value": value,
                },
            ),
            f"compare-and-set on {collection}",
        )
        matched = int(result.data or 0)
        return UpdateResult(
            matched_count=matched, modified_count=int(matched and expected != value)
        )

    async def delete_one(self, collection: str, doc_id: str) -> DeleteResult:
        result = self._execute(
            self._client.table(collection).delete().eq("id", doc_id),
            f"delete from {collection}",
        )
        return DeleteResult(deleted_count=len(result.data or []))
