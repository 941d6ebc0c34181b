"""
Abstract interface for the document record store.

Documents are plain dicts keyed by a string `id`. Collections are
independent; nothing in the store relates one collection to another.
"""

from abc import ABC, abstractmethod
from typing import Any

from solosphere.domain.models import DeleteResult, StoreQuery, UpdateResult


class StorePort(ABC):
    """Port for CRUD operations against the record store."""

    @abstractmethod
    async def find(
        self, collection: str, query: StoreQuery | None = None
    ) -> list[dict[str, Any]]:
        """Return every document matching `query` (all documents if None)."""
        ...

    @abstractmethod
    async def find_one(
        self, collection: str, equals: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Return the first document whose fields equal `equals`, or None."""
        ...

    @abstractmethod
    async def insert_one(
        self,
        collection: str,
        document: dict[str, Any],
        unique_on: tuple[str, ...] = (),
    ) -> str:
        """
        Insert a document and return its id.

        Args:
            collection: Target collection name
            document: Fields to store; an `id` is assigned if absent
            unique_on: Field names forming a composite unique key. The
                check and the insert happen atomically.

        Raises:
            DuplicateKeyError: another document already holds the key.
        """
        ...

    @abstractmethod
    async def update_one(
        self,
        collection: str,
        doc_id: str,
        changes: dict[str, Any],
        upsert: bool = False,
        set_on_insert: dict[str, Any] | None = None,
    ) -> UpdateResult:
        """
        Set the given fields on one document. Fields not in `changes` are
        left untouched. With `upsert`, a missing id is created from
        `set_on_insert` overlaid with `changes`; `set_on_insert` is ignored
        when the document already exists.
        """
        ...

    @abstractmethod
    async def compare_and_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        expected: Any,
        value: Any,
    ) -> UpdateResult:
        """
        Set `field` to `value` only if it still holds `expected` (None
        matches a missing field). matched_count is 0 when the document is
        gone or the field changed since it was read.
        """
        ...

    @abstractmethod
    async def increment(
        self, collection: str, doc_id: str, field: str, amount: int = 1
    ) -> UpdateResult:
        """Atomically add `amount` to a numeric field (missing counts as 0)."""
        ...

    @abstractmethod
    async def delete_one(self, collection: str, doc_id: str) -> DeleteResult:
        """Delete one document. A missing id is not an error."""
        ...

    @abstractmethod
    async def count_documents(
        self, collection: str, query: StoreQuery | None = None
    ) -> int:
        """Count documents matching the predicate part of `query`."""
        ...
