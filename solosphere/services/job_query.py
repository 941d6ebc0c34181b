"""
Paginated job search.

Turns the client's page/size/filter/sort/search parameters into a
StoreQuery. The list and the count share one predicate builder so the
page count computed by clients always agrees with the listing.
"""

from typing import Any

from solosphere.domain.enums import Collection, SortOrder
from solosphere.domain.models import StoreQuery
from solosphere.ports.store_port import StorePort

JOBS = Collection.JOBS.value


def build_predicate(filter: str | None = None, search: str | None = None) -> StoreQuery:
    """
    Category equality AND case-insensitive literal title substring.
    Empty or missing values add no condition.
    """
    query = StoreQuery()
    if search:
        query.contains["job_title"] = search
    if filter:
        query.equals["job_category"] = filter
    return query


def parse_sort(sort: str | None) -> SortOrder | None:
    """Only "asc" and "desc" order results; anything else keeps store order."""
    try:
        return SortOrder(sort) if sort else None
    except ValueError:
        return None


class JobQueryBuilder:
    """Builds and runs the paginated job search against the store."""

    def __init__(self, store: StorePort) -> None:
        self._store = store

    @staticmethod
    def build(
        page: int,
        size: int,
        filter: str | None = None,
        sort: str | None = None,
        search: str | None = None,
    ) -> StoreQuery:
        # Permissive paging: nonsense page/size gives an empty page, never an error
        query = build_predicate(filter, search)
        order = parse_sort(sort)
        if order is not None:
            query.sort_by = "deadline"
            query.descending = order is SortOrder.DESC
        query.skip = max(page * size, 0)
        query.limit = max(size, 0)
        return query

    async def search(
        self,
        page: int,
        size: int,
        filter: str | None = None,
        sort: str | None = None,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        """One page of jobs matching filter + search."""
        return await self._store.find(
            JOBS, self.build(page, size, filter=filter, sort=sort, search=search)
        )

    async def count(self, filter: str | None = None, search: str | None = None) -> int:
        """Total jobs matching filter + search, ignoring sort and paging."""
        return await self._store.count_documents(JOBS, build_predicate(filter, search))
