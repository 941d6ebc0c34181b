"""
Job service — CRUD for job postings.
Owns the canonical `bid_count` field; only the bid path changes it.
"""

import logging
from typing import Any

from solosphere.domain.enums import Collection
from solosphere.domain.exceptions import Forbidden, NotFound
from solosphere.domain.models import DeleteResult, StoreQuery, UpdateResult
from solosphere.ports.store_port import StorePort

logger = logging.getLogger(__name__)

JOBS = Collection.JOBS.value
BID_COUNT = "bid_count"


class JobService:
    """Handles job CRUD operations."""

    def __init__(self, store: StorePort) -> None:
        self._store = store

    async def create(self, job: dict[str, Any]) -> str:
        """Insert a new job with a zeroed bid counter and return its id."""
        data = {k: v for k, v in job.items() if k not in ("id", BID_COUNT)}
        data[BID_COUNT] = 0
        job_id = await self._store.insert_one(JOBS, data)
        logger.info(f"Job created: {job_id}")
        return job_id

    async def get(self, job_id: str) -> dict[str, Any]:
        job = await self._store.find_one(JOBS, {"id": job_id})
        if job is None:
            raise NotFound(JOBS, job_id)
        return job

    async def list_by_owner_email(
        self, email: str, caller_email: str
    ) -> list[dict[str, Any]]:
        """Owner-scoped read: the verified caller may only list their own jobs."""
        if email != caller_email:
            raise Forbidden(f"{caller_email} may not list jobs owned by {email}")
        return await self._store.find(JOBS, StoreQuery(equals={"buyer.email": email}))

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._store.find(JOBS)

    async def replace(self, job_id: str, job_data: dict[str, Any]) -> UpdateResult:
        """
        Upsert with set semantics: keys present in `job_data` overwrite,
        keys absent stay as stored. A missing id is created under that id
        with a zeroed bid counter, same as `create`.
        """
        changes = {k: v for k, v in job_data.items() if k not in ("id", BID_COUNT)}
        return await self._store.update_one(
            JOBS, job_id, changes, upsert=True, set_on_insert={BID_COUNT: 0}
        )

    async def delete(self, job_id: str) -> DeleteResult:
        return await self._store.delete_one(JOBS, job_id)

    async def increment_bid_count(self, job_id: str) -> UpdateResult:
        """Atomic +1 on bid_count. A missing job is logged, not raised."""
        result = await self._store.increment(JOBS, job_id, BID_COUNT, 1)
        if result.matched_count == 0:
            logger.warning(f"bid_count not incremented: job {job_id} does not exist")
        return result
