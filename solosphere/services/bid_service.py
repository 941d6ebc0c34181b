"""
Bid service — bid submission and bid listings.

Enforces one bid per (bidder email, job) and keeps the job's bid_count
in step with the bid records.
"""

import logging
from typing import Any

from solosphere.domain.enums import Collection
from solosphere.domain.exceptions import (
    DuplicateBid,
    DuplicateKeyError,
    ImmutableField,
    SoloSphereError,
)
from solosphere.domain.models import StoreQuery, UpdateResult
from solosphere.ports.store_port import StorePort
from solosphere.services.job_service import JobService

logger = logging.getLogger(__name__)

BIDS = Collection.BIDS.value
BID_KEY = ("email", "jobId")


class BidService:
    """Orchestrates bid submission against the bid and job collections."""

    def __init__(self, store: StorePort, jobs: JobService) -> None:
        self._store = store
        self._jobs = jobs

    async def submit(self, bid: dict[str, Any]) -> str:
        """
        Record a bid and bump the target job's bid_count.

        1. Look for an existing bid with the same (email, jobId).
        2. If there is one, raise DuplicateBid.
        3. Insert through the store's insert-if-absent primitive; losing a
           race to a concurrent submit also ends in DuplicateBid.
        4. Increment the job's bid_count.

        The bid is the authoritative record: a failed increment is logged
        and the inserted id is still returned. The counter stays stale
        until reconciliation.
        """
        email, job_id = bid["email"], bid["jobId"]
        data = {k: v for k, v in bid.items() if k != "id"}

        if await self._store.find_one(BIDS, {"email": email, "jobId": job_id}):
            logger.info(f"Duplicate bid rejected: {email} on job {job_id}")
            raise DuplicateBid(email, job_id)

        try:
            bid_id = await self._store.insert_one(BIDS, data, unique_on=BID_KEY)
        except DuplicateKeyError as exc:
            logger.info(f"Duplicate bid rejected at insert: {email} on job {job_id}")
            raise DuplicateBid(email, job_id) from exc

        try:
            await self._jobs.increment_bid_count(job_id)
        except SoloSphereError:
            logger.exception(
                f"Bid {bid_id} recorded but bid_count of job {job_id} was not incremented"
            )

        return bid_id

    async def list_by_bidder_email(self, email: str) -> list[dict[str, Any]]:
        """All bids placed by one bidder."""
        return await self._store.find(BIDS, StoreQuery(equals={"email": email}))

    async def list_by_owner_email(self, buyer_email: str) -> list[dict[str, Any]]:
        """All bids against jobs owned by one buyer (incoming bid requests)."""
        return await self._store.find(
            BIDS, StoreQuery(equals={"buyer_email": buyer_email})
        )

    async def update_status(self, bid_id: str, patch: dict[str, Any]) -> UpdateResult:
        """
        Merge `patch` into the bid. A missing id is acknowledged with no match.

        email and jobId are the bid's unique key and the link that
        bid_count is kept against, so a patch naming either is rejected.
        """
        locked = [field for field in BID_KEY if field in patch]
        if locked:
            raise ImmutableField(locked)
        return await self._store.update_one(BIDS, bid_id, patch)
