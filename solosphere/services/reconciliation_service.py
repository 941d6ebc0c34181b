"""
Reconciliation service — repairs bid_count drift.

Bid submission never rolls back a recorded bid when the counter update
fails, so a job's bid_count can lag its bids. This pass recounts bids per
job and writes back the counters that disagree, each only if it has not
moved since it was read.
"""

import logging
from collections import Counter

from solosphere.domain.enums import Collection
from solosphere.domain.models import ReconcileReport
from solosphere.ports.store_port import StorePort
from solosphere.services.job_service import BID_COUNT

logger = logging.getLogger(__name__)


class ReconciliationService:
    def __init__(self, store: StorePort) -> None:
        self._store = store

    async def reconcile_bid_counts(self) -> ReconcileReport:
        # jobs are read before bids: a bid that lands after the jobs read
        # moves its counter off the observed value and the write is skipped
        jobs = await self._store.find(Collection.JOBS.value)
        bids = await self._store.find(Collection.BIDS.value)
        actual = Counter(b.get("jobId") for b in bids)
        report = ReconcileReport(jobs_checked=len(jobs))

        for job in jobs:
            observed = job.get(BID_COUNT)
            expected = actual.get(job["id"], 0)
            if (observed or 0) == expected:
                continue
            result = await self._store.compare_and_set(
                Collection.JOBS.value, job["id"], BID_COUNT, observed, expected
            )
            if result.matched_count == 0:
                logger.info(
                    f"bid_count of job {job['id']} changed during reconciliation, "
                    "left for the next pass"
                )
                continue
            report.jobs_corrected += 1
            logger.info(
                f"bid_count of job {job['id']} corrected: {observed} -> {expected}"
            )

        logger.info(
            f"Reconciliation done: {report.jobs_corrected}/{report.jobs_checked} corrected"
        )
        return report
