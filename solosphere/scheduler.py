"""
Scheduler module for periodic background tasks.
Uses APScheduler's AsyncIOScheduler.

Only job: the bid_count reconciliation pass, enabled by setting
RECONCILE_INTERVAL_MINUTES above zero.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from solosphere.config import settings
from solosphere.dependencies import get_store
from solosphere.domain.models import ReconcileReport
from solosphere.services.reconciliation_service import ReconciliationService

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = AsyncIOScheduler()

_JOB_ID = "reconcile_bid_counts"


async def run_reconciliation() -> ReconcileReport | None:
    """Task wrapper: one failed pass must not kill the schedule."""
    logger.info("🕒 Starting bid_count reconciliation...")
    service = ReconciliationService(get_store())
    try:
        return await service.reconcile_bid_counts()
    except Exception as e:
        logger.error(f"Reconciliation failed: {e}")
        return None


def start_scheduler() -> None:
    """Start the background scheduler if reconciliation is enabled."""
    if settings.reconcile_interval_minutes <= 0:
        logger.info("Reconciliation schedule disabled.")
        return

    scheduler.add_job(
        run_reconciliation,
        IntervalTrigger(minutes=settings.reconcile_interval_minutes),
        id=_JOB_ID,
        replace_existing=True,
    )
    scheduler.start()

    job = scheduler.get_job(_JOB_ID)
    if job:
        logger.info(f"📅 Scheduler started. Next reconciliation at: {job.next_run_time}")


def shutdown_scheduler() -> None:
    """Stop the scheduler."""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shut down.")
