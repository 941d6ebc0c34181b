"""
Admin endpoints — maintenance operations.
"""

import logging

from fastapi import APIRouter, Depends

from solosphere.dependencies import get_reconciliation_service
from solosphere.domain.models import ReconcileReport
from solosphere.services.auth_service import get_current_email
from solosphere.services.reconciliation_service import ReconciliationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/reconcile-bid-counts", response_model=ReconcileReport)
async def reconcile_bid_counts(
    caller_email: str = Depends(get_current_email),
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    """Recount bids per job and repair any drifted bid_count."""
    logger.info(f"Manual bid_count reconciliation requested by {caller_email}")
    return await service.reconcile_bid_counts()
