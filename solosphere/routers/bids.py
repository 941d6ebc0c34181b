"""
Bid endpoints — thin HTTP layer, delegates all logic to BidService.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from solosphere.dependencies import get_bid_service
from solosphere.domain.exceptions import DuplicateBid, ImmutableField
from solosphere.domain.models import BidIn, InsertResult, UpdateResult
from solosphere.services.bid_service import BidService

router = APIRouter(tags=["Bids"])


@router.post("/bids", response_model=InsertResult)
async def submit_bid(
    body: BidIn,
    bids: BidService = Depends(get_bid_service),
):
    """Place a bid. A second bid by the same email on the same job is a 400."""
    try:
        bid_id = await bids.submit(body.model_dump(exclude_unset=True))
    except DuplicateBid as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    return InsertResult(inserted_id=bid_id)


@router.get("/myBids/{email}")
async def list_my_bids(
    email: str,
    bids: BidService = Depends(get_bid_service),
) -> list[dict[str, Any]]:
    return await bids.list_by_bidder_email(email)


@router.get("/bidRequests/{email}")
async def list_bid_requests(
    email: str,
    bids: BidService = Depends(get_bid_service),
) -> list[dict[str, Any]]:
    """Bids received on jobs owned by `email`."""
    return await bids.list_by_owner_email(email)


@router.patch("/bid/{bid_id}", response_model=UpdateResult)
async def patch_bid_status(
    bid_id: str,
    patch: dict[str, Any] = Body(...),
    bids: BidService = Depends(get_bid_service),
):
    """Merge-patch the bid, typically `{"status": ...}`. email and jobId are fixed."""
    try:
        return await bids.update_status(bid_id, patch)
    except ImmutableField as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
