"""
Pydantic models for requests, responses, and internal data transfer.
Pure data — no I/O, no side effects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ── Store ─────────────────────────────────────────────────────


class StoreQuery(BaseModel):
    """
    Store-level query understood by every StorePort adapter.

    `equals` holds exact matches on dotted field paths (e.g. "buyer.email"),
    `contains` holds case-insensitive literal substring matches. All
    conditions are ANDed. `limit=None` means no limit.
    """

    equals: dict[str, Any] = Field(default_factory=dict)
    contains: dict[str, str] = Field(default_factory=dict)
    sort_by: str | None = None
    descending: bool = False
    skip: int = 0
    limit: int | None = None


class InsertResult(BaseModel):
    """Acknowledgement of a single insert."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    inserted_id: str = Field(..., alias="insertedId")


class UpdateResult(BaseModel):
    """Acknowledgement of a single update or upsert."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    matched_count: int = Field(0, alias="matchedCount")
    modified_count: int = Field(0, alias="modifiedCount")
    upserted_id: str | None = Field(None, alias="upsertedId")


class DeleteResult(BaseModel):
    """Acknowledgement of a single delete."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    deleted_count: int = Field(0, alias="deletedCount")


# ── Job ───────────────────────────────────────────────────────


class Buyer(BaseModel):
    """Owner block embedded in a job posting."""

    model_config = ConfigDict(extra="allow")

    email: str | None = None


class JobIn(BaseModel):
    """
    Request body for POST /jobs and PUT /job/{id}.
    Only the fields the core reads are typed; everything else passes through.
    """

    model_config = ConfigDict(extra="allow")

    job_title: str | None = None
    job_category: str | None = None
    deadline: str | int | float | None = None
    buyer: Buyer | None = None


class JobCount(BaseModel):
    """Response for GET /jobsCount."""

    count: int


# ── Bid ───────────────────────────────────────────────────────


class BidIn(BaseModel):
    """
    Request body for POST /bids.
    Numeric job ids are stored as strings so they match job ids and the
    (email, jobId) unique key.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    jobId: str
    email: str
    buyer_email: str | None = None
    status: str | None = None


# ── Auth ──────────────────────────────────────────────────────


class TokenRequest(BaseModel):
    """Claims to sign into the session cookie. Must carry the email."""

    model_config = ConfigDict(extra="allow")

    email: str


class SuccessResponse(BaseModel):
    success: bool = True


# ── Maintenance ───────────────────────────────────────────────


class ReconcileReport(BaseModel):
    """Outcome of one bid_count reconciliation pass."""

    jobs_checked: int = 0
    jobs_corrected: int = 0
