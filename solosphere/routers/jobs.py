"""
Job endpoints — posting, owner listings, detail, upsert, delete, and the
paginated search with its matching count.
All logic delegated to JobService and JobQueryBuilder.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from solosphere.config import settings
from solosphere.dependencies import get_job_service, get_query_builder
from solosphere.domain.exceptions import Forbidden, NotFound
from solosphere.domain.models import (
    DeleteResult,
    InsertResult,
    JobCount,
    JobIn,
    UpdateResult,
)
from solosphere.services.auth_service import get_current_email
from solosphere.services.job_query import JobQueryBuilder
from solosphere.services.job_service import JobService

router = APIRouter(tags=["Jobs"])


def _check_paging(page: int, size: int) -> None:
    """Only enforced when STRICT_PAGINATION is on; otherwise paging is permissive."""
    if not settings.strict_pagination:
        return
    if page < 0 or size < 1:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="page must be >= 0 and size must be >= 1",
        )


@router.post("/jobs", response_model=InsertResult)
async def create_job(
    body: JobIn,
    jobs: JobService = Depends(get_job_service),
):
    """Post a new job. The bid counter always starts at zero."""
    job_id = await jobs.create(body.model_dump(exclude_unset=True))
    return InsertResult(inserted_id=job_id)


@router.get("/jobs/{email}")
async def list_jobs_by_owner(
    email: str,
    caller_email: str = Depends(get_current_email),
    jobs: JobService = Depends(get_job_service),
) -> list[dict[str, Any]]:
    """Jobs posted by `email`. Only the owner may list them."""
    try:
        return await jobs.list_by_owner_email(email, caller_email)
    except Forbidden:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden Access",
        )


@router.get("/jobs")
async def list_all_jobs(
    jobs: JobService = Depends(get_job_service),
) -> list[dict[str, Any]]:
    return await jobs.list_all()


@router.get("/job/{job_id}")
async def get_job(
    job_id: str,
    jobs: JobService = Depends(get_job_service),
) -> dict[str, Any]:
    try:
        return await jobs.get(job_id)
    except NotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )


@router.put("/job/{job_id}", response_model=UpdateResult)
async def replace_job(
    job_id: str,
    body: JobIn,
    jobs: JobService = Depends(get_job_service),
):
    """Upsert: given fields overwrite, omitted fields are kept."""
    return await jobs.replace(job_id, body.model_dump(exclude_unset=True))


@router.delete("/job/{job_id}", response_model=DeleteResult)
async def delete_job(
    job_id: str,
    jobs: JobService = Depends(get_job_service),
):
    return await jobs.delete(job_id)


# ── Paginated search ──────────────────────────────────────────


@router.get("/allJobs")
async def search_jobs(
    page: int = Query(0),
    size: int = Query(10),
    filter: str | None = Query(None),
    sort: str | None = Query(None),
    search: str = Query(""),
    builder: JobQueryBuilder = Depends(get_query_builder),
) -> list[dict[str, Any]]:
    """One page of jobs filtered by category and title substring."""
    _check_paging(page, size)
    return await builder.search(page, size, filter=filter, sort=sort, search=search)


@router.get("/jobsCount", response_model=JobCount)
async def count_jobs(
    filter: str | None = Query(None),
    search: str = Query(""),
    builder: JobQueryBuilder = Depends(get_query_builder),
):
    """Total matches for the same filter + search, for page-count math."""
    return JobCount(count=await builder.count(filter=filter, search=search))
