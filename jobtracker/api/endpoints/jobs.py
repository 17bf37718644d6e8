"""
Job endpoints, all scoped to the authenticated user.

The {user_id} path segment is kept for existing clients but the owner always
comes from the verified token; a mismatching path is rejected.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtracker.core.database import get_db
from jobtracker.core.deps import get_owner_id
from jobtracker.core.errors import NotFoundError
from jobtracker.crud import job as job_crud
from jobtracker.schemas.envelope import Envelope, MessageResponse, PaginatedEnvelope, Pagination
from jobtracker.schemas.job import JobCreateRequest, JobResponse, JobUpdateRequest

router = APIRouter(prefix="/{user_id}/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

# Largest LIMIT every supported database accepts (32-bit signed)
MAX_LIST_LIMIT = 2**31 - 1


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[JobResponse])
def create_job(
    request: JobCreateRequest,
    owner_id: int = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Create a new job posting for the authenticated user."""
    new_job = job_crud.create(db, owner_id, request)

    logger.info(f"Created job {new_job.id} for user {owner_id}: {new_job.title}")

    return Envelope[JobResponse](
        message=f"Inserted job with id {new_job.id}",
        data=JobResponse.model_validate(new_job),
    )


@router.get("", response_model=PaginatedEnvelope[List[JobResponse]])
def list_jobs(
    search: Optional[str] = None,
    limit: int = Query(0, ge=0, le=MAX_LIST_LIMIT),
    owner_id: int = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """
    List the authenticated user's jobs, newest first.

    Args:
        search: Case-insensitive substring to match in the title
        limit: Maximum number of jobs to return (0 or omitted: all)
    """
    jobs = job_crud.get_multi(db, owner_id, search=search, limit=limit)

    return PaginatedEnvelope[List[JobResponse]](
        message=f"Retrieved {len(jobs)} jobs",
        data=[JobResponse.model_validate(j) for j in jobs],
        pagination=Pagination(limit=limit),
    )


@router.get("/{job_id}", response_model=Envelope[JobResponse])
def get_job(
    job_id: int,
    owner_id: int = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Retrieve one of the authenticated user's jobs by ID."""
    job = job_crud.get_by_id(db, owner_id, job_id)
    if not job:
        raise NotFoundError("Job not found")

    return Envelope[JobResponse](
        message=f"Retrieved job with id {job_id}",
        data=JobResponse.model_validate(job),
    )


@router.put("/{job_id}", response_model=Envelope[JobResponse])
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    owner_id: int = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Replace the fields of one of the authenticated user's jobs."""
    job = job_crud.update(db, owner_id, job_id, request)
    if not job:
        raise NotFoundError("Job not found")

    logger.info(f"Updated job {job_id} for user {owner_id} (applied: {job.is_applied})")

    return Envelope[JobResponse](
        message=f"Updated job with id {job_id}",
        data=JobResponse.model_validate(job),
    )


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    owner_id: int = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """
    Delete one of the authenticated user's jobs.

    Succeeds whether or not the job existed.
    """
    if job_crud.delete(db, owner_id, job_id):
        logger.info(f"Deleted job {job_id} for user {owner_id}")

    return MessageResponse(message=f"Deleted job with id {job_id}")
