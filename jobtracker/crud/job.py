"""
CRUD operations for Job model.

Every function takes the owner's user id and filters on it, so a job is
never read, changed or deleted on behalf of another user.
"""

from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session
from jobtracker.core.errors import NotFoundError
from jobtracker.models.job import Job, utcnow
from jobtracker.schemas.job import JobCreateRequest, JobUpdateRequest


def _owned(db: Session, owner_id: int) -> Query:
    """Base query restricted to one owner's jobs."""
    return db.query(Job).filter(Job.user_id == owner_id)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def create(db: Session, owner_id: int, job_data: JobCreateRequest) -> Job:
    """
    Create a new job owned by owner_id.

    Returns:
        Created Job instance with id and posted_at

    Raises:
        NotFoundError: If the owner no longer exists (e.g. deleted while
            their token is still valid)
    """
    db_job = Job(
        user_id=owner_id,
        title=job_data.title,
        company=job_data.company,
        location=job_data.location,
        description=job_data.description,
        requirements=job_data.requirements,
        is_applied=False,
    )

    db.add(db_job)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise NotFoundError("User not found")
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, owner_id: int, job_id: int) -> Optional[Job]:
    """
    Retrieve one of owner_id's jobs by its ID.

    Returns:
        Job instance if found for this owner, None otherwise
    """
    return _owned(db, owner_id).filter(Job.id == job_id).first()


def get_multi(
    db: Session,
    owner_id: int,
    search: Optional[str] = None,
    limit: Optional[int] = None
) -> List[Job]:
    """
    List an owner's jobs, most recently posted first.

    Args:
        db: Database session
        owner_id: Owning user id
        search: Optional case-insensitive substring matched against the title
        limit: Maximum number of rows; None or 0 returns every match

    Returns:
        List of Job instances
    """
    query = _owned(db, owner_id)

    if search:
        query = query.filter(Job.title.ilike(f"%{_escape_like(search)}%", escape="\\"))

    query = query.order_by(Job.posted_at.desc(), Job.id.desc())

    if limit:
        query = query.limit(limit)

    return query.all()


def update(
    db: Session,
    owner_id: int,
    job_id: int,
    job_data: JobUpdateRequest
) -> Optional[Job]:
    """
    Replace the editable fields of one of owner_id's jobs.

    Returns:
        Updated Job instance if found, None otherwise
    """
    job = get_by_id(db, owner_id, job_id)
    if not job:
        return None

    job.title = job_data.title
    job.company = job_data.company
    job.location = job_data.location
    job.description = job_data.description
    job.requirements = job_data.requirements
    job.is_applied = job_data.is_applied
    job.updated_at = job_data.updated_at or utcnow()

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, owner_id: int, job_id: int) -> bool:
    """
    Delete one of owner_id's jobs.

    Returns:
        True if a row was deleted, False if nothing matched
    """
    deleted = _owned(db, owner_id).filter(Job.id == job_id).delete(synchronize_session=False)
    db.commit()

    return deleted > 0
