"""
CRUD operations for Job model.

Equity arrives as a validated string and is stored as Decimal. Jobs always
belong to an existing company: create() reports an unknown handle as a 400
rather than letting the foreign key fail. Failures are raised as typed errors
from jobly.core.errors.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud.filters import Filter, FilterOp, apply_filters
from jobly.helpers.sql import sql_for_partial_update
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.job import JobNew

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "companyHandle": "company_handle",
}


def _to_decimal(equity: Optional[str]) -> Optional[Decimal]:
    return Decimal(equity) if equity is not None else None


def create(db: Session, job_data: JobNew) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If the referenced company does not exist
    """
    company = db.query(Company.handle).filter(Company.handle == job_data.company_handle).first()
    if not company:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=_to_decimal(job_data.equity),
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
    return db_job


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: bool = False,
) -> List[Job]:
    """
    Retrieve jobs matching every supplied criterion in a single query.

    Args:
        db: Database session
        title: Case-insensitive substring of the job title
        min_salary: Minimum salary (inclusive)
        has_equity: When True, only jobs with equity; when False, no equity filter

    Returns:
        List of Job instances ordered by title, then id
    """
    filters = []
    if title is not None:
        filters.append(Filter(Job.title, FilterOp.CONTAINS, title))
    if min_salary is not None:
        filters.append(Filter(Job.salary, FilterOp.GTE, min_salary))
    if has_equity:
        filters.append(Filter(Job.equity, FilterOp.NOT_NULL))

    query = apply_filters(db.query(Job), filters)
    return query.order_by(Job.title, Job.id).all()


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Job:
    """
    Partially update a job. Only title, salary and equity may change.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no job has this id
    """
    partial = sql_for_partial_update(data, JS_TO_SQL)
    job = get(db, job_id)

    for column, value in partial.columns.items():
        if column == "equity":
            value = _to_decimal(value)
        setattr(job, column, value)

    db.commit()
    db.refresh(job)

    logger.info(f"Updated job {job_id}: {', '.join(partial.columns)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    job = get(db, job_id)

    db.delete(job)
    db.commit()

    logger.info(f"Deleted job {job_id}")
