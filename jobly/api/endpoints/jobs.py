import logging
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_admin_user
from jobly.core.errors import BadRequestError
from jobly.core.security import TokenClaims
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    JobDeletedResponse,
    JobEnvelope,
    JobListEnvelope,
    JobNew,
    JobResponse,
    JobSearch,
    JobUpdate,
)
from jobly.schemas.validation import validate_payload

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_admin_user),
):
    """
    Create a job posting.

    Body: { title, salary?, equity?, companyHandle }
    The company must already exist.

    Authorization required: admin
    """
    result = validate_payload(JobNew, payload)
    if not result.ok:
        raise BadRequestError(result.errors)

    job = job_crud.create(db, result.value)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.get("", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs, optionally filtered.

    Query parameters (all optional, combined with AND):
    - title: case-insensitive partial match on the job title
    - minSalary: salary of at least this amount
    - hasEquity: true to return only jobs that offer equity

    Authorization required: none
    """
    result = validate_payload(JobSearch, dict(request.query_params))
    if not result.ok:
        raise BadRequestError(result.errors)

    search = result.value
    jobs = job_crud.find_all(
        db,
        title=search.title,
        min_salary=search.min_salary,
        has_equity=search.has_equity,
    )
    return JobListEnvelope(jobs=[JobResponse.model_validate(j) for j in jobs])


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    job = job_crud.get(db, job_id)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_admin_user),
):
    """
    Partially update a job.

    Body may contain: { title, salary, equity }.
    id and companyHandle cannot be changed.

    Authorization required: admin
    """
    result = validate_payload(JobUpdate, payload)
    if not result.ok:
        raise BadRequestError(result.errors)

    changes = result.value.model_dump(by_alias=True, exclude_unset=True)
    job = job_crud.update(db, job_id, changes)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_admin_user),
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return JobDeletedResponse(deleted=job_id)
