import logging
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_admin_user
from jobly.core.errors import BadRequestError
from jobly.core.security import TokenClaims
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyDeletedResponse,
    CompanyDetailEnvelope,
    CompanyDetailResponse,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyNew,
    CompanyResponse,
    CompanySearch,
    CompanyUpdate,
)
from jobly.schemas.validation import validate_payload

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_admin_user),
):
    """
    Create a company.

    Body: { handle, name, description, numEmployees?, logoUrl? }

    Authorization required: admin
    """
    result = validate_payload(CompanyNew, payload)
    if not result.ok:
        raise BadRequestError(result.errors)

    company = company_crud.create(db, result.value)
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.get("", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies, optionally filtered.

    Query parameters (all optional, combined with AND):
    - name: case-insensitive partial match on the company name
    - minEmployees: at least this many employees
    - maxEmployees: at most this many employees

    minEmployees greater than maxEmployees is rejected with 400.

    Authorization required: none
    """
    result = validate_payload(CompanySearch, dict(request.query_params))
    if not result.ok:
        raise BadRequestError(result.errors)

    search = result.value
    companies = company_crud.find_all(
        db,
        name=search.name,
        min_employees=search.min_employees,
        max_employees=search.max_employees,
    )
    return CompanyListEnvelope(
        companies=[CompanyResponse.model_validate(c) for c in companies]
    )


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.

    Authorization required: none
    """
    company = company_crud.get(db, handle)
    return CompanyDetailEnvelope(company=CompanyDetailResponse.model_validate(company))


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_admin_user),
):
    """
    Partially update a company.

    Body may contain: { name, description, numEmployees, logoUrl }.
    The handle cannot be changed.

    Authorization required: admin
    """
    result = validate_payload(CompanyUpdate, payload)
    if not result.ok:
        raise BadRequestError(result.errors)

    changes = result.value.model_dump(by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, changes)
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_admin_user),
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return CompanyDeletedResponse(deleted=handle)
