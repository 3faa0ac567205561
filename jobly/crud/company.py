"""
CRUD operations for Company model.

Every function raises a typed error from jobly.core.errors when the request
cannot be satisfied; the API layer does not inspect return values for
failure.
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud.filters import Filter, FilterOp, apply_filters
from jobly.helpers.sql import sql_for_partial_update
from jobly.models.company import Company
from jobly.schemas.company import CompanyNew

logger = logging.getLogger(__name__)

# Request field name -> storage column, where they differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, company_data: CompanyNew) -> Company:
    """
    Create a new company in the database.

    Args:
        db: Database session
        company_data: Validated company creation data

    Returns:
        Created Company instance

    Raises:
        BadRequestError: If a company with the same handle exists
    """
    duplicate = db.query(Company.handle).filter(Company.handle == company_data.handle).first()
    if duplicate:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent insert won the race past the duplicate check
        db.rollback()
        raise BadRequestError(f"Duplicate company: {company_data.handle}")
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def find_all(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Company]:
    """
    Retrieve companies matching every supplied criterion.

    Args:
        db: Database session
        name: Case-insensitive substring of the company name
        min_employees: Minimum number of employees (inclusive)
        max_employees: Maximum number of employees (inclusive)

    Returns:
        List of Company instances ordered by name, then handle
    """
    filters = []
    if name is not None:
        filters.append(Filter(Company.name, FilterOp.CONTAINS, name))
    if min_employees is not None:
        filters.append(Filter(Company.num_employees, FilterOp.GTE, min_employees))
    if max_employees is not None:
        filters.append(Filter(Company.num_employees, FilterOp.LTE, max_employees))

    query = apply_filters(db.query(Company), filters)
    return query.order_by(Company.name, Company.handle).all()


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company by handle. Its jobs are available as company.jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = db.query(Company).filter(Company.handle == handle).first()
    if not company:
        raise NotFoundError(f"No company: {handle}")
    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Company:
    """
    Partially update a company.

    Only the fields present in data change; keys are request field names
    (e.g. "numEmployees").

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no company has this handle
    """
    partial = sql_for_partial_update(data, JS_TO_SQL)
    company = get(db, handle)

    for column, value in partial.columns.items():
        setattr(company, column, value)

    db.commit()
    db.refresh(company)

    logger.info(f"Updated company {handle}: {', '.join(partial.columns)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, through the cascade, its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = get(db, handle)

    db.delete(company)
    db.commit()

    logger.info(f"Deleted company {handle}")
