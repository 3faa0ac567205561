from urllib.parse import urlparse
from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator
from typing import Annotated, List, Optional

from jobly.schemas.job import INT_MAX, JobSummary


def _check_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an http(s) URL")
    return v


LogoUrl = Annotated[Optional[str], AfterValidator(_check_url)]


class CompanyNew(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, le=INT_MAX, alias="numEmployees")
    logo_url: LogoUrl = Field(None, alias="logoUrl")

    class Config:
        extra = "forbid"


class CompanyUpdate(BaseModel):
    """
    Schema for a partial company update.

    handle is not a field here, so a body that tries to change it is rejected.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=INT_MAX, alias="numEmployees")
    logo_url: LogoUrl = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        extra = "forbid"


class CompanySearch(BaseModel):
    """Query-string filters for GET /companies"""
    name: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0, le=INT_MAX, alias="minEmployees")
    max_employees: Optional[int] = Field(None, ge=0, le=INT_MAX, alias="maxEmployees")

    @model_validator(mode="after")
    def check_employee_range(self):
        if (
            self.min_employees is not None
            and self.max_employees is not None
            and self.min_employees > self.max_employees
        ):
            raise ValueError("minEmployees cannot be greater than maxEmployees")
        return self

    class Config:
        extra = "forbid"


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
        populate_by_name = True


class CompanyDetailResponse(CompanyResponse):
    """Company together with the jobs it owns"""
    jobs: List[JobSummary] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeletedResponse(BaseModel):
    deleted: str
