from decimal import Decimal
from pydantic import BaseModel, Field, field_serializer, field_validator
from typing import List, Optional

# A fraction between 0 and 1 written as a string: "0", "0.25", ".5", "1.0"
EQUITY_PATTERN = r"^(0|0?\.[0-9]+|1(\.0+)?)$"

# Largest value an INTEGER column holds
INT_MAX = 2_147_483_647


class JobNew(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        extra = "forbid"


class JobUpdate(BaseModel):
    """
    Schema for a partial job update.

    id and companyHandle are immutable and therefore not accepted.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    @field_validator("title")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        extra = "forbid"


class JobSearch(BaseModel):
    """Query-string filters for GET /jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0, le=INT_MAX, alias="minSalary")
    # false means "don't filter on equity", not "only jobs without equity"
    has_equity: bool = Field(False, alias="hasEquity")

    class Config:
        extra = "forbid"


class JobSummary(BaseModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None

    @field_serializer("equity")
    def serialize_equity(self, equity: Optional[Decimal]) -> Optional[str]:
        if equity is None:
            return None
        return format(equity.normalize(), "f")

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
        populate_by_name = True


class JobResponse(JobSummary):
    """Schema for job response"""
    company_handle: str = Field(..., alias="companyHandle")


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
