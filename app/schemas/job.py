from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.company import CompanyRead


_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_CAMEL_STRICT_KEYS = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    # Fraction of the company offered, e.g. "0.05".
    equity: Decimal | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)

    model_config = _CAMEL_STRICT_KEYS


class JobUpdate(BaseModel):
    """Partial update. companyHandle is not updatable."""

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)

    model_config = _CAMEL_STRICT_KEYS

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("title may not be null")
        return v


class JobSearch(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    min_salary: int | None = Field(default=None, ge=0)
    has_equity: bool | None = None

    model_config = _CAMEL_STRICT_KEYS


class JobRead(BaseModel):
    id: int
    title: str
    salary: int | None = None
    equity: str | None = None
    company_handle: str

    model_config = _CAMEL


class JobSummary(JobRead):
    company_name: str | None = None


class JobDetail(BaseModel):
    id: int
    title: str
    salary: int | None = None
    equity: str | None = None
    company: CompanyRead | None = None

    model_config = _CAMEL


class JobResponse(BaseModel):
    job: JobRead


class JobDetailResponse(BaseModel):
    job: JobDetail


class JobListResponse(BaseModel):
    jobs: list[JobSummary]


class JobDeleteResponse(BaseModel):
    deleted: int
