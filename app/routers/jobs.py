# jobs.py
from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from app.db.sql import DatabaseConnectionError, DatabaseQueryError
from app.routers.dependencies import get_job_service, require_admin
from app.schemas.auth import TokenPayload
from app.schemas.job import (
    JobCreate,
    JobDeleteResponse,
    JobDetail,
    JobDetailResponse,
    JobListResponse,
    JobRead,
    JobResponse,
    JobSearch,
    JobSummary,
    JobUpdate,
)
from app.services.errors import BadRequestError, NotFoundError
from app.services.job_service import JobService
from app.utils.validation import format_validation_errors


router = APIRouter(prefix="/jobs", tags=["jobs"])


@contextmanager
def _service_errors() -> Iterator[None]:
    try:
        yield
    except BadRequestError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.messages) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DatabaseConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except DatabaseQueryError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


_JOB_ID_RE = re.compile(r"[0-9]+")

# Largest value a 64-bit signed id column can hold.
_MAX_JOB_ID = 2**63 - 1


def _resolve_job_id(job_ref: str) -> int:
    ref = (job_ref or "").strip()
    if not _JOB_ID_RE.fullmatch(ref) or int(ref) > _MAX_JOB_ID:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No job: {ref}")
    return int(ref)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_in: JobCreate,
    jobs: JobService = Depends(get_job_service),
    _admin: TokenPayload = Depends(require_admin),
) -> JobResponse:
    data = job_in.model_dump(mode="json")
    with _service_errors():
        job = jobs.create(**data)
    return JobResponse(job=JobRead.model_validate(job))


@router.get("", response_model=JobListResponse)
def list_jobs(request: Request, jobs: JobService = Depends(get_job_service)) -> JobListResponse:
    """List jobs, optionally filtered by title, minSalary and hasEquity."""
    try:
        search = JobSearch.model_validate(dict(request.query_params))
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_validation_errors(exc.errors()),
        ) from exc

    with _service_errors():
        rows = jobs.find_all(**search.model_dump())
    return JobListResponse(jobs=[JobSummary.model_validate(row) for row in rows])


@router.get("/{job_id}", response_model=JobDetailResponse)
def get_job(job_id: str, jobs: JobService = Depends(get_job_service)) -> JobDetailResponse:
    pk = _resolve_job_id(job_id)
    with _service_errors():
        job = jobs.get(pk)
    return JobDetailResponse(job=JobDetail.model_validate(job))


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    job_in: JobUpdate,
    jobs: JobService = Depends(get_job_service),
    _admin: TokenPayload = Depends(require_admin),
) -> JobResponse:
    pk = _resolve_job_id(job_id)
    data = job_in.model_dump(mode="json", exclude_unset=True)
    with _service_errors():
        job = jobs.update(pk, data)
    return JobResponse(job=JobRead.model_validate(job))


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: str,
    jobs: JobService = Depends(get_job_service),
    _admin: TokenPayload = Depends(require_admin),
) -> JobDeleteResponse:
    pk = _resolve_job_id(job_id)
    with _service_errors():
        jobs.remove(pk)
    return JobDeleteResponse(deleted=pk)
