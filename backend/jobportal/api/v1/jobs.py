"""
Job API endpoints.

Listing, search and lookups are public; writes are for recruiters.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.orm import Session

from jobportal.api.responses import acknowledged, not_found
from jobportal.core.dependencies import require_roles
from jobportal.db.pagination import Page
from jobportal.db.session import get_db
from jobportal.models import Role
from jobportal.schemas import ApiResponse, CamelModel
from jobportal.services import jobs as job_service

router = APIRouter()

recruiter_only = require_roles(Role.RECRUITER)

SORT_DIR_PATTERN = "^(asc|desc|ASC|DESC)$"


# ============== Pydantic Schemas ==============


class JobRequest(CamelModel):
    """Schema for creating or replacing a job posting."""

    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=2000)
    company_name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    category: str = Field(min_length=1)
    employment_type: str = Field(min_length=1)  # "FULL_TIME", "PART_TIME", "CONTRACT", ...
    salary: Optional[float] = None
    recruiter_id: Optional[str] = None
    requirements: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    deadline: Optional[datetime] = None


class JobResponse(CamelModel):
    """Schema for a job posting."""

    id: str
    title: str
    description: str
    company_name: str
    location: str
    category: str
    employment_type: str
    salary: Optional[float] = None
    recruiter_id: Optional[str] = None
    requirements: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    is_active: bool
    posted_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobPageResponse(CamelModel):
    """Schema for a page of job postings."""

    jobs: list[JobResponse]
    current_page: int
    total_items: int
    total_pages: int


def _to_page_response(page: Page) -> JobPageResponse:
    return JobPageResponse(
        jobs=[JobResponse.model_validate(job) for job in page.items],
        current_page=page.page,
        total_items=page.total_items,
        total_pages=page.total_pages,
    )


# ============== API Endpoints ==============


@router.get("", response_model=JobPageResponse)
def get_all_jobs(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort_by: str = Query("postedDate", alias="sortBy"),
    sort_dir: str = Query("desc", alias="sortDir", pattern=SORT_DIR_PATTERN),
    db: Session = Depends(get_db),
):
    """List jobs, newest first by default."""
    return _to_page_response(job_service.get_all_jobs(db, page, size, sort_by, sort_dir))


@router.get("/search", response_model=JobPageResponse)
def search_jobs(
    keyword: str = Query(..., min_length=1),
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Search jobs by keyword in title, description or company name."""
    return _to_page_response(job_service.search_jobs(db, keyword, page, size))


@router.get("/category/{category}", response_model=list[JobResponse])
def get_jobs_by_category(category: str, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_category(db, category)


@router.get("/location/{location}", response_model=list[JobResponse])
def get_jobs_by_location(location: str, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_location(db, location)


@router.get(
    "/recruiter/{recruiter_id}",
    response_model=list[JobResponse],
    dependencies=[Depends(recruiter_only)],
)
def get_jobs_by_recruiter(recruiter_id: str, db: Session = Depends(get_db)):
    return job_service.get_jobs_by_recruiter(db, recruiter_id)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = job_service.get_job_by_id(db, job_id)
    if job is None:
        return not_found()
    return job


@router.post("", response_model=JobResponse, dependencies=[Depends(recruiter_only)])
def create_job(request: JobRequest, db: Session = Depends(get_db)):
    """Publish a new, active job posting."""
    return job_service.create_job(db, request.model_dump())


@router.put("/{job_id}", response_model=JobResponse, dependencies=[Depends(recruiter_only)])
def update_job(job_id: str, request: JobRequest, db: Session = Depends(get_db)):
    job = job_service.update_job(db, job_id, request.model_dump())
    if job is None:
        return not_found()
    return job


@router.delete("/{job_id}", response_model=ApiResponse, dependencies=[Depends(recruiter_only)])
def delete_job(job_id: str, db: Session = Depends(get_db)):
    if not job_service.delete_job(db, job_id):
        return not_found()
    return acknowledged("Job deleted successfully")


@router.put("/{job_id}/toggleActive", response_model=JobResponse, dependencies=[Depends(recruiter_only)])
def toggle_job_active(job_id: str, db: Session = Depends(get_db)):
    job = job_service.toggle_job_active(db, job_id)
    if job is None:
        return not_found()
    return job
