"""
Job application API endpoints.

Candidates apply and withdraw; recruiters review, annotate and move
applications through their statuses.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.orm import Session

from jobportal.api.responses import acknowledged, bad_request, not_found
from jobportal.core.dependencies import require_roles
from jobportal.db.pagination import Page
from jobportal.db.session import get_db
from jobportal.models import ApplicationStatus, Role
from jobportal.schemas import ApiResponse, CamelModel
from jobportal.services import applications as application_service
from jobportal.services.applications import InvalidStatusTransitionError

router = APIRouter()

candidate_only = require_roles(Role.CANDIDATE)
recruiter_only = require_roles(Role.RECRUITER)
candidate_or_recruiter = require_roles(Role.CANDIDATE, Role.RECRUITER)

SORT_DIR_PATTERN = "^(asc|desc|ASC|DESC)$"


# ============== Pydantic Schemas ==============


class ApplicationRequest(CamelModel):
    """Schema for applying to a job."""

    job_id: str = Field(min_length=1)
    candidate_id: str = Field(min_length=1)
    cover_letter: Optional[str] = Field(default=None, max_length=5000)
    resume_url: Optional[str] = None


class ApplicationResponse(CamelModel):
    """Schema for a job application."""

    id: str
    job_id: str
    candidate_id: str
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    application_date: Optional[datetime] = None
    review_date: Optional[datetime] = None
    review_notes: Optional[str] = None
    interview_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationPageResponse(CamelModel):
    """Schema for a page of applications."""

    applications: list[ApplicationResponse]
    current_page: int
    total_items: int
    total_pages: int


class ApplicationStatsResponse(CamelModel):
    """Schema for per-job application counts."""

    total: int
    applied: int
    reviewing: int
    shortlisted: int
    rejected: int
    accepted: int


def _to_page_response(page: Page) -> ApplicationPageResponse:
    return ApplicationPageResponse(
        applications=[ApplicationResponse.model_validate(item) for item in page.items],
        current_page=page.page,
        total_items=page.total_items,
        total_pages=page.total_pages,
    )


# ============== API Endpoints ==============


@router.post("", response_model=ApplicationResponse, dependencies=[Depends(candidate_only)])
def apply_to_job(request: ApplicationRequest, db: Session = Depends(get_db)):
    """Apply to a job. A second application to the same job is rejected."""
    application = application_service.apply_to_job(
        db,
        candidate_id=request.candidate_id,
        job_id=request.job_id,
        cover_letter=request.cover_letter,
        resume_url=request.resume_url,
    )
    if application is None:
        return bad_request("You have already applied to this job")
    return application


@router.get(
    "/candidate/{candidate_id}",
    response_model=ApplicationPageResponse,
    dependencies=[Depends(candidate_only)],
)
def get_applications_by_candidate(
    candidate_id: str,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort_by: str = Query("applicationDate", alias="sortBy"),
    sort_dir: str = Query("desc", alias="sortDir", pattern=SORT_DIR_PATTERN),
    db: Session = Depends(get_db),
):
    page_result = application_service.get_applications_by_candidate(
        db, candidate_id, page, size, sort_by, sort_dir
    )
    return _to_page_response(page_result)


@router.get(
    "/job/{job_id}",
    response_model=ApplicationPageResponse,
    dependencies=[Depends(recruiter_only)],
)
def get_applications_by_job(
    job_id: str,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort_by: str = Query("applicationDate", alias="sortBy"),
    sort_dir: str = Query("desc", alias="sortDir", pattern=SORT_DIR_PATTERN),
    db: Session = Depends(get_db),
):
    page_result = application_service.get_applications_by_job(db, job_id, page, size, sort_by, sort_dir)
    return _to_page_response(page_result)


@router.get(
    "/stats/job/{job_id}",
    response_model=ApplicationStatsResponse,
    dependencies=[Depends(recruiter_only)],
)
def get_application_stats(job_id: str, db: Session = Depends(get_db)):
    return application_service.get_application_stats(db, job_id)


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(candidate_or_recruiter)],
)
def get_application(application_id: str, db: Session = Depends(get_db)):
    application = application_service.get_application_by_id(db, application_id)
    if application is None:
        return not_found()
    return application


@router.put(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    dependencies=[Depends(recruiter_only)],
)
def update_application_status(
    application_id: str,
    status: ApplicationStatus = Query(...),
    review_notes: Optional[str] = Query(None, alias="reviewNotes"),
    db: Session = Depends(get_db),
):
    """Move an application to a new status and stamp the review date."""
    try:
        application = application_service.update_application_status(
            db, application_id, status, review_notes
        )
    except InvalidStatusTransitionError as exc:
        return bad_request(str(exc))

    if application is None:
        return not_found()
    return application


@router.put(
    "/{application_id}/review",
    response_model=ApplicationResponse,
    dependencies=[Depends(recruiter_only)],
)
def add_review_notes(
    application_id: str,
    review_notes: str = Query(..., alias="reviewNotes"),
    db: Session = Depends(get_db),
):
    application = application_service.add_review_notes(db, application_id, review_notes)
    if application is None:
        return not_found()
    return application


@router.put(
    "/{application_id}/interview",
    response_model=ApplicationResponse,
    dependencies=[Depends(recruiter_only)],
)
def add_interview_notes(
    application_id: str,
    interview_notes: str = Query(..., alias="interviewNotes"),
    db: Session = Depends(get_db),
):
    application = application_service.add_interview_notes(db, application_id, interview_notes)
    if application is None:
        return not_found()
    return application


@router.delete(
    "/{application_id}",
    response_model=ApiResponse,
    dependencies=[Depends(candidate_only)],
)
def withdraw_application(application_id: str, db: Session = Depends(get_db)):
    if not application_service.withdraw_application(db, application_id):
        return not_found()
    return acknowledged("Application withdrawn successfully")
