"""
Recruiter profile API endpoints.

Recruiters manage their company profile; admins verify recruiters.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.orm import Session

from jobportal.api.responses import acknowledged, bad_request, not_found
from jobportal.api.v1.jobs import JobResponse
from jobportal.core.dependencies import require_roles
from jobportal.core.exceptions import ProfileConflictError
from jobportal.db.session import get_db
from jobportal.models import Role
from jobportal.schemas import ApiResponse, CamelModel
from jobportal.services import recruiters as recruiter_service

router = APIRouter()

recruiter_only = require_roles(Role.RECRUITER)
admin_only = require_roles(Role.ADMIN)
recruiter_or_admin = require_roles(Role.RECRUITER, Role.ADMIN)


# ============== Pydantic Schemas ==============


class RecruiterRequest(CamelModel):
    """Schema for creating or replacing a recruiter profile."""

    user_id: str = Field(min_length=1)
    company_name: str = Field(min_length=2, max_length=100)
    company_size: Optional[str] = None
    location: str = Field(min_length=1)
    industry: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    phone_number: Optional[str] = None
    linked_in_url: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = Field(default=None, max_length=1000)


class RecruiterResponse(CamelModel):
    """Schema for a recruiter profile."""

    id: str
    user_id: str
    company_name: str
    company_size: Optional[str] = None
    location: str
    industry: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    phone_number: Optional[str] = None
    linked_in_url: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RecruiterStatsResponse(CamelModel):
    """Schema for a recruiter's job counts."""

    total_jobs: int
    active_jobs: int
    recent_jobs: list[JobResponse]


# ============== API Endpoints ==============


@router.get("/search", response_model=list[RecruiterResponse], dependencies=[Depends(recruiter_or_admin)])
def search_recruiters(
    company_name: Optional[str] = Query(None, alias="companyName"),
    location: Optional[str] = None,
    industry: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return recruiter_service.search_recruiters(db, company_name, location, industry)


@router.get("/verified", response_model=list[RecruiterResponse], dependencies=[Depends(recruiter_or_admin)])
def get_verified_recruiters(db: Session = Depends(get_db)):
    return recruiter_service.get_verified_recruiters(db)


@router.get(
    "/company/{company_name}",
    response_model=list[RecruiterResponse],
    dependencies=[Depends(recruiter_or_admin)],
)
def get_recruiters_by_company(company_name: str, db: Session = Depends(get_db)):
    return recruiter_service.get_recruiters_by_company(db, company_name)


@router.get("/user/{user_id}", response_model=RecruiterResponse, dependencies=[Depends(recruiter_only)])
def get_recruiter_by_user_id(user_id: str, db: Session = Depends(get_db)):
    recruiter = recruiter_service.get_recruiter_by_user_id(db, user_id)
    if recruiter is None:
        return not_found()
    return recruiter


@router.get("/{recruiter_id}", response_model=RecruiterResponse, dependencies=[Depends(recruiter_or_admin)])
def get_recruiter(recruiter_id: str, db: Session = Depends(get_db)):
    recruiter = recruiter_service.get_recruiter_by_id(db, recruiter_id)
    if recruiter is None:
        return not_found()
    return recruiter


@router.post("", response_model=RecruiterResponse, dependencies=[Depends(recruiter_only)])
def create_recruiter_profile(request: RecruiterRequest, db: Session = Depends(get_db)):
    recruiter = recruiter_service.create_recruiter_profile(db, request.model_dump())
    if recruiter is None:
        return bad_request(recruiter_service.RECRUITER_EXISTS_MESSAGE)
    return recruiter


@router.put("/{recruiter_id}", response_model=RecruiterResponse, dependencies=[Depends(recruiter_only)])
def update_recruiter_profile(recruiter_id: str, request: RecruiterRequest, db: Session = Depends(get_db)):
    try:
        recruiter = recruiter_service.update_recruiter_profile(db, recruiter_id, request.model_dump())
    except ProfileConflictError as exc:
        return bad_request(exc.message)

    if recruiter is None:
        return not_found()
    return recruiter


@router.delete("/{recruiter_id}", response_model=ApiResponse, dependencies=[Depends(recruiter_or_admin)])
def delete_recruiter_profile(recruiter_id: str, db: Session = Depends(get_db)):
    if not recruiter_service.delete_recruiter_profile(db, recruiter_id):
        return not_found()
    return acknowledged("Recruiter profile deleted successfully")


@router.put("/{recruiter_id}/verify", response_model=RecruiterResponse, dependencies=[Depends(admin_only)])
def verify_recruiter(recruiter_id: str, db: Session = Depends(get_db)):
    recruiter = recruiter_service.verify_recruiter(db, recruiter_id)
    if recruiter is None:
        return not_found()
    return recruiter


@router.get(
    "/{recruiter_id}/stats",
    response_model=RecruiterStatsResponse,
    dependencies=[Depends(recruiter_only)],
)
def get_recruiter_stats(recruiter_id: str, db: Session = Depends(get_db)):
    stats = recruiter_service.get_recruiter_stats(db, recruiter_id)
    return RecruiterStatsResponse(
        total_jobs=stats["totalJobs"],
        active_jobs=stats["activeJobs"],
        recent_jobs=[JobResponse.model_validate(job) for job in stats["recentJobs"]],
    )
