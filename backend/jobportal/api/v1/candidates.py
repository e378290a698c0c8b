"""
Candidate profile API endpoints.

Candidates manage their own profile; recruiters search the candidate pool.
"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.orm import Session

from jobportal.api.responses import acknowledged, bad_request, not_found
from jobportal.core.dependencies import require_roles
from jobportal.core.exceptions import ProfileConflictError
from jobportal.db.session import get_db
from jobportal.models import Role
from jobportal.schemas import ApiResponse, CamelModel
from jobportal.services import candidates as candidate_service

router = APIRouter()

candidate_only = require_roles(Role.CANDIDATE)
recruiter_only = require_roles(Role.RECRUITER)
candidate_or_admin = require_roles(Role.CANDIDATE, Role.ADMIN)
any_member = require_roles(Role.CANDIDATE, Role.RECRUITER, Role.ADMIN)


# ============== Pydantic Schemas ==============


class ExperienceEntry(CamelModel):
    """One position in a candidate's work history."""

    title: str
    company: str
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    is_current: bool = False


class EducationEntry(CamelModel):
    """One degree in a candidate's education history."""

    degree: str
    institution: str
    field: Optional[str] = None
    graduation_date: Optional[date] = None
    gpa: Optional[float] = None


class CandidateRequest(CamelModel):
    """Schema for creating or replacing a candidate profile."""

    user_id: str = Field(min_length=1)
    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    phone_number: Optional[str] = None
    location: str = Field(min_length=1)
    current_title: Optional[str] = None
    experience_level: Optional[str] = None
    years_of_experience: int = Field(default=0, ge=0, le=50)
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    resume_url: Optional[str] = None
    profile_summary: Optional[str] = Field(default=None, max_length=1000)
    linked_in_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    expected_salary: Optional[float] = None
    is_available: bool = True


class CandidateResponse(CamelModel):
    """Schema for a candidate profile."""

    id: str
    user_id: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    location: str
    current_title: Optional[str] = None
    experience_level: Optional[str] = None
    years_of_experience: Optional[int] = None
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    resume_url: Optional[str] = None
    profile_summary: Optional[str] = None
    linked_in_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    expected_salary: Optional[float] = None
    is_available: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============== API Endpoints ==============


@router.get("/search", response_model=list[CandidateResponse], dependencies=[Depends(recruiter_only)])
def search_candidates(
    skills: Optional[list[str]] = Query(None),
    min_experience: Optional[int] = Query(None, alias="minExperience", ge=0),
    location: Optional[str] = None,
    experience_level: Optional[str] = Query(None, alias="experienceLevel"),
    db: Session = Depends(get_db),
):
    return candidate_service.search_candidates(db, skills, min_experience, location, experience_level)


@router.get("/skills/{skill}", response_model=list[CandidateResponse], dependencies=[Depends(recruiter_only)])
def get_candidates_by_skill(skill: str, db: Session = Depends(get_db)):
    return candidate_service.get_candidates_by_skill(db, skill)


@router.get(
    "/experience/{level}",
    response_model=list[CandidateResponse],
    dependencies=[Depends(recruiter_only)],
)
def get_candidates_by_experience_level(level: str, db: Session = Depends(get_db)):
    return candidate_service.get_candidates_by_experience_level(db, level)


@router.get("/available", response_model=list[CandidateResponse], dependencies=[Depends(recruiter_only)])
def get_available_candidates(db: Session = Depends(get_db)):
    return candidate_service.get_available_candidates(db)


@router.get("/user/{user_id}", response_model=CandidateResponse, dependencies=[Depends(candidate_only)])
def get_candidate_by_user_id(user_id: str, db: Session = Depends(get_db)):
    candidate = candidate_service.get_candidate_by_user_id(db, user_id)
    if candidate is None:
        return not_found()
    return candidate


@router.get("/{candidate_id}", response_model=CandidateResponse, dependencies=[Depends(any_member)])
def get_candidate(candidate_id: str, db: Session = Depends(get_db)):
    candidate = candidate_service.get_candidate_by_id(db, candidate_id)
    if candidate is None:
        return not_found()
    return candidate


@router.post("", response_model=CandidateResponse, dependencies=[Depends(candidate_only)])
def create_candidate_profile(request: CandidateRequest, db: Session = Depends(get_db)):
    candidate = candidate_service.create_candidate_profile(db, request.model_dump(mode="json"))
    if candidate is None:
        return bad_request(candidate_service.CANDIDATE_EXISTS_MESSAGE)
    return candidate


@router.put("/{candidate_id}", response_model=CandidateResponse, dependencies=[Depends(candidate_only)])
def update_candidate_profile(candidate_id: str, request: CandidateRequest, db: Session = Depends(get_db)):
    try:
        candidate = candidate_service.update_candidate_profile(db, candidate_id, request.model_dump(mode="json"))
    except ProfileConflictError as exc:
        return bad_request(exc.message)

    if candidate is None:
        return not_found()
    return candidate


@router.delete("/{candidate_id}", response_model=ApiResponse, dependencies=[Depends(candidate_or_admin)])
def delete_candidate_profile(candidate_id: str, db: Session = Depends(get_db)):
    if not candidate_service.delete_candidate_profile(db, candidate_id):
        return not_found()
    return acknowledged("Candidate profile deleted successfully")


@router.put("/{candidate_id}/resume", response_model=CandidateResponse, dependencies=[Depends(candidate_only)])
def update_resume(
    candidate_id: str,
    resume_url: str = Query(..., alias="resumeUrl", min_length=1),
    db: Session = Depends(get_db),
):
    candidate = candidate_service.update_resume(db, candidate_id, resume_url)
    if candidate is None:
        return not_found()
    return candidate


@router.put(
    "/{candidate_id}/availability",
    response_model=CandidateResponse,
    dependencies=[Depends(candidate_only)],
)
def update_availability(
    candidate_id: str,
    is_available: bool = Query(..., alias="isAvailable"),
    db: Session = Depends(get_db),
):
    candidate = candidate_service.update_availability(db, candidate_id, is_available)
    if candidate is None:
        return not_found()
    return candidate


@router.get("/{candidate_id}/stats", dependencies=[Depends(candidate_only)])
def get_candidate_stats(candidate_id: str, db: Session = Depends(get_db)):
    """Application counts per status plus profile completeness counts."""
    return candidate_service.get_candidate_stats(db, candidate_id)
