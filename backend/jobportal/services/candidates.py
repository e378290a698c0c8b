from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.exceptions import ProfileConflictError
from jobportal.core.logger import get_logger
from jobportal.models import ApplicationStatus, Candidate
from jobportal.services.applications import (
    count_applications_by_candidate,
    count_applications_by_candidate_and_status,
)

logger = get_logger("candidates")

CANDIDATE_EXISTS_MESSAGE = "Candidate profile already exists for this user"

CANDIDATE_FIELDS = (
    "user_id",
    "first_name",
    "last_name",
    "phone_number",
    "location",
    "current_title",
    "experience_level",
    "years_of_experience",
    "skills",
    "experience",
    "education",
    "resume_url",
    "profile_summary",
    "linked_in_url",
    "portfolio_url",
    "expected_salary",
    "is_available",
)


def _apply_fields(candidate: Candidate, data: dict[str, Any]) -> None:
    for name in CANDIDATE_FIELDS:
        if name in data:
            setattr(candidate, name, data[name])


def _has_skill(candidate: Candidate, skills: list[str]) -> bool:
    owned = {skill.lower() for skill in candidate.skills or []}
    return any(skill.lower() in owned for skill in skills)


def get_candidate_by_id(db: Session, candidate_id: str) -> Optional[Candidate]:
    return db.query(Candidate).filter(Candidate.id == candidate_id).first()


def get_candidate_by_user_id(db: Session, user_id: str) -> Optional[Candidate]:
    return db.query(Candidate).filter(Candidate.user_id == user_id).first()


def create_candidate_profile(db: Session, data: dict[str, Any]) -> Optional[Candidate]:
    """Create a profile, or return None if the user already has one."""
    if get_candidate_by_user_id(db, data["user_id"]) is not None:
        return None

    now = datetime.utcnow()
    candidate = Candidate(created_at=now, updated_at=now)
    _apply_fields(candidate, data)

    db.add(candidate)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return None

    db.refresh(candidate)
    logger.info(f"Created candidate profile {candidate.id} for user {candidate.user_id}")
    return candidate


def update_candidate_profile(db: Session, candidate_id: str, data: dict[str, Any]) -> Optional[Candidate]:
    """
    Replace a profile's fields. Returns None if the profile does not exist.

    Raises:
        ProfileConflictError: if ``user_id`` moves onto a user that already
            has a candidate profile
    """
    candidate = get_candidate_by_id(db, candidate_id)
    if candidate is None:
        return None

    user_id = data.get("user_id")
    if user_id and user_id != candidate.user_id and get_candidate_by_user_id(db, user_id) is not None:
        raise ProfileConflictError(CANDIDATE_EXISTS_MESSAGE)

    _apply_fields(candidate, data)
    candidate.updated_at = datetime.utcnow()
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ProfileConflictError(CANDIDATE_EXISTS_MESSAGE)

    db.refresh(candidate)
    return candidate


def delete_candidate_profile(db: Session, candidate_id: str) -> bool:
    candidate = get_candidate_by_id(db, candidate_id)
    if candidate is None:
        return False

    db.delete(candidate)
    db.commit()
    return True


def search_candidates(
    db: Session,
    skills: Optional[list[str]] = None,
    min_experience: Optional[int] = None,
    location: Optional[str] = None,
    experience_level: Optional[str] = None,
) -> list[Candidate]:
    """
    Filter candidates.

    All three of skills, min_experience and location together narrow by all
    of them; otherwise the first filter given wins, in the order skills,
    experience level, location, minimum experience.
    """
    query = db.query(Candidate)

    if skills and min_experience is not None and location:
        candidates = (
            query.filter(
                Candidate.years_of_experience >= min_experience,
                Candidate.location.ilike(f"%{location}%"),
            ).all()
        )
        return [candidate for candidate in candidates if _has_skill(candidate, skills)]
    if skills:
        return [candidate for candidate in query.all() if _has_skill(candidate, skills)]
    if experience_level:
        return query.filter(Candidate.experience_level == experience_level).all()
    if location:
        return query.filter(Candidate.location.ilike(f"%{location}%")).all()
    if min_experience is not None:
        return query.filter(Candidate.years_of_experience >= min_experience).all()
    return query.all()


def get_candidates_by_skill(db: Session, skill: str) -> list[Candidate]:
    return search_candidates(db, skills=[skill])


def get_candidates_by_experience_level(db: Session, experience_level: str) -> list[Candidate]:
    return db.query(Candidate).filter(Candidate.experience_level == experience_level).all()


def update_resume(db: Session, candidate_id: str, resume_url: str) -> Optional[Candidate]:
    return update_candidate_profile(db, candidate_id, {"resume_url": resume_url})


def update_availability(db: Session, candidate_id: str, is_available: bool) -> Optional[Candidate]:
    return update_candidate_profile(db, candidate_id, {"is_available": is_available})


def get_available_candidates(db: Session) -> list[Candidate]:
    return db.query(Candidate).filter(Candidate.is_available.is_(True)).all()


def get_candidate_stats(db: Session, candidate_id: str) -> dict[str, int]:
    by_status = count_applications_by_candidate_and_status(db, candidate_id)

    stats = {
        "totalApplications": count_applications_by_candidate(db, candidate_id),
        "appliedApplications": by_status.get(ApplicationStatus.APPLIED.value, 0),
        "reviewingApplications": by_status.get(ApplicationStatus.REVIEWING.value, 0),
        "shortlistedApplications": by_status.get(ApplicationStatus.SHORTLISTED.value, 0),
        "acceptedApplications": by_status.get(ApplicationStatus.ACCEPTED.value, 0),
    }

    candidate = get_candidate_by_id(db, candidate_id)
    if candidate is not None:
        stats["skillsCount"] = len(candidate.skills or [])
        stats["experienceCount"] = len(candidate.experience or [])
        stats["educationCount"] = len(candidate.education or [])

    return stats
