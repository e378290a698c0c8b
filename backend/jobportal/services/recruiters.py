from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.exceptions import ProfileConflictError
from jobportal.core.logger import get_logger
from jobportal.models import Recruiter
from jobportal.services.jobs import count_active_jobs_by_recruiter, get_jobs_by_recruiter

logger = get_logger("recruiters")

RECRUITER_EXISTS_MESSAGE = "Recruiter profile already exists for this user"

RECRUITER_FIELDS = (
    "user_id",
    "company_name",
    "company_size",
    "location",
    "industry",
    "department",
    "position",
    "phone_number",
    "linked_in_url",
    "company_website",
    "company_description",
)

RECENT_JOBS_LIMIT = 5


def _apply_fields(recruiter: Recruiter, data: dict[str, Any]) -> None:
    for name in RECRUITER_FIELDS:
        if name in data:
            setattr(recruiter, name, data[name])


def get_recruiter_by_id(db: Session, recruiter_id: str) -> Optional[Recruiter]:
    return db.query(Recruiter).filter(Recruiter.id == recruiter_id).first()


def get_recruiter_by_user_id(db: Session, user_id: str) -> Optional[Recruiter]:
    return db.query(Recruiter).filter(Recruiter.user_id == user_id).first()


def create_recruiter_profile(db: Session, data: dict[str, Any]) -> Optional[Recruiter]:
    """Create a profile, or return None if the user already has one."""
    if get_recruiter_by_user_id(db, data["user_id"]) is not None:
        return None

    now = datetime.utcnow()
    recruiter = Recruiter(is_verified=False, created_at=now, updated_at=now)
    _apply_fields(recruiter, data)

    db.add(recruiter)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return None

    db.refresh(recruiter)
    logger.info(f"Created recruiter profile {recruiter.id} for user {recruiter.user_id}")
    return recruiter


def update_recruiter_profile(db: Session, recruiter_id: str, data: dict[str, Any]) -> Optional[Recruiter]:
    """
    Replace a profile's fields. Returns None if the profile does not exist.

    Raises:
        ProfileConflictError: if ``user_id`` moves onto a user that already
            has a recruiter profile
    """
    recruiter = get_recruiter_by_id(db, recruiter_id)
    if recruiter is None:
        return None

    user_id = data.get("user_id")
    if user_id and user_id != recruiter.user_id and get_recruiter_by_user_id(db, user_id) is not None:
        raise ProfileConflictError(RECRUITER_EXISTS_MESSAGE)

    _apply_fields(recruiter, data)
    recruiter.updated_at = datetime.utcnow()
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ProfileConflictError(RECRUITER_EXISTS_MESSAGE)

    db.refresh(recruiter)
    return recruiter


def delete_recruiter_profile(db: Session, recruiter_id: str) -> bool:
    recruiter = get_recruiter_by_id(db, recruiter_id)
    if recruiter is None:
        return False

    db.delete(recruiter)
    db.commit()
    return True


def get_recruiters_by_company(db: Session, company_name: str) -> list[Recruiter]:
    return db.query(Recruiter).filter(Recruiter.company_name == company_name).all()


def search_recruiters(
    db: Session,
    company_name: Optional[str] = None,
    location: Optional[str] = None,
    industry: Optional[str] = None,
) -> list[Recruiter]:
    """Company name wins over location, which wins over industry."""
    query = db.query(Recruiter)
    if company_name:
        return query.filter(Recruiter.company_name.ilike(f"%{company_name}%")).all()
    if location:
        return query.filter(Recruiter.location.ilike(f"%{location}%")).all()
    if industry:
        return query.filter(Recruiter.industry.ilike(f"%{industry}%")).all()
    return query.all()


def verify_recruiter(db: Session, recruiter_id: str) -> Optional[Recruiter]:
    recruiter = get_recruiter_by_id(db, recruiter_id)
    if recruiter is None:
        return None

    recruiter.is_verified = True
    recruiter.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(recruiter)

    logger.info(f"Recruiter {recruiter_id} verified")
    return recruiter


def get_verified_recruiters(db: Session) -> list[Recruiter]:
    return db.query(Recruiter).filter(Recruiter.is_verified.is_(True)).all()


def get_recruiter_stats(db: Session, recruiter_id: str) -> dict[str, Any]:
    jobs = get_jobs_by_recruiter(db, recruiter_id)
    return {
        "totalJobs": len(jobs),
        "activeJobs": count_active_jobs_by_recruiter(db, recruiter_id),
        "recentJobs": jobs[:RECENT_JOBS_LIMIT],
    }
