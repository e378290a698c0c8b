"""
Job application lifecycle.

APPLIED -> REVIEWING -> SHORTLISTED -> ACCEPTED, and REJECTED from any
non-terminal state. Recruiters may set any status by default; the diagram is
enforced only when STRICT_STATUS_TRANSITIONS is enabled.

Lookups that miss return None (or False for withdrawals) and duplicate
applications return None; routes map these to 404 and 400.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.config import settings
from jobportal.core.logger import get_logger
from jobportal.db.pagination import Page, paginate, sort_column
from jobportal.models import ApplicationStatus, JobApplication

logger = get_logger("applications")

ALLOWED_TRANSITIONS: dict[ApplicationStatus, set[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: {ApplicationStatus.REVIEWING, ApplicationStatus.REJECTED},
    ApplicationStatus.REVIEWING: {ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED},
    ApplicationStatus.SHORTLISTED: {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED},
    ApplicationStatus.ACCEPTED: set(),
    ApplicationStatus.REJECTED: set(),
}


class InvalidStatusTransitionError(ValueError):
    """Raised in strict mode when a status change is not on the diagram."""

    def __init__(self, current: ApplicationStatus, new: ApplicationStatus):
        super().__init__(f"Cannot move application from {current.value} to {new.value}")
        self.current = current
        self.new = new


def check_status_transition(
    current: ApplicationStatus,
    new: ApplicationStatus,
    strict: Optional[bool] = None,
) -> None:
    """
    Validate a status change.

    Permissive mode accepts every change. Strict mode only accepts the edges
    in ALLOWED_TRANSITIONS.
    """
    if strict is None:
        strict = settings.STRICT_STATUS_TRANSITIONS
    if strict and new not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current, new)


def apply_to_job(
    db: Session,
    candidate_id: str,
    job_id: str,
    cover_letter: Optional[str] = None,
    resume_url: Optional[str] = None,
) -> Optional[JobApplication]:
    """
    Create an APPLIED application, or return None if the candidate already
    applied to this job.
    """
    existing = (
        db.query(JobApplication)
        .filter(JobApplication.candidate_id == candidate_id, JobApplication.job_id == job_id)
        .first()
    )
    if existing:
        return None

    now = datetime.utcnow()
    application = JobApplication(
        job_id=job_id,
        candidate_id=candidate_id,
        cover_letter=cover_letter,
        resume_url=resume_url,
        status=ApplicationStatus.APPLIED.value,
        application_date=now,
        created_at=now,
        updated_at=now,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (candidate, job) pair first.
        db.rollback()
        return None

    db.refresh(application)
    logger.info(f"Candidate {candidate_id} applied to job {job_id}")
    return application


def get_application_by_id(db: Session, application_id: str) -> Optional[JobApplication]:
    return db.query(JobApplication).filter(JobApplication.id == application_id).first()


def get_applications_by_candidate(
    db: Session,
    candidate_id: str,
    page: int = 0,
    size: int = 10,
    sort_by: str = "applicationDate",
    sort_dir: str = "desc",
) -> Page[JobApplication]:
    query = db.query(JobApplication).filter(JobApplication.candidate_id == candidate_id)
    return paginate(query, page, size, sort_column(JobApplication, sort_by, "application_date"), sort_dir)


def get_applications_by_job(
    db: Session,
    job_id: str,
    page: int = 0,
    size: int = 10,
    sort_by: str = "applicationDate",
    sort_dir: str = "desc",
) -> Page[JobApplication]:
    query = db.query(JobApplication).filter(JobApplication.job_id == job_id)
    return paginate(query, page, size, sort_column(JobApplication, sort_by, "application_date"), sort_dir)


def get_applications_by_status(db: Session, status: ApplicationStatus) -> list[JobApplication]:
    return db.query(JobApplication).filter(JobApplication.status == status.value).all()


def update_application_status(
    db: Session,
    application_id: str,
    status: ApplicationStatus,
    review_notes: Optional[str] = None,
) -> Optional[JobApplication]:
    """
    Set a new status and stamp the review date.

    Review notes are only overwritten when provided.

    Raises:
        InvalidStatusTransitionError: in strict mode, for an illegal change
    """
    application = get_application_by_id(db, application_id)
    if application is None:
        return None

    check_status_transition(ApplicationStatus(application.status), status)

    now = datetime.utcnow()
    previous = application.status
    application.status = status.value
    application.review_date = now
    if review_notes is not None:
        application.review_notes = review_notes
    application.updated_at = now

    db.commit()
    db.refresh(application)

    logger.info(f"Application {application_id} status {previous} -> {status.value}")
    return application


def add_review_notes(db: Session, application_id: str, review_notes: str) -> Optional[JobApplication]:
    application = get_application_by_id(db, application_id)
    if application is None:
        return None

    application.review_notes = review_notes
    application.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(application)
    return application


def add_interview_notes(db: Session, application_id: str, interview_notes: str) -> Optional[JobApplication]:
    application = get_application_by_id(db, application_id)
    if application is None:
        return None

    application.interview_notes = interview_notes
    application.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(application)
    return application


def withdraw_application(db: Session, application_id: str) -> bool:
    """Delete an application. Returns False if it does not exist."""
    application = get_application_by_id(db, application_id)
    if application is None:
        return False

    db.delete(application)
    db.commit()

    logger.info(f"Application {application_id} withdrawn")
    return True


def get_application_stats(db: Session, job_id: str) -> dict[str, int]:
    """Count a job's applications, in total and per status."""
    rows = (
        db.query(JobApplication.status, func.count(JobApplication.id))
        .filter(JobApplication.job_id == job_id)
        .group_by(JobApplication.status)
        .all()
    )
    counts = {status: count for status, count in rows}

    stats = {"total": sum(counts.values())}
    for status in (
        ApplicationStatus.APPLIED,
        ApplicationStatus.REVIEWING,
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACCEPTED,
    ):
        stats[status.value.lower()] = counts.get(status.value, 0)
    return stats


def get_recent_applications(db: Session, days: int) -> list[JobApplication]:
    since = datetime.utcnow() - timedelta(days=days)
    return (
        db.query(JobApplication)
        .filter(JobApplication.application_date > since)
        .order_by(JobApplication.application_date.desc())
        .all()
    )


def count_applications_by_candidate(db: Session, candidate_id: str) -> int:
    return db.query(JobApplication).filter(JobApplication.candidate_id == candidate_id).count()


def count_applications_by_candidate_and_status(db: Session, candidate_id: str) -> dict[str, int]:
    rows = (
        db.query(JobApplication.status, func.count(JobApplication.id))
        .filter(JobApplication.candidate_id == candidate_id)
        .group_by(JobApplication.status)
        .all()
    )
    return {status: count for status, count in rows}
