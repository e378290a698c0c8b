from datetime import datetime
from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobportal.core.logger import get_logger
from jobportal.db.pagination import Page, paginate, sort_column
from jobportal.models import Job

logger = get_logger("jobs")

JOB_FIELDS = (
    "title",
    "description",
    "company_name",
    "location",
    "category",
    "employment_type",
    "salary",
    "recruiter_id",
    "requirements",
    "responsibilities",
    "deadline",
)


def _apply_fields(job: Job, data: dict[str, Any]) -> None:
    for name in JOB_FIELDS:
        if name in data:
            setattr(job, name, data[name])
    job.requirements = job.requirements or []
    job.responsibilities = job.responsibilities or []


def get_all_jobs(
    db: Session,
    page: int = 0,
    size: int = 10,
    sort_by: str = "postedDate",
    sort_dir: str = "desc",
) -> Page[Job]:
    return paginate(db.query(Job), page, size, sort_column(Job, sort_by, "posted_date"), sort_dir)


def get_job_by_id(db: Session, job_id: str) -> Optional[Job]:
    return db.query(Job).filter(Job.id == job_id).first()


def create_job(db: Session, data: dict[str, Any]) -> Job:
    now = datetime.utcnow()
    job = Job(is_active=True, posted_date=now, created_at=now, updated_at=now)
    _apply_fields(job, data)

    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Created job {job.id} ({job.title}) for recruiter {job.recruiter_id}")
    return job


def update_job(db: Session, job_id: str, data: dict[str, Any]) -> Optional[Job]:
    job = get_job_by_id(db, job_id)
    if job is None:
        return None

    _apply_fields(job, data)
    job.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, job_id: str) -> bool:
    job = get_job_by_id(db, job_id)
    if job is None:
        return False

    db.delete(job)
    db.commit()
    return True


def search_jobs(db: Session, keyword: str, page: int = 0, size: int = 10) -> Page[Job]:
    """Case-insensitive keyword match on title, description and company."""
    pattern = f"%{keyword.strip()}%"
    query = db.query(Job).filter(
        or_(
            Job.title.ilike(pattern),
            Job.description.ilike(pattern),
            Job.company_name.ilike(pattern),
        )
    )
    return paginate(query, page, size, Job.posted_date, "desc")


def get_jobs_by_category(db: Session, category: str) -> list[Job]:
    return db.query(Job).filter(Job.category == category).all()


def get_jobs_by_location(db: Session, location: str) -> list[Job]:
    return db.query(Job).filter(Job.location == location).all()


def get_jobs_by_recruiter(db: Session, recruiter_id: str) -> list[Job]:
    return (
        db.query(Job)
        .filter(Job.recruiter_id == recruiter_id)
        .order_by(Job.posted_date.desc())
        .all()
    )


def count_active_jobs_by_recruiter(db: Session, recruiter_id: str) -> int:
    return db.query(Job).filter(Job.recruiter_id == recruiter_id, Job.is_active.is_(True)).count()


def toggle_job_active(db: Session, job_id: str) -> Optional[Job]:
    job = get_job_by_id(db, job_id)
    if job is None:
        return None

    job.is_active = not job.is_active
    job.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(job)
    return job
