import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text, UniqueConstraint

from jobportal.db.base import Base


class ApplicationStatus(str, enum.Enum):
    """Lifecycle states of a job application."""

    APPLIED = "APPLIED"
    REVIEWING = "REVIEWING"
    SHORTLISTED = "SHORTLISTED"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"


class JobApplication(Base):
    """A candidate's application to a job, tracked through review."""

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_id", name="uq_application_candidate_job"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    job_id = Column(String(36), index=True, nullable=False)
    candidate_id = Column(String(36), index=True, nullable=False)

    status = Column(String, default=ApplicationStatus.APPLIED.value, index=True)
    cover_letter = Column(Text)
    resume_url = Column(String, nullable=True)

    application_date = Column(DateTime, default=datetime.utcnow, index=True)
    review_date = Column(DateTime, nullable=True)
    review_notes = Column(Text, nullable=True)
    interview_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
