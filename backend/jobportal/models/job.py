import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, String, Text

from jobportal.db.base import Base


class Job(Base):
    """Job posting published by a recruiter."""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    company_name = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, index=True)
    employment_type = Column(String, nullable=False)  # "FULL_TIME", "PART_TIME", "CONTRACT", ...
    salary = Column(Float, nullable=True)
    recruiter_id = Column(String(36), index=True, nullable=True)

    requirements = Column(JSON, default=list)
    responsibilities = Column(JSON, default=list)

    is_active = Column(Boolean, default=True, index=True)
    posted_date = Column(DateTime, default=datetime.utcnow)
    deadline = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
