import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text

from jobportal.db.base import Base


class Candidate(Base):
    """Candidate profile attached to a user account."""

    __tablename__ = "candidates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), unique=True, index=True, nullable=False)

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    phone_number = Column(String)
    location = Column(String, nullable=False)
    current_title = Column(String)
    experience_level = Column(String, index=True)  # "ENTRY", "MID", "SENIOR", ...
    years_of_experience = Column(Integer, default=0)

    # Stored as JSON documents
    # skills: ["Python", "SQL"]
    # experience: [{"title": ..., "company": ..., "start_date": "2021-01-01", ...}]
    # education: [{"degree": ..., "institution": ..., "field": ..., "gpa": 3.6}]
    skills = Column(JSON, default=list)
    experience = Column(JSON, default=list)
    education = Column(JSON, default=list)

    resume_url = Column(String)
    profile_summary = Column(Text)
    linked_in_url = Column(String)
    portfolio_url = Column(String)
    expected_salary = Column(Float)
    is_available = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
