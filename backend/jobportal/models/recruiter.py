import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text

from jobportal.db.base import Base


class Recruiter(Base):
    """Recruiter profile attached to a user account."""

    __tablename__ = "recruiters"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), unique=True, index=True, nullable=False)

    company_name = Column(String(100), nullable=False, index=True)
    company_size = Column(String)
    location = Column(String, nullable=False)
    industry = Column(String)
    department = Column(String)
    position = Column(String)
    phone_number = Column(String)
    linked_in_url = Column(String)
    company_website = Column(String)
    company_description = Column(Text)
    is_verified = Column(Boolean, default=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
