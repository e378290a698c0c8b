import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String

from jobportal.db.base import Base
from jobportal.models.role import Role


class User(Base):
    """User account used for authentication and authorization."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String(50), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    roles = Column(JSON, nullable=False, default=list)  # ["CANDIDATE", "RECRUITER", ...]

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def role_set(self) -> frozenset[Role]:
        known = {role.value for role in Role}
        return frozenset(Role(name) for name in (self.roles or []) if name in known)

    @property
    def authorities(self) -> list[str]:
        return sorted(role.authority for role in self.role_set)
