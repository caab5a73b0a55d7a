"""User accounts referenced by every entity (assignee, author, approver...)."""
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum as SQLEnum, Integer, String

from sahaya_api.database import Base
from sahaya_api.models.enums import UserRole


class User(Base):
    """
    A staff member or citizen account.

    Invariants:
    - username and email are stored lower-cased and are unique
    - password_hash is written by the service layer and never serialized
    - accounts are deactivated, not deleted
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)

    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.L3_CITIZEN, index=True)
    department = Column(String, nullable=True)
    designation = Column(String, nullable=True)
    district = Column(String, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    preferences = Column(JSON, nullable=True)

    last_login = Column(DateTime, nullable=True)
    login_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
