from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import relationship

from athletic_balance.db.base import Base

CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"


def new_id() -> str:
    return str(uuid4())


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("idx_users_provider", "provider", "provider_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    provider = Column(String(50), nullable=False, default="email")
    provider_id = Column(String(255), nullable=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade=CASCADE_ALL_DELETE_ORPHAN,
    )
    auth_sessions = relationship(
        "UserSession", back_populates="user", cascade=CASCADE_ALL_DELETE_ORPHAN
    )
    coach_sessions = relationship(
        "CoachSession", back_populates="user", cascade=CASCADE_ALL_DELETE_ORPHAN
    )
