from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from athletic_balance.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    sport = Column(String(100), nullable=True)
    school = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user = relationship("User", back_populates="profile")
