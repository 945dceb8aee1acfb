from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from athletic_balance.db.base import Base
from athletic_balance.models.user import new_id


class CoachSession(Base):
    __tablename__ = "coach_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    coach_id = Column(String(100), ForeignKey("coaches.id"), nullable=False)
    title = Column(String(255), nullable=True)
    # [{"role", "content", "timestamp", "imageType"?, "imageB64"?, "imageUrl"?}]
    messages = Column(JSON, nullable=False, default=list)
    conversation_context = Column(JSON, nullable=True)
    message_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user = relationship("User", back_populates="coach_sessions")
