from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from athletic_balance.db.base import Base


class Coach(Base):
    __tablename__ = "coaches"

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    emoji = Column(String(32), nullable=True)
    tagline = Column(String(500), nullable=True)
    system_prompt = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
