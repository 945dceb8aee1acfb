from datetime import datetime
from typing import Any

from pydantic import BaseModel


class CoachSessionSummary(BaseModel):
    id: str
    coach_id: str
    title: str | None = None
    message_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CoachSessionPublic(CoachSessionSummary):
    messages: list[dict[str, Any]]
    conversation_context: dict[str, Any] | None = None
