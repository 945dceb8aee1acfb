from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy.orm import Session

from athletic_balance.models.coach_session import CoachSession

logger = logging.getLogger(__name__)

TITLE_LENGTH = 50
DEFAULT_TITLE = "New Session"


def session_title(messages: Sequence[dict[str, Any]]) -> str:
    first = str(messages[0].get("content") or "") if messages else ""
    if not first:
        return DEFAULT_TITLE
    return first[:TITLE_LENGTH] + "..."


def build_assistant_message(content: str, image: dict[str, Any] | None = None) -> dict[str, Any]:
    message: dict[str, Any] = {
        "role": "assistant",
        "content": content,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if image:
        message["imageType"] = image.get("type")
        if image.get("url"):
            message["imageUrl"] = image["url"]
        if image.get("b64"):
            message["imageB64"] = image["b64"]
    return message


def get_session(db: Session, user_id: str, session_id: str) -> CoachSession | None:
    return (
        db.query(CoachSession)
        .filter(CoachSession.id == session_id, CoachSession.user_id == user_id)
        .first()
    )


def list_sessions(db: Session, user_id: str) -> list[CoachSession]:
    return (
        db.query(CoachSession)
        .filter(CoachSession.user_id == user_id)
        .order_by(CoachSession.updated_at.desc(), CoachSession.created_at.desc())
        .all()
    )


def save_turn(
    db: Session,
    *,
    user_id: str,
    coach_id: str,
    session_id: str | None,
    messages: Sequence[dict[str, Any]],
    assistant_message: dict[str, Any],
    conversation_context: dict[str, Any] | None = None,
) -> str:
    """Persist one coach turn and return the session id.

    Stored messages are never rewritten: only the incoming messages beyond
    what is already stored are appended, followed by the assistant reply.
    """
    session = get_session(db, user_id, session_id) if session_id else None
    incoming = [dict(message) for message in messages]

    if session is None:
        if session_id:
            logger.info("Session %s not found for user %s, starting a new one", session_id, user_id)
        stored: list[dict[str, Any]] = []
        session = CoachSession(
            user_id=user_id,
            coach_id=coach_id,
            title=session_title(incoming),
        )
        db.add(session)
    else:
        stored = list(session.messages or [])

    new_messages = incoming[len(stored):]
    if not new_messages and incoming:
        new_messages = [incoming[-1]]
    updated = [*stored, *new_messages, assistant_message]

    session.messages = updated
    session.message_count = len(updated)
    session.conversation_context = conversation_context or {}
    session.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(session)
    return session.id
