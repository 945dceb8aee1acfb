"""Server-sent-event relay for streamed coach replies."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterator

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from athletic_balance.coach.adapter import ChatProvider, chunk_text
from athletic_balance.coaches.registry import get_coach_by_slug
from athletic_balance.core.config import Settings
from athletic_balance.core.errors import AppError
from athletic_balance.models.coach import Coach as CoachRow
from athletic_balance.schemas.chat import CoachChatRequest
from athletic_balance.services import sessions as session_service

logger = logging.getLogger(__name__)

DONE_EVENT = "data: [DONE]\n\n"
SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}
SSE_MEDIA_TYPE = "text/event-stream; charset=utf-8"


def resolve_coach_prompt(db: Session, coach_id: str) -> str:
    """Prompt for a coach, preferring the stored row over the built-in registry."""
    row = db.get(CoachRow, coach_id)
    if row is not None and row.system_prompt:
        return row.system_prompt
    coach = get_coach_by_slug(coach_id)
    if coach is None:
        raise AppError("Coach not found", status.HTTP_404_NOT_FOUND)
    return coach.system_prompt


def validate_request(payload: CoachChatRequest, provider: ChatProvider) -> None:
    if not payload.messages:
        raise AppError("Messages array is required", status.HTTP_400_BAD_REQUEST)
    if not payload.coach_id:
        raise AppError("Coach ID is required", status.HTTP_400_BAD_REQUEST)
    if not provider.configured:
        raise AppError("AI service temporarily unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)


def plain_messages(payload: CoachChatRequest) -> list[dict[str, Any]]:
    return [
        {"role": message.role or "user", "content": str(message.content or "")}
        for message in payload.messages or []
    ]


def open_stream(
    provider: ChatProvider,
    system_prompt: str,
    messages: list[dict[str, Any]],
    settings: Settings,
) -> Iterator[dict[str, Any]]:
    return provider.stream(
        [{"role": "system", "content": system_prompt}, *messages],
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
        timeout=settings.chat_timeout_seconds,
    )


def relay_events(
    chunks: Iterator[dict[str, Any]],
    payload: CoachChatRequest,
    messages: list[dict[str, Any]],
    *,
    user_id: str | None,
    session_factory: Callable[[], Session],
) -> Iterator[str]:
    """Relay chunks as SSE events, then save the turn once the reply is complete."""
    reply_parts: list[str] = []
    try:
        for chunk in chunks:
            reply_parts.append(chunk_text(chunk))
            yield f"data: {json.dumps(chunk)}\n\n"
    except AppError as exc:
        logger.error("Stream interrupted: %s", exc.message)
        yield f"data: {json.dumps({'error': exc.message})}\n\n"
        yield DONE_EVENT
        return

    reply = "".join(reply_parts)
    if user_id and reply.strip():
        _save_streamed_turn(session_factory, user_id, payload, messages, reply)
    elif not user_id:
        logger.info("Anonymous user, session not saved")
    else:
        logger.info("Empty response, session not saved")
    yield DONE_EVENT


def _save_streamed_turn(
    session_factory: Callable[[], Session],
    user_id: str,
    payload: CoachChatRequest,
    messages: list[dict[str, Any]],
    reply: str,
) -> None:
    db = session_factory()
    try:
        session_service.save_turn(
            db,
            user_id=user_id,
            coach_id=payload.coach_id,
            session_id=payload.session_id,
            messages=messages,
            assistant_message=session_service.build_assistant_message(reply),
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save streamed session")
    finally:
        db.close()
