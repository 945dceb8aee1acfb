from typing import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from athletic_balance.api import deps
from athletic_balance.coach.adapter import ChatProvider
from athletic_balance.core.config import Settings, get_settings
from athletic_balance.db.session import get_db
from athletic_balance.models.user import User
from athletic_balance.schemas.chat import CoachChatRequest
from athletic_balance.services import coach_chat as coach_chat_service

router = APIRouter()


@router.post("/coach-chat")
def coach_chat(
    payload: CoachChatRequest,
    db: Session = Depends(get_db),  # noqa: B008
    user: User | None = Depends(deps.get_optional_user),
    provider: ChatProvider = Depends(deps.get_streaming_client),
    session_factory: Callable[[], Session] = Depends(deps.get_session_factory),
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    coach_chat_service.validate_request(payload, provider)
    system_prompt = coach_chat_service.resolve_coach_prompt(db, payload.coach_id)
    messages = coach_chat_service.plain_messages(payload)
    chunks = coach_chat_service.open_stream(provider, system_prompt, messages, settings)
    events = coach_chat_service.relay_events(
        chunks,
        payload,
        messages,
        user_id=user.id if user else None,
        session_factory=session_factory,
    )
    return StreamingResponse(
        events,
        media_type=coach_chat_service.SSE_MEDIA_TYPE,
        headers=coach_chat_service.SSE_HEADERS,
    )
