from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from athletic_balance.coach.adapter import ChatProvider
from athletic_balance.coaches.registry import Coach, get_coach_by_slug
from athletic_balance.core.config import Settings
from athletic_balance.core.errors import AppError
from athletic_balance.core.logging import preview
from athletic_balance.models.user import User
from athletic_balance.schemas.chat import ChatImage, ChatRequest, ChatResponse
from athletic_balance.services import sessions as session_service
from athletic_balance.services.context import (
    build_system_prompt,
    extract_conversation_context,
    merge_context,
    prepare_messages,
)
from athletic_balance.visuals.copy_bank import CopyBankManager
from athletic_balance.visuals.prompt_builder import plan_visual

logger = logging.getLogger(__name__)


@dataclass
class ResolvedPrompt:
    system_prompt: str
    coach: Coach | None


def resolve_system_prompt(system_prompt: str | None, coach_slug: str | None) -> ResolvedPrompt:
    coach = None
    final_prompt = system_prompt
    if coach_slug and coach_slug.strip():
        coach = get_coach_by_slug(coach_slug.strip())
        if coach is None:
            raise AppError("Coach not found", status.HTTP_404_NOT_FOUND)
        final_prompt = coach.system_prompt
    if not final_prompt or not final_prompt.strip():
        raise AppError("System prompt is required", status.HTTP_400_BAD_REQUEST)
    return ResolvedPrompt(system_prompt=final_prompt, coach=coach)


def _generate_image(provider: ChatProvider, plan) -> ChatImage | None:
    try:
        b64 = provider.generate_image(plan.prompt, plan.size)
    except AppError as exc:
        logger.error("[visuals] Image generation failed: %s", exc.message)
        return None
    if not b64:
        return None
    return ChatImage(b64=b64, alt=plan.alt, prompt=plan.prompt, type=plan.type.value)


def run_chat_turn(
    payload: ChatRequest,
    *,
    db: Session,
    provider: ChatProvider,
    settings: Settings,
    user: User | None = None,
    copy_bank: CopyBankManager | None = None,
) -> ChatResponse:
    if not payload.messages:
        raise AppError("At least one message is required", status.HTTP_400_BAD_REQUEST)
    if not provider.configured:
        raise AppError("AI service temporarily unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)

    resolved = resolve_system_prompt(payload.system_prompt, payload.coach_slug)

    context = merge_context(
        payload.conversation_context,
        extract_conversation_context(payload.messages),
        message_count=len(payload.messages),
    )
    system_prompt = build_system_prompt(resolved.system_prompt, context)
    history = prepare_messages(payload.messages, window=settings.chat_context_window)

    logger.info(
        "Chat turn coach=%s messages=%d last=%r",
        payload.coach_slug or "-",
        len(history),
        preview(history[-1]["content"] if history else ""),
    )
    completion = provider.complete(
        [{"role": "system", "content": system_prompt}, *history],
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
        timeout=settings.chat_timeout_seconds,
    )
    if not completion.content:
        raise AppError("No response generated by AI service", status.HTTP_500_INTERNAL_SERVER_ERROR)

    image = None
    raw_messages = [message.model_dump() for message in payload.messages]
    plan = plan_visual(payload.coach_slug, raw_messages, completion.content, copy_bank)
    if plan is not None:
        image = _generate_image(provider, plan)

    session_id = payload.session_id
    if user is not None and resolved.coach is not None:
        try:
            session_id = session_service.save_turn(
                db,
                user_id=user.id,
                coach_id=resolved.coach.slug,
                session_id=payload.session_id,
                messages=raw_messages,
                assistant_message=session_service.build_assistant_message(
                    completion.content,
                    image.model_dump(exclude_none=True) if image else None,
                ),
                conversation_context=context.model_dump(by_alias=True, exclude_none=True),
            )
        except SQLAlchemyError:
            db.rollback()
            logger.exception("[chat] Non-fatal session save error")

    return ChatResponse(
        message=completion.content,
        image=image,
        usage=completion.usage,
        session_id=session_id,
    )
