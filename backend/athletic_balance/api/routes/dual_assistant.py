import logging
from typing import Callable

import openai
from fastapi import APIRouter, Depends, status

from athletic_balance.api import deps
from athletic_balance.api.routes.reasoning_pipeline import failure
from athletic_balance.coach.assistants import AssistantPair, AssistantRunError
from athletic_balance.core.config import Settings, get_settings
from athletic_balance.schemas.pipeline import DualAssistantResponse, PromptRequest
from athletic_balance.services.dual_assistant import run_dual_assistant
from athletic_balance.services.reasoning import new_request_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/dual-assistant", response_model=DualAssistantResponse)
def dual_assistant(
    payload: PromptRequest,
    settings: Settings = Depends(get_settings),
    build_pair: Callable[..., AssistantPair] = Depends(deps.get_assistant_pair_builder),
):
    request_id = new_request_id()
    prompt = (payload.prompt or "").strip()
    if not prompt:
        return failure("Prompt is required", status.HTTP_400_BAD_REQUEST, request_id)

    api_key = settings.openai_api_key
    if not api_key:
        return failure("OpenAI API key not configured", status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)
    if not api_key.startswith("sk-"):
        return failure("Invalid primary API key format", status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)

    try:
        pair = build_pair(
            settings,
            poll_interval=settings.dual_assistant_poll_interval_seconds,
            max_attempts=settings.dual_assistant_max_poll_attempts,
            empty_placeholder=True,
        )
    except AssistantRunError as exc:
        return failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)

    try:
        pair.check_connection()
    except openai.OpenAIError as exc:
        logger.error("[dual-%s] Connection test failed: %s", request_id, exc)
        return failure(
            "OpenAI connection failed",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id,
            details=str(exc),
        )

    try:
        return run_dual_assistant(prompt, pair, request_id)
    except AssistantRunError as exc:
        return failure(
            "Execution assistant failed",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id,
            details=str(exc),
        )
