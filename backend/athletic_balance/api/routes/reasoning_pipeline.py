import logging
from typing import Callable

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from athletic_balance.api import deps
from athletic_balance.coach.assistants import AssistantPair, AssistantRunError
from athletic_balance.core.config import Settings, get_settings
from athletic_balance.schemas.pipeline import PromptRequest, ReasoningPipelineResponse
from athletic_balance.services.reasoning import (
    PipelineError,
    new_request_id,
    run_reasoning_pipeline,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def failure(error: str, status_code: int, request_id: str, details: str | None = None) -> JSONResponse:
    """Error envelope shared by the assistant-backed routes."""
    body = {"success": False, "error": error, "requestId": request_id}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


@router.post("/reasoning-pipeline", response_model=ReasoningPipelineResponse)
def reasoning_pipeline(
    payload: PromptRequest,
    settings: Settings = Depends(get_settings),
    build_pair: Callable[..., AssistantPair] = Depends(deps.get_assistant_pair_builder),
):
    request_id = new_request_id()
    prompt = (payload.prompt or "").strip()
    if not prompt:
        return failure("Prompt is required", status.HTTP_400_BAD_REQUEST, request_id)
    if not settings.openai_api_key:
        return failure("OpenAI API key not configured", status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)

    try:
        pair = build_pair(
            settings,
            poll_interval=settings.assistant_poll_interval_seconds,
            max_attempts=settings.assistant_max_poll_attempts,
        )
    except AssistantRunError as exc:
        return failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)

    try:
        return run_reasoning_pipeline(prompt, pair, request_id=request_id)
    except PipelineError as exc:
        return failure(
            "Reasoning pipeline failed",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            exc.request_id,
            details=str(exc),
        )
