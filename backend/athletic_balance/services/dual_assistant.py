from __future__ import annotations

import logging
from datetime import datetime, timezone

from athletic_balance.coach.assistants import AssistantPair, AssistantRunError
from athletic_balance.schemas.pipeline import (
    DualAssistantMetadata,
    DualAssistantResponse,
    ReflectionNotes,
)
from athletic_balance.services.reasoning import reflection_placeholder

logger = logging.getLogger(__name__)

TOOLS_ENABLED = ["file_search", "code_interpreter"]

REFLECTION_INPUT = (
    "Analyze this response for accuracy and integrity:\n\n"
    'Question: "{prompt}"\n'
    'Response: "{response}"\n\n'
    "Provide:\n"
    "1. Integrity Score (0.0-1.0)\n"
    "2. Key strengths\n"
    "3. Areas for improvement\n"
    "4. Overall assessment\n\n"
    "Keep it concise."
)


def run_dual_assistant(prompt: str, pair: AssistantPair, request_id: str) -> DualAssistantResponse:
    """Answer with the execution assistant, then annotate with reflection notes.

    Execution failures propagate; reflection failures become a placeholder note.
    """
    response = pair.execution.run(prompt)

    try:
        notes = pair.reflection.run(REFLECTION_INPUT.format(prompt=prompt, response=response))
    except AssistantRunError as exc:
        logger.warning("[dual-%s] Reflection failed: %s", request_id, exc)
        notes = reflection_placeholder(exc)

    return DualAssistantResponse(
        response=response,
        reflection=ReflectionNotes(notes=notes),
        metadata=DualAssistantMetadata(
            executionAssistant=pair.execution.assistant_id,
            reflectionAssistant=pair.reflection.assistant_id,
            timestamp=datetime.now(timezone.utc),
            toolsEnabled=list(TOOLS_ENABLED),
            apiKeys=pair.api_keys,
            method="direct_api_calls",
            requestId=request_id,
        ),
    )
