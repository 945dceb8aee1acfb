"""Four-phase execute / reflect / revise / score pipeline."""
from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timezone

from athletic_balance.coach.assistants import AssistantPair, AssistantRunError
from athletic_balance.core.logging import preview
from athletic_balance.schemas.pipeline import (
    FinalEvaluation,
    PipelineMetadata,
    ReasoningPipelineResponse,
    RewardComponents,
)

logger = logging.getLogger(__name__)

INTEGRITY_PATTERN = re.compile(r"INTEGRITY_SCORE:\s*([\d.]+)")
COMPONENT_PATTERNS = {
    "honest_uncertainty_bonus": re.compile(r"HONEST_UNCERTAINTY_BONUS:\s*([-+]?[\d.]+)"),
    "self_correction_bonus": re.compile(r"SELF_CORRECTION_BONUS:\s*([-+]?[\d.]+)"),
    "bias_avoidance_penalty": re.compile(r"BIAS_AVOIDANCE_PENALTY:\s*([-+]?[\d.]+)"),
    "logic_drift_penalty": re.compile(r"LOGIC_DRIFT_PENALTY:\s*([-+]?[\d.]+)"),
}
COMMENT_PATTERN = re.compile(r"COMMENT:\s*(.+)")

REFLECTION_PROMPT = (
    "Evaluate the following initial response for logical integrity, clarity, and bias.\n"
    "Suggest improvements if needed.\n\n"
    "Response:\n{initial}"
)

REVISION_PROMPT = (
    "Revise your previous answer based on this feedback:\n\n"
    "Original Question: {prompt}\n\n"
    "Your Previous Answer:\n{initial}\n\n"
    "Feedback for Improvement:\n{reflection}\n\n"
    "Please provide a revised and improved response."
)

EVALUATION_PROMPT = (
    "Evaluate this final response and assign:\n\n"
    "- Final Integrity Score (0.0–1.0)\n"
    "- Reward breakdown (uncertainty, bias, logic drift, correction)\n\n"
    "Original Question: {prompt}\n\n"
    "Final Answer:\n{final}\n\n"
    "Please provide your evaluation in this format:\n"
    "INTEGRITY_SCORE: [0.0-1.0]\n"
    "HONEST_UNCERTAINTY_BONUS: [+/- value]\n"
    "SELF_CORRECTION_BONUS: [+/- value]\n"
    "BIAS_AVOIDANCE_PENALTY: [+/- value]\n"
    "LOGIC_DRIFT_PENALTY: [+/- value]\n"
    "COMMENT: [your assessment]"
)


class PipelineError(RuntimeError):
    def __init__(self, message: str, request_id: str):
        super().__init__(message)
        self.request_id = request_id


def new_request_id() -> str:
    return uuid.uuid4().hex[:6]


def reflection_placeholder(exc: Exception) -> str:
    return f"Reflection analysis unavailable: {exc}"


def _parse_number(pattern: re.Pattern, text: str, default: float) -> float:
    match = pattern.search(text)
    if not match:
        return default
    try:
        return float(match.group(1))
    except ValueError:
        return default


def parse_evaluation(text: str) -> FinalEvaluation:
    comment = COMMENT_PATTERN.search(text)
    return FinalEvaluation(
        integrity_score=_parse_number(INTEGRITY_PATTERN, text, 0.5),
        reward_components=RewardComponents(
            **{name: _parse_number(pattern, text, 0) for name, pattern in COMPONENT_PATTERNS.items()}
        ),
        comment=comment.group(1).strip() if comment else text,
        raw_evaluation=text,
    )


def _reflect(pair: AssistantPair, prompt: str, tag: str) -> str:
    try:
        return pair.reflection.run(prompt)
    except AssistantRunError as exc:
        logger.warning("%s Reflection degraded: %s", tag, exc)
        return reflection_placeholder(exc)


def run_reasoning_pipeline(
    prompt: str, pair: AssistantPair, request_id: str | None = None
) -> ReasoningPipelineResponse:
    request_id = request_id or new_request_id()
    tag = f"[pipeline-{request_id}]"
    logger.info("%s Start: %r", tag, preview(prompt))

    try:
        logger.info("%s Phase 1: initial execution", tag)
        initial = pair.execution.run(prompt)

        logger.info("%s Phase 2: reflection on initial", tag)
        reflection = _reflect(pair, REFLECTION_PROMPT.format(initial=initial), tag)

        logger.info("%s Phase 3: final execution", tag)
        final = pair.execution.run(
            REVISION_PROMPT.format(prompt=prompt, initial=initial, reflection=reflection)
        )
    except AssistantRunError as exc:
        logger.error("%s Pipeline failed: %s", tag, exc)
        raise PipelineError(str(exc), request_id) from exc

    logger.info("%s Phase 4: final evaluation", tag)
    evaluation_text = _reflect(pair, EVALUATION_PROMPT.format(prompt=prompt, final=final), tag)

    logger.info("%s Complete", tag)
    return ReasoningPipelineResponse(
        initial_execution=initial,
        reflection_on_initial=reflection,
        final_response=final,
        final_evaluation=parse_evaluation(evaluation_text),
        metadata=PipelineMetadata(
            requestId=request_id,
            timestamp=datetime.now(timezone.utc),
            assistantIds=pair.assistant_ids,
            apiKeys=pair.api_keys,
            phases_completed=4,
        ),
    )
