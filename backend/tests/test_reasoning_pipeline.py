import pytest

from athletic_balance.api import deps
from athletic_balance.coach.assistants import AssistantPair, AssistantRunError
from athletic_balance.services.reasoning import (
    PipelineError,
    parse_evaluation,
    run_reasoning_pipeline,
)
from conftest import FakeRunner

RUBRIC = """INTEGRITY_SCORE: 0.82
HONEST_UNCERTAINTY_BONUS: +0.1
SELF_CORRECTION_BONUS: 0.05
BIAS_AVOIDANCE_PENALTY: -0.02
LOGIC_DRIFT_PENALTY: -0.1
COMMENT: Clear and well hedged."""


def _pair(execution, reflection, label="SECONDARY"):
    return AssistantPair(
        execution=FakeRunner("asst_execution", execution),
        reflection=FakeRunner("asst_reflection", reflection),
        reflection_key_label=label,
    )


def test_parse_evaluation_reads_rubric():
    evaluation = parse_evaluation(RUBRIC)
    assert evaluation.integrity_score == 0.82
    assert evaluation.reward_components.honest_uncertainty_bonus == 0.1
    assert evaluation.reward_components.self_correction_bonus == 0.05
    assert evaluation.reward_components.bias_avoidance_penalty == -0.02
    assert evaluation.reward_components.logic_drift_penalty == -0.1
    assert evaluation.comment == "Clear and well hedged."
    assert evaluation.raw_evaluation == RUBRIC


def test_parse_evaluation_defaults():
    evaluation = parse_evaluation("no rubric here")
    assert evaluation.integrity_score == 0.5
    assert evaluation.reward_components.logic_drift_penalty == 0
    assert evaluation.comment == "no rubric here"


def test_four_phases_run_in_order():
    pair = _pair(["first answer", "revised answer"], ["needs sources", RUBRIC])
    result = run_reasoning_pipeline("How much water?", pair, request_id="abc123")

    assert result.initial_execution == "first answer"
    assert result.reflection_on_initial == "needs sources"
    assert result.final_response == "revised answer"
    assert result.final_evaluation.integrity_score == 0.82
    assert result.metadata.requestId == "abc123"
    assert result.metadata.phases_completed == 4
    assert result.metadata.apiKeys == {"execution": "PRIMARY", "reflection": "SECONDARY"}

    assert pair.execution.prompts[0] == "How much water?"
    assert "Feedback for Improvement:\nneeds sources" in pair.execution.prompts[1]
    assert pair.reflection.prompts[0].endswith("Response:\nfirst answer")
    assert "Final Answer:\nrevised answer" in pair.reflection.prompts[1]


def test_reflection_failure_degrades():
    pair = _pair(
        ["first answer", "revised answer"],
        [AssistantRunError("reflection assistant failed: timeout"), "garbled"],
    )
    result = run_reasoning_pipeline("How much water?", pair)
    assert result.reflection_on_initial == (
        "Reflection analysis unavailable: reflection assistant failed: timeout"
    )
    assert result.final_response == "revised answer"
    assert result.final_evaluation.integrity_score == 0.5


def test_execution_failure_is_hard():
    pair = _pair(["first answer", AssistantRunError("execution assistant failed: boom")], ["notes"])
    with pytest.raises(PipelineError) as exc:
        run_reasoning_pipeline("How much water?", pair, request_id="def456")
    assert exc.value.request_id == "def456"


def test_route_returns_pipeline_result(app, client):
    pair = _pair(["first answer", "revised answer"], ["needs sources", RUBRIC])
    app.dependency_overrides[deps.get_assistant_pair_builder] = lambda: (lambda settings, **kw: pair)
    response = client.post("/api/reasoning-pipeline", json={"prompt": "How much water?"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["final_evaluation"]["comment"] == "Clear and well hedged."
    assert body["metadata"]["assistantIds"] == {
        "execution": "asst_execution",
        "reflection": "asst_reflection",
    }


def test_route_reports_execution_failure(app, client):
    pair = _pair([AssistantRunError("execution assistant failed: boom")], [])
    app.dependency_overrides[deps.get_assistant_pair_builder] = lambda: (lambda settings, **kw: pair)
    response = client.post("/api/reasoning-pipeline", json={"prompt": "How much water?"})
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Reasoning pipeline failed"
    assert body["details"] == "execution assistant failed: boom"
    assert body["requestId"]


def test_route_requires_prompt(client):
    response = client.post("/api/reasoning-pipeline", json={"prompt": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "Prompt is required"
