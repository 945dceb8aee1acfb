from types import SimpleNamespace

import openai

from athletic_balance.api import deps
from athletic_balance.coach.assistants import AssistantPair, AssistantRunError
from athletic_balance.core.config import get_settings
from conftest import FakeRunner


def _override(app, pair, settings=None):
    app.dependency_overrides[deps.get_assistant_pair_builder] = lambda: (lambda s, **kw: pair)
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings


def _pair(execution, reflection):
    return AssistantPair(
        execution=FakeRunner("asst_execution", execution),
        reflection=FakeRunner("asst_reflection", reflection),
        reflection_key_label="PRIMARY (fallback)",
    )


def test_response_with_reflection_notes(app, client):
    pair = _pair(["Drink half your body weight in ounces."], ["Integrity Score: 0.8"])
    _override(app, pair)
    response = client.post("/api/dual-assistant", json={"prompt": "How much water?"})
    assert response.status_code == 200
    body = response.json()
    assert body["response"] == "Drink half your body weight in ounces."
    assert body["reflection"] == {"notes": "Integrity Score: 0.8"}
    assert body["metadata"]["toolsEnabled"] == ["file_search", "code_interpreter"]
    assert body["metadata"]["method"] == "direct_api_calls"
    assert 'Question: "How much water?"' in pair.reflection.prompts[0]


def test_reflection_failure_degrades(app, client):
    pair = _pair(["An answer"], [AssistantRunError("reflection assistant failed: down")])
    _override(app, pair)
    body = client.post("/api/dual-assistant", json={"prompt": "Q"}).json()
    assert body["success"] is True
    assert body["reflection"]["notes"] == (
        "Reflection analysis unavailable: reflection assistant failed: down"
    )


def test_execution_failure_is_hard(app, client):
    pair = _pair([AssistantRunError("execution assistant failed: boom")], [])
    _override(app, pair)
    response = client.post("/api/dual-assistant", json={"prompt": "Q"})
    assert response.status_code == 500
    assert response.json()["error"] == "Execution assistant failed"


def test_connection_failure(app, client):
    pair = _pair(["unused"], [])

    def refuse():
        raise openai.APIConnectionError(request=None)

    pair.execution.client = SimpleNamespace(models=SimpleNamespace(list=refuse))
    _override(app, pair)
    response = client.post("/api/dual-assistant", json={"prompt": "Q"})
    assert response.status_code == 500
    assert response.json()["error"] == "OpenAI connection failed"


def test_key_format_is_checked(app, client):
    settings = get_settings().model_copy(update={"openai_api_key": "bad-key"})
    _override(app, _pair([], []), settings)
    response = client.post("/api/dual-assistant", json={"prompt": "Q"})
    assert response.status_code == 500
    assert response.json()["error"] == "Invalid primary API key format"
