import httpx
import openai
import pytest
from sqlalchemy.exc import SQLAlchemyError

from athletic_balance.api import deps
from athletic_balance.coach.openai_adapter import translate_openai_error
from athletic_balance.core.errors import classify_upstream_status
from athletic_balance.services import sessions as session_service


def test_diagram_request_returns_image(client, chat_provider):
    response = client.post(
        "/api/chat",
        json={
            "messages": [{"role": "user", "content": "show me a diagram of a pick and roll"}],
            "coachSlug": "coach-skills",
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == chat_provider.reply
    assert body["image"] is not None
    assert isinstance(body["image"]["prompt"], str)
    assert body["image"]["b64"] == chat_provider.image_b64
    assert body["image"]["url"] is None
    assert body["usage"] == {"total_tokens": 42}
    assert chat_provider.image_requests


def test_coach_prompt_replaces_system_prompt(client, chat_provider):
    client.post(
        "/api/chat",
        json={
            "messages": [{"role": "user", "content": "How do I stay calm?"}],
            "systemPrompt": "CUSTOM-PROMPT-MARKER",
            "coachSlug": "coach-calm",
        },
    )
    system = chat_provider.requests[-1][0]
    assert system["role"] == "system"
    assert "CUSTOM-PROMPT-MARKER" not in system["content"]


def test_no_visual_keywords_means_no_image(client, chat_provider):
    chat_provider.reply = "Eight to ten hours of sleep."
    response = client.post(
        "/api/chat",
        json={
            "messages": [{"role": "user", "content": "How many hours should I sleep?"}],
            "systemPrompt": "You are a coach.",
        },
    )
    assert response.status_code == 200
    assert response.json()["image"] is None
    assert chat_provider.image_requests == []


def test_validation_errors(client):
    assert client.post("/api/chat", json={"messages": [], "systemPrompt": "x"}).status_code == 400
    assert client.post("/api/chat", json={}).status_code == 400

    missing_prompt = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert missing_prompt.status_code == 400
    assert missing_prompt.json() == {"error": "System prompt is required"}

    unknown = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "hi"}], "coachSlug": "coach-nobody"},
    )
    assert unknown.status_code == 404


def test_unconfigured_provider_is_unavailable(app, client, chat_provider):
    class Offline(type(chat_provider)):
        @property
        def configured(self) -> bool:
            return False

    app.dependency_overrides[deps.get_chat_client] = lambda: Offline()
    response = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "hi"}], "systemPrompt": "x"},
    )
    assert response.status_code == 503
    assert response.json() == {"error": "AI service temporarily unavailable"}


def test_authenticated_turns_are_saved(client, auth_cookie):
    first = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "I play basketball"}], "coachSlug": "coach-skills"},
    )
    session_id = first.json()["sessionId"]
    assert session_id

    second = client.post(
        "/api/chat",
        json={
            "messages": [
                {"role": "user", "content": "I play basketball"},
                {"role": "assistant", "content": first.json()["message"]},
                {"role": "user", "content": "What should I work on?"},
            ],
            "coachSlug": "coach-skills",
            "sessionId": session_id,
        },
    )
    assert second.json()["sessionId"] == session_id

    saved = client.get(f"/api/sessions/{session_id}")
    assert saved.status_code == 200
    body = saved.json()
    assert body["message_count"] == 4
    assert body["conversation_context"]["keyTopics"] == ["basketball"]

    listing = client.get("/api/sessions")
    assert [s["id"] for s in listing.json()] == [session_id]


def test_sessions_require_auth(client):
    assert client.get("/api/sessions").status_code == 401


def test_blank_coach_slug_falls_back_to_system_prompt(client, chat_provider):
    for slug in ("", "   "):
        response = client.post(
            "/api/chat",
            json={
                "messages": [{"role": "user", "content": "hi"}],
                "systemPrompt": "BLANK-SLUG-PROMPT",
                "coachSlug": slug,
            },
        )
        assert response.status_code == 200
        assert "BLANK-SLUG-PROMPT" in chat_provider.requests[-1][0]["content"]


@pytest.mark.parametrize(
    "upstream_status, expected_status, expected_error",
    [
        (401, 503, "AI service authentication failed"),
        (429, 429, "AI service rate limit exceeded, please try again later"),
        (502, 503, "AI service temporarily unavailable"),
        (400, 500, "Failed to generate response"),
    ],
)
def test_upstream_failures_map_to_client_errors(
    app, client, chat_provider, upstream_status, expected_status, expected_error
):
    class Failing(type(chat_provider)):
        def complete(self, messages, *, max_tokens, temperature, timeout):
            raise classify_upstream_status(upstream_status)

    app.dependency_overrides[deps.get_chat_client] = lambda: Failing()
    response = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "hi"}], "systemPrompt": "x"},
    )
    assert response.status_code == expected_status
    assert response.json() == {"error": expected_error}


def test_openai_errors_are_translated():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")

    timeout = translate_openai_error(openai.APITimeoutError(request=request))
    assert (timeout.status_code, timeout.message) == (408, "Request timeout, please try again")

    unauthorized = openai.AuthenticationError(
        "bad key", response=httpx.Response(401, request=request), body=None
    )
    assert translate_openai_error(unauthorized).message == "AI service authentication failed"

    limited = openai.RateLimitError("slow down", response=httpx.Response(429, request=request), body=None)
    assert translate_openai_error(limited).status_code == 429

    offline = translate_openai_error(openai.APIConnectionError(request=request))
    assert offline.status_code == 503


@pytest.mark.parametrize("failure", ["empty", "error"])
def test_image_failure_still_returns_reply(app, client, chat_provider, failure):
    class NoImage(type(chat_provider)):
        def generate_image(self, prompt, size):
            self.image_requests.append((prompt, size))
            if failure == "error":
                raise classify_upstream_status(500)
            return None

    provider = NoImage()
    app.dependency_overrides[deps.get_chat_client] = lambda: provider
    response = client.post(
        "/api/chat",
        json={
            "messages": [{"role": "user", "content": "show me a diagram of a pick and roll"}],
            "coachSlug": "coach-skills",
        },
    )
    assert response.status_code == 200
    assert response.json()["message"] == provider.reply
    assert response.json()["image"] is None
    assert provider.image_requests


def test_session_save_failure_is_not_fatal(client, chat_provider, auth_cookie, monkeypatch):
    def broken_save(*args, **kwargs):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(session_service, "save_turn", broken_save)
    response = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "I play soccer"}], "coachSlug": "coach-skills"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == chat_provider.reply
    assert response.json()["sessionId"] is None
