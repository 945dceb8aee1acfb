import json

from athletic_balance.api import deps
from athletic_balance.core.errors import classify_upstream_status
from athletic_balance.db.session import SessionLocal
from athletic_balance.services import sessions as session_service


def _events(response):
    return [line[len("data: "):] for line in response.text.split("\n\n") if line.startswith("data: ")]


def test_stream_relays_chunks_and_finishes(client, chat_provider):
    response = client.post(
        "/api/coach-chat",
        json={"messages": [{"role": "user", "content": "Pregame tips?"}], "coachId": "coach-clutch"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["x-accel-buffering"] == "no"

    events = _events(response)
    assert events[-1] == "[DONE]"
    text = "".join(json.loads(event)["choices"][0]["delta"]["content"] for event in events[:-1])
    assert text == chat_provider.reply
    assert chat_provider.requests[-1][0]["role"] == "system"


def test_stream_saves_session_for_signed_in_user(client, auth_cookie):
    client.post(
        "/api/coach-chat",
        json={"messages": [{"role": "user", "content": "Pregame tips?"}], "coachId": "coach-clutch"},
    )
    me = client.get("/api/auth/user").json()["user"]
    db = SessionLocal()
    try:
        sessions = session_service.list_sessions(db, me["id"])
    finally:
        db.close()
    assert len(sessions) == 1
    assert sessions[0].coach_id == "coach-clutch"
    assert sessions[0].messages[-1]["role"] == "assistant"


def test_stream_validation(client):
    assert client.post("/api/coach-chat", json={"coachId": "coach-clutch"}).status_code == 400
    assert client.post(
        "/api/coach-chat", json={"messages": [{"role": "user", "content": "hi"}]}
    ).status_code == 400
    missing = client.post(
        "/api/coach-chat",
        json={"messages": [{"role": "user", "content": "hi"}], "coachId": "coach-nobody"},
    )
    assert missing.status_code == 404


def test_stream_failure_midway_emits_error_then_done(app, client, chat_provider, auth_cookie):
    class Interrupted(type(chat_provider)):
        def stream(self, messages, *, max_tokens, temperature, timeout):
            self.requests.append(messages)

            def chunks():
                yield {"choices": [{"index": 0, "delta": {"content": "Breathe "}}]}
                raise classify_upstream_status(429)

            return chunks()

    app.dependency_overrides[deps.get_streaming_client] = lambda: Interrupted()
    response = client.post(
        "/api/coach-chat",
        json={"messages": [{"role": "user", "content": "Pregame tips?"}], "coachId": "coach-clutch"},
    )
    assert response.status_code == 200
    events = _events(response)
    assert json.loads(events[0])["choices"][0]["delta"]["content"] == "Breathe "
    assert json.loads(events[1]) == {"error": "AI service rate limit exceeded, please try again later"}
    assert events[-1] == "[DONE]"

    me = client.get("/api/auth/user").json()["user"]
    db = SessionLocal()
    try:
        assert session_service.list_sessions(db, me["id"]) == []
    finally:
        db.close()
