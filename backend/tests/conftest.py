import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = "sk-test-primary"
os.environ["EXECUTION_ASSISTANT_ID"] = "asst_execution"
os.environ["REFLECTION_ASSISTANT_ID"] = "asst_reflection"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
for name in (
    "OPENAI_API_KEY_SECONDARY",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_SQL_SERVER",
):
    os.environ.pop(name, None)

from types import SimpleNamespace  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from athletic_balance.api import deps  # noqa: E402
from athletic_balance.coach.adapter import ChatCompletion, ChatProvider  # noqa: E402
from athletic_balance.db.base import Base  # noqa: E402
from athletic_balance.db.init_db import initialize_database  # noqa: E402
from athletic_balance.db.session import SessionLocal, engine  # noqa: E402
from athletic_balance.main import create_app  # noqa: E402


class FakeChatProvider(ChatProvider):
    def __init__(self, reply="Keep your eyes up and trust the read.", image_b64="aW1hZ2U="):
        self.reply = reply
        self.image_b64 = image_b64
        self.requests = []
        self.image_requests = []

    @property
    def configured(self) -> bool:
        return True

    def complete(self, messages, *, max_tokens, temperature, timeout):
        self.requests.append(messages)
        return ChatCompletion(content=self.reply, usage={"total_tokens": 42})

    def stream(self, messages, *, max_tokens, temperature, timeout):
        self.requests.append(messages)
        words = self.reply.split(" ")
        parts = [word + " " for word in words[:-1]] + [words[-1]]
        return iter([{"choices": [{"index": 0, "delta": {"content": part}}]} for part in parts])

    def generate_image(self, prompt, size):
        self.image_requests.append((prompt, size))
        return self.image_b64


class FakeRunner:
    """Stands in for an AssistantRunner; replies are consumed in order."""

    def __init__(self, assistant_id, replies):
        self.assistant_id = assistant_id
        self.replies = list(replies)
        self.prompts = []
        self.client = SimpleNamespace(models=SimpleNamespace(list=lambda: []))

    def run(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture(scope="session", autouse=True)
def database():
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture()
def chat_provider():
    return FakeChatProvider()


@pytest.fixture()
def app(chat_provider):
    app = create_app()
    app.dependency_overrides[deps.get_chat_client] = lambda: chat_provider
    app.dependency_overrides[deps.get_streaming_client] = lambda: chat_provider
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def credentials():
    return {"email": f"athlete-{uuid4().hex[:8]}@example.com", "password": "hooptime123"}


@pytest.fixture()
def auth_cookie(client, credentials):
    response = client.post("/api/auth/signup", json={**credentials, "fullName": "Jordan Reyes"})
    assert response.status_code == 201
    return response.cookies.get("auth_token")
