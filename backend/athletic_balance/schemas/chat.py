from typing import Any

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: str | None = "user"
    content: Any = ""

    class Config:
        extra = "allow"


class ConversationContext(BaseModel):
    session_id: str | None = Field(default=None, alias="sessionId")
    key_topics: list[str] = Field(default_factory=list, alias="keyTopics")
    user_preferences: dict[str, Any] = Field(default_factory=dict, alias="userPreferences")
    message_count: int = Field(default=0, alias="messageCount")
    conversation_age: int | None = Field(default=None, alias="conversationAge")

    class Config:
        populate_by_name = True
        extra = "allow"


class ChatRequest(BaseModel):
    messages: list[ChatMessage]
    system_prompt: str | None = Field(default=None, alias="systemPrompt")
    coach_slug: str | None = Field(default=None, alias="coachSlug")
    session_id: str | None = Field(default=None, alias="sessionId")
    conversation_context: ConversationContext | None = Field(
        default=None, alias="conversationContext"
    )

    class Config:
        populate_by_name = True


class ChatImage(BaseModel):
    url: str | None = None
    b64: str | None = None
    alt: str
    prompt: str
    type: str


class ChatResponse(BaseModel):
    message: str
    image: ChatImage | None = None
    usage: dict[str, Any] | None = None
    session_id: str | None = Field(default=None, alias="sessionId")

    class Config:
        populate_by_name = True


class CoachChatRequest(BaseModel):
    messages: list[ChatMessage] | None = None
    coach_id: str | None = Field(default=None, alias="coachId")
    session_id: str | None = Field(default=None, alias="sessionId")

    class Config:
        populate_by_name = True
