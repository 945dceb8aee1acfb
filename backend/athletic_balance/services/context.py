from __future__ import annotations

import json
from typing import Any, Iterable

from athletic_balance.schemas.chat import ChatMessage, ConversationContext

TRACKED_SPORTS = ("basketball", "football", "soccer", "tennis", "volleyball", "track", "swimming")
CONTEXT_SCAN_WINDOW = 10
ONGOING_CONVERSATION_THRESHOLD = 5
SUMMARY_MARKER = "[Previous conversation context summarized above]"


def extract_conversation_context(messages: Iterable[ChatMessage]) -> ConversationContext:
    """Topics and stated preferences from the most recent messages."""
    topics: list[str] = []
    preferences: dict[str, Any] = {}
    for message in list(messages)[-CONTEXT_SCAN_WINDOW:]:
        content = str(message.content or "").lower()
        for sport in TRACKED_SPORTS:
            if sport in content and sport not in topics:
                topics.append(sport)
        if "prefer" in content or "like" in content:
            if "morning" in content:
                preferences["timePreference"] = "morning"
            if "evening" in content:
                preferences["timePreference"] = "evening"
    return ConversationContext(key_topics=topics, user_preferences=preferences)


def merge_context(
    previous: ConversationContext | None,
    extracted: ConversationContext,
    message_count: int,
) -> ConversationContext:
    previous = previous or ConversationContext()
    topics = list(previous.key_topics)
    for topic in extracted.key_topics:
        if topic not in topics:
            topics.append(topic)
    merged = previous.model_copy(
        update={
            "key_topics": topics,
            "user_preferences": {**previous.user_preferences, **extracted.user_preferences},
            "message_count": max(previous.message_count, message_count),
        }
    )
    return merged


def build_system_prompt(base_prompt: str, context: ConversationContext | None) -> str:
    if context is None:
        return base_prompt
    lines: list[str] = []
    if context.key_topics:
        lines.append("Previous topics discussed: " + ", ".join(context.key_topics))
    if context.user_preferences:
        lines.append("User preferences: " + json.dumps(context.user_preferences))
    if context.message_count > ONGOING_CONVERSATION_THRESHOLD:
        lines.append(f"This is an ongoing conversation with {context.message_count} messages")
    if not lines:
        return base_prompt
    return (
        base_prompt
        + "\n\nConversation Context:\n"
        + "\n".join(lines)
        + "\n\nUse this context to provide more personalized and relevant responses "
        "while maintaining conversation continuity."
    )


def prepare_messages(messages: Iterable[ChatMessage], window: int = 20) -> list[dict[str, str]]:
    """Normalize roles, drop blank turns and fit the history into ``window`` messages.

    Longer histories keep the opening two messages, a summary marker and
    the most recent turns.
    """
    prepared = [
        {"role": message.role or "user", "content": str(message.content or "").strip()}
        for message in messages
    ]
    prepared = [message for message in prepared if message["content"]]
    if len(prepared) <= window:
        return prepared
    recent = prepared[-(window - 3):]
    return [*prepared[:2], {"role": "system", "content": SUMMARY_MARKER}, *recent]
