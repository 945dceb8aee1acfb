from athletic_balance.schemas.chat import ChatMessage, ConversationContext
from athletic_balance.services.context import (
    SUMMARY_MARKER,
    build_system_prompt,
    extract_conversation_context,
    merge_context,
    prepare_messages,
)


def _messages(*texts):
    return [ChatMessage(role="user", content=text) for text in texts]


def test_extracts_sports_and_time_preference():
    ctx = extract_conversation_context(
        _messages("I play basketball and soccer", "I prefer morning workouts")
    )
    assert ctx.key_topics == ["basketball", "soccer"]
    assert ctx.user_preferences == {"timePreference": "morning"}


def test_only_recent_messages_are_scanned():
    history = _messages("tennis is my sport", *["ok"] * 10)
    assert extract_conversation_context(history).key_topics == []


def test_merge_keeps_previous_topics_and_counts():
    previous = ConversationContext(keyTopics=["swimming"], messageCount=12)
    extracted = ConversationContext(keyTopics=["swimming", "track"], userPreferences={"a": 1})
    merged = merge_context(previous, extracted, message_count=4)
    assert merged.key_topics == ["swimming", "track"]
    assert merged.user_preferences == {"a": 1}
    assert merged.message_count == 12


def test_system_prompt_gets_context_section():
    ctx = ConversationContext(
        keyTopics=["volleyball"], userPreferences={"timePreference": "evening"}, messageCount=8
    )
    prompt = build_system_prompt("You are a coach.", ctx)
    assert prompt.startswith("You are a coach.\n\nConversation Context:\n")
    assert "Previous topics discussed: volleyball" in prompt
    assert 'User preferences: {"timePreference": "evening"}' in prompt
    assert "ongoing conversation with 8 messages" in prompt


def test_empty_context_leaves_prompt_alone():
    assert build_system_prompt("Base", ConversationContext()) == "Base"
    assert build_system_prompt("Base", None) == "Base"


def test_prepare_messages_drops_blank_and_defaults_role():
    prepared = prepare_messages([ChatMessage(role=None, content="  hi  "), ChatMessage(content="   ")])
    assert prepared == [{"role": "user", "content": "hi"}]


def test_prepare_messages_windows_long_history():
    history = _messages(*[f"message {i}" for i in range(30)])
    prepared = prepare_messages(history, window=20)
    assert len(prepared) == 20
    assert prepared[0]["content"] == "message 0"
    assert prepared[1]["content"] == "message 1"
    assert prepared[2] == {"role": "system", "content": SUMMARY_MARKER}
    assert prepared[-1]["content"] == "message 29"
    assert prepared[3]["content"] == "message 13"
