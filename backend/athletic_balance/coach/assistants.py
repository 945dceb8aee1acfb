"""Thread-and-run driver for OpenAI Assistants.

Each call runs a prompt on a fresh thread: create thread, add the user
message, start a run, poll until it completes, then read the newest
assistant message.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

import openai
from openai import OpenAI

from athletic_balance.core.config import Settings
from athletic_balance.core.logging import preview

logger = logging.getLogger(__name__)

PRIMARY_KEY_LABEL = "PRIMARY"
SECONDARY_KEY_LABEL = "SECONDARY"
FALLBACK_KEY_LABEL = "PRIMARY (fallback)"


class AssistantRunError(RuntimeError):
    pass


class AssistantRunner:
    def __init__(
        self,
        client: Any,
        assistant_id: str,
        label: str,
        poll_interval: float = 2.0,
        max_attempts: int = 30,
        sleep: Callable[[float], None] = time.sleep,
        empty_placeholder: bool = False,
    ):
        self.client = client
        self.assistant_id = assistant_id
        self.label = label
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.sleep = sleep
        self.empty_placeholder = empty_placeholder

    def run(self, prompt: str) -> str:
        tag = f"[{self.label.upper()}]"
        logger.info("%s Starting assistant %s: %s", tag, self.assistant_id, preview(prompt))
        try:
            text = self._run(prompt, tag)
        except AssistantRunError as exc:
            logger.error("%s %s", tag, exc)
            raise AssistantRunError(f"{self.label} assistant failed: {exc}") from exc
        except openai.OpenAIError as exc:
            logger.error("%s OpenAI error: %s", tag, exc)
            raise AssistantRunError(f"{self.label} assistant failed: {exc}") from exc

        if not text and self.empty_placeholder:
            return f"[Empty {self.label} response]"
        logger.info("%s Success, response length %d", tag, len(text))
        return text

    def _run(self, prompt: str, tag: str) -> str:
        threads = self.client.beta.threads
        thread = threads.create()
        threads.messages.create(thread_id=thread.id, role="user", content=prompt)
        run = threads.runs.create(thread_id=thread.id, assistant_id=self.assistant_id)

        status = run.status
        for attempt in range(1, self.max_attempts + 1):
            self.sleep(self.poll_interval)
            run = threads.runs.retrieve(run.id, thread_id=thread.id)
            status = run.status
            logger.debug("%s Attempt %d: %s", tag, attempt, status)
            if status == "completed":
                break
            if status == "failed":
                last_error = getattr(run, "last_error", None)
                message = getattr(last_error, "message", None) or "Unknown error"
                raise AssistantRunError(f"Run failed: {message}")
        if status != "completed":
            raise AssistantRunError(
                f"Run did not complete after {self.max_attempts} attempts. Status: {status}"
            )

        messages = threads.messages.list(thread_id=thread.id)
        reply = next((m for m in messages.data if m.role == "assistant"), None)
        if reply is None or not reply.content:
            raise AssistantRunError("No assistant response found")

        parts = [part.text.value for part in reply.content if part.type == "text"]
        return "\n".join(parts).strip()


@dataclass
class AssistantPair:
    execution: AssistantRunner
    reflection: AssistantRunner
    reflection_key_label: str

    @property
    def assistant_ids(self) -> dict[str, str]:
        return {
            "execution": self.execution.assistant_id,
            "reflection": self.reflection.assistant_id,
        }

    @property
    def api_keys(self) -> dict[str, str]:
        return {"execution": PRIMARY_KEY_LABEL, "reflection": self.reflection_key_label}

    def check_connection(self) -> None:
        self.execution.client.models.list()


def build_assistant_pair(
    settings: Settings,
    poll_interval: float,
    max_attempts: int,
    empty_placeholder: bool = False,
) -> AssistantPair:
    """Execution runs on the primary key; reflection prefers the secondary key."""
    if not settings.execution_assistant_id or not settings.reflection_assistant_id:
        raise AssistantRunError("Assistant IDs not configured")

    primary = OpenAI(api_key=settings.openai_api_key)
    if settings.openai_api_key_secondary:
        secondary = OpenAI(api_key=settings.openai_api_key_secondary)
        reflection_label = SECONDARY_KEY_LABEL
    else:
        secondary = primary
        reflection_label = FALLBACK_KEY_LABEL

    return AssistantPair(
        execution=AssistantRunner(
            primary,
            settings.execution_assistant_id,
            "execution",
            poll_interval=poll_interval,
            max_attempts=max_attempts,
            empty_placeholder=empty_placeholder,
        ),
        reflection=AssistantRunner(
            secondary,
            settings.reflection_assistant_id,
            "reflection",
            poll_interval=poll_interval,
            max_attempts=max_attempts,
            empty_placeholder=empty_placeholder,
        ),
        reflection_key_label=reflection_label,
    )
