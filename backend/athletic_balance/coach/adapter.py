from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass
class ChatCompletion:
    content: str
    usage: dict[str, Any] | None = None


class ChatProvider(ABC):
    """Interface for the chat and image models behind the coaches."""

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Whether credentials are present for this provider."""

    @abstractmethod
    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> ChatCompletion:
        """Return a single chat completion for the given messages."""

    @abstractmethod
    def stream(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> Iterator[dict[str, Any]]:
        """Open the upstream stream and return its chunks as plain dicts.

        The request is sent before this returns, so connection and status
        errors surface to the caller rather than to the first iteration.
        """

    @abstractmethod
    def generate_image(self, prompt: str, size: str) -> str | None:
        """Return a base64 PNG for the prompt, or None when generation fails."""


def chunk_text(chunk: dict[str, Any]) -> str:
    """Text delta carried by one streamed completion chunk."""
    choices = chunk.get("choices") or []
    if not choices:
        return ""
    delta = choices[0].get("delta") or {}
    return delta.get("content") or ""
