from __future__ import annotations

import logging
from typing import Any, Iterator

import openai
from openai import OpenAI

from athletic_balance.coach.adapter import ChatCompletion, ChatProvider
from athletic_balance.core.errors import (
    AppError,
    classify_upstream_status,
    upstream_timeout_error,
)

logger = logging.getLogger(__name__)


def translate_openai_error(exc: Exception) -> AppError:
    if isinstance(exc, openai.APITimeoutError):
        return upstream_timeout_error()
    if isinstance(exc, openai.APIStatusError):
        logger.error("OpenAI error %s: %s", exc.status_code, exc.message)
        return classify_upstream_status(exc.status_code)
    if isinstance(exc, openai.APIConnectionError):
        logger.error("OpenAI connection error: %s", exc)
        return classify_upstream_status(503)
    logger.error("OpenAI request failed: %s", exc)
    return classify_upstream_status(None)


class OpenAIChatProvider(ChatProvider):
    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        image_model: str = "dall-e-3",
    ):
        self.api_key = api_key
        self.model = model
        self.image_model = image_model
        self.client = self._build_client() if api_key else None

    def _build_client(self):
        return OpenAI(api_key=self.api_key)

    @property
    def configured(self) -> bool:
        return self.client is not None

    def _require_client(self):
        if self.client is None:
            raise AppError("AI service temporarily unavailable", 503)
        return self.client

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> ChatCompletion:
        client = self._require_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                timeout=timeout,
            )
        except openai.OpenAIError as exc:
            raise translate_openai_error(exc) from exc

        content = ""
        if response.choices and response.choices[0].message.content:
            content = response.choices[0].message.content.strip()
        usage = response.usage.model_dump() if response.usage else None
        return ChatCompletion(content=content, usage=usage)

    def stream(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> Iterator[dict[str, Any]]:
        client = self._require_client()
        try:
            chunks = client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                timeout=timeout,
                stream=True,
            )
        except openai.OpenAIError as exc:
            raise translate_openai_error(exc) from exc
        return self._relay(chunks)

    @staticmethod
    def _relay(chunks) -> Iterator[dict[str, Any]]:
        try:
            for chunk in chunks:
                yield chunk.model_dump(exclude_none=True)
        except openai.OpenAIError as exc:
            raise translate_openai_error(exc) from exc

    def generate_image(self, prompt: str, size: str) -> str | None:
        if self.client is None:
            return None
        try:
            response = self.client.images.generate(
                model=self.image_model,
                prompt=prompt,
                n=1,
                size=size,
                quality="standard",
                style="natural",
                response_format="b64_json",
            )
        except openai.OpenAIError as exc:
            logger.error("[visuals] Image generation failed: %s", exc)
            return None
        if not response.data:
            return None
        return response.data[0].b64_json
