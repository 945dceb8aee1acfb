from __future__ import annotations

from openai import AzureOpenAI

from athletic_balance.coach.openai_adapter import OpenAIChatProvider


class AzureOpenAIChatProvider(OpenAIChatProvider):
    """Chat completions served from an Azure OpenAI deployment."""

    def __init__(
        self,
        api_key: str | None,
        endpoint: str,
        deployment: str,
        api_version: str,
        image_model: str = "dall-e-3",
    ):
        self.endpoint = endpoint
        self.api_version = api_version
        super().__init__(api_key=api_key, model=deployment, image_model=image_model)

    def _build_client(self):
        return AzureOpenAI(
            api_key=self.api_key,
            azure_endpoint=self.endpoint,
            api_version=self.api_version,
        )
