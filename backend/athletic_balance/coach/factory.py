from functools import lru_cache

from athletic_balance.coach.adapter import ChatProvider
from athletic_balance.coach.azure_adapter import AzureOpenAIChatProvider
from athletic_balance.coach.openai_adapter import OpenAIChatProvider
from athletic_balance.core.config import get_settings


@lru_cache
def get_chat_provider() -> ChatProvider:
    settings = get_settings()
    return OpenAIChatProvider(
        api_key=settings.openai_api_key,
        model=settings.chat_model,
        image_model=settings.image_model,
    )


@lru_cache
def get_streaming_provider() -> ChatProvider:
    settings = get_settings()
    if settings.azure_openai_configured:
        return AzureOpenAIChatProvider(
            api_key=settings.azure_openai_api_key,
            endpoint=settings.azure_openai_endpoint,
            deployment=settings.azure_openai_deployment,
            api_version=settings.azure_openai_api_version,
            image_model=settings.image_model,
        )
    return get_chat_provider()
