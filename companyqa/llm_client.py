"""Client and provider factory for the configured text backend."""
from __future__ import annotations

from companyqa.config import Settings, settings
from companyqa.providers.base import BaseTextProvider
from companyqa.providers.mock import MockProvider
from companyqa.providers.openai_compat import OpenAICompatibleProvider
from companyqa.services import logger as log_service


def get_client(config: Settings | None = None):
    """Build an AsyncOpenAI client pointed at the configured base URL.

    SDK-level retries are disabled; retry policy belongs to the step pipeline.
    """
    from openai import AsyncOpenAI

    config = config or settings
    return AsyncOpenAI(
        api_key=config.provider_api_key,
        base_url=config.provider_base_url.strip() or "https://api.perplexity.ai",
        timeout=config.provider_timeout_seconds,
        max_retries=0,
    )


def get_model(config: Settings | None = None) -> str:
    config = config or settings
    return config.provider_model


def get_provider(config: Settings | None = None) -> BaseTextProvider:
    """Return the real provider when an API key is set, otherwise the mock one."""
    config = config or settings
    if not config.has_provider_key:
        log_service.log_event(
            event_type="provider_selected",
            message="Provider API key not configured - using mock responses",
            provider=MockProvider.name,
        )
        return MockProvider(delay_seconds=config.mock_fragment_delay_seconds)

    log_service.log_event(
        event_type="provider_selected",
        message="Using OpenAI-compatible provider",
        provider=OpenAICompatibleProvider.name,
        model=get_model(config),
    )
    return OpenAICompatibleProvider(
        get_client(config),
        model=get_model(config),
        max_tokens=config.provider_max_tokens,
        temperature=config.provider_temperature,
        system_prompt=config.provider_system_prompt or None,
    )
