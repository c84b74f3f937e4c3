"""Text provider for OpenAI-compatible chat completion APIs (Perplexity, OpenRouter)."""
from __future__ import annotations

import time
from typing import Any, AsyncIterator

import httpx
import openai

from companyqa.providers.base import BaseTextProvider, ProviderError
from companyqa.services import logger as log_service
from companyqa.services.prompt_store import get_prompt, render_prompt


def to_provider_error(exc: Exception) -> ProviderError:
    """Map an SDK or transport exception onto ProviderError."""
    if isinstance(exc, openai.APITimeoutError):
        return ProviderError(f"Provider request timed out: {exc}")
    if isinstance(exc, openai.APIStatusError):
        return ProviderError(
            f"Provider returned status {exc.status_code}: {exc.message}",
            status_code=exc.status_code,
        )
    if isinstance(exc, openai.APIConnectionError):
        return ProviderError(f"Provider connection failed: {exc}")
    if isinstance(exc, httpx.HTTPError):
        return ProviderError(f"Provider transport failed mid-stream: {exc}")
    return ProviderError(f"Provider request failed: {exc}")


def _delta_text(chunk: Any) -> str | None:
    choices = getattr(chunk, "choices", None) or []
    if not choices:
        return None
    delta = getattr(choices[0], "delta", None)
    if not delta:
        return None
    return getattr(delta, "content", None)


class OpenAICompatibleProvider(BaseTextProvider):
    """Streams chat completions from an `openai.AsyncOpenAI` client.

    `answer` is inherited from BaseTextProvider and drains the stream, so both
    calls share one request path and one error mapping.
    """

    name = "openai_compatible"

    def __init__(
        self,
        client: Any,
        *,
        model: str,
        max_tokens: int = 2000,
        temperature: float = 0.7,
        system_prompt: str | None = None,
    ):
        self._client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt or get_prompt("provider.system_prompt")

    def _messages(self, prompt: str, domain: str) -> list[dict[str, str]]:
        user_content = prompt
        if domain:
            user_content = render_prompt("provider.user_prompt", question=prompt, domain=domain)
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user_content},
        ]

    def _log(self, prompt: str, output_chars: int, t0: float, status: str, error: str | None = None) -> None:
        log_service.log_llm_call(
            model=self.model,
            caller=self.name,
            prompt_chars=len(prompt),
            output_chars=output_chars,
            duration_ms=int((time.monotonic() - t0) * 1000),
            status=status,
            error=error,
        )

    async def stream_answer(self, prompt: str, domain: str) -> AsyncIterator[str]:
        t0 = time.monotonic()
        output_chars = 0
        try:
            stream = await self._client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt, domain),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                stream=True,
            )
        except (openai.APIError, httpx.HTTPError) as exc:
            error = to_provider_error(exc)
            self._log(prompt, 0, t0, "error", str(error))
            raise error from exc

        try:
            async for chunk in stream:
                text = _delta_text(chunk)
                if text:
                    output_chars += len(text)
                    yield text
        except (openai.APIError, httpx.HTTPError) as exc:
            error = to_provider_error(exc)
            self._log(prompt, output_chars, t0, "error", str(error))
            raise error from exc
        finally:
            await stream.close()

        self._log(prompt, output_chars, t0, "success")
