from __future__ import annotations

from typing import AsyncIterator, Protocol


class ProviderError(RuntimeError):
    """Raised when the text provider fails: transport, status, timeout or shape."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(ProviderError):
    """The backend answered successfully but produced no text."""


class TextProvider(Protocol):
    """Capability the step pipeline depends on."""

    async def answer(self, prompt: str, domain: str) -> str:
        ...

    def stream_answer(self, prompt: str, domain: str) -> AsyncIterator[str]:
        ...


class BaseTextProvider:
    """Provider base whose `answer` drains `stream_answer`.

    Subclasses implement `stream_answer` as an async generator. An answer
    that drains to nothing but whitespace raises `EmptyResponseError`.
    """

    name: str = "base"

    def stream_answer(self, prompt: str, domain: str) -> AsyncIterator[str]:
        raise NotImplementedError(f"{type(self).__name__} does not implement stream_answer")

    async def answer(self, prompt: str, domain: str) -> str:
        parts: list[str] = []
        stream = self.stream_answer(prompt, domain)
        try:
            async for fragment in stream:
                parts.append(fragment)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        text = "".join(parts)
        if not text.strip():
            raise EmptyResponseError(f"No response received from {self.name} provider")
        return text
