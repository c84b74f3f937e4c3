from __future__ import annotations

from typing import AsyncIterator

from companyqa.providers.base import ProviderError


class ScriptedProvider:
    """Provider double that replays scripted answers and records every call."""

    def __init__(
        self,
        answers: list[str | Exception] | None = None,
        fragments: list[str | Exception] | None = None,
    ):
        self.answers = list(answers or [])
        self.fragments = list(fragments or [])
        self.calls: list[tuple[str, str, str]] = []
        self.stream_closed = False
        self.fragments_sent = 0

    async def answer(self, prompt: str, domain: str) -> str:
        self.calls.append(("answer", prompt, domain))
        if not self.answers:
            raise ProviderError("no scripted answer left")
        result = self.answers.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def stream_answer(self, prompt: str, domain: str) -> AsyncIterator[str]:
        self.calls.append(("stream_answer", prompt, domain))
        try:
            for item in self.fragments:
                if isinstance(item, Exception):
                    raise item
                self.fragments_sent += 1
                yield item
        finally:
            self.stream_closed = True

    @property
    def call_kinds(self) -> list[str]:
        return [kind for kind, _, _ in self.calls]


async def collect(agen) -> list[str]:
    return [fragment async for fragment in agen]
