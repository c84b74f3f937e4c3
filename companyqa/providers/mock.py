from __future__ import annotations

import asyncio
import re
from typing import AsyncIterator

from companyqa.providers.base import BaseTextProvider
from companyqa.services.prompt_store import render_prompt

_WORD = re.compile(r"\S+\s*")


class MockProvider(BaseTextProvider):
    """Offline provider used when no API key is configured.

    Streams a canned answer word by word so the rest of the pipeline can be
    exercised without network access.
    """

    name = "mock"

    def __init__(self, *, delay_seconds: float = 0.0, response: str | None = None):
        self.delay_seconds = max(float(delay_seconds), 0.0)
        self.response = response

    async def stream_answer(self, prompt: str, domain: str) -> AsyncIterator[str]:
        text = self.response
        if text is None:
            text = render_prompt("provider.mock_response", domain=domain or "this company")
        for word in _WORD.findall(text):
            if self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)
            yield word
