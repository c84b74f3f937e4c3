from __future__ import annotations

from typing import AsyncGenerator, Callable, Sequence

from companyqa.config import settings
from companyqa.models.steps import Step, as_steps
from companyqa.providers.base import ProviderError, TextProvider
from companyqa.services import logger as log_service
from companyqa.services.normalizer import normalize_fragment
from companyqa.services.prompt_store import load_steps


class StepPipelineOrchestrator:
    """Answers a company question through a fixed sequence of dependent prompts.

    Flow:
      1. Start a context string with a header naming the domain
      2. Run every analysis step (all but the last) to completion, appending
         each raw answer to the context
      3. Stream the last step's answer, normalizing each fragment and
         yielding it as soon as it arrives

    Analysis steps are retried up to `max_step_attempts` times on
    ProviderError. The streaming step is never retried since fragments may
    already have reached the caller.
    """

    def __init__(
        self,
        provider: TextProvider,
        steps: Sequence[Step | str] | None = None,
        *,
        max_step_attempts: int | None = None,
        normalizer: Callable[[str], str] = normalize_fragment,
    ):
        self.provider = provider
        self.steps = as_steps(steps) if steps is not None else load_steps()
        attempts = settings.step_max_attempts if max_step_attempts is None else max_step_attempts
        self.max_step_attempts = max(int(attempts), 1)
        self.normalizer = normalizer

    @staticmethod
    def initial_context(domain: str) -> str:
        return f"Analyzing {domain}:\n"

    @staticmethod
    def build_prompt(context: str, step: Step, question: str) -> str:
        return f"{context}\n\n{step.render(question)}"

    async def _run_analysis_step(self, index: int, prompt: str) -> str:
        step_count = len(self.steps)
        last_error: ProviderError | None = None
        for attempt in range(1, self.max_step_attempts + 1):
            try:
                return await self.provider.answer(prompt, "")
            except ProviderError as exc:
                last_error = exc
                if attempt < self.max_step_attempts:
                    log_service.log_pipeline_step(
                        index, step_count, "retry", {"attempt": attempt, "error": str(exc)}
                    )

        log_service.log_pipeline_step(
            index,
            step_count,
            "failed",
            {"attempts": self.max_step_attempts, "error": str(last_error)},
        )
        raise last_error

    async def process(self, question: str, domain: str) -> AsyncGenerator[str, None]:
        """Run the pipeline for one question and yield normalized answer fragments.

        Errors from analysis steps propagate before anything is yielded.
        Errors from the streaming step propagate where they occur, after the
        fragments already delivered.
        """
        step_count = len(self.steps)
        context = self.initial_context(domain)

        for index, step in enumerate(self.steps[:-1], start=1):
            log_service.log_pipeline_step(index, step_count, "started")
            response = await self._run_analysis_step(index, self.build_prompt(context, step, question))
            context += f"\n{response}"
            log_service.log_pipeline_step(
                index, step_count, "completed", {"response_chars": len(response)}
            )

        final_prompt = self.build_prompt(context, self.steps[-1], question)
        log_service.log_pipeline_step(
            step_count, step_count, "streaming", {"context_chars": len(context)}
        )

        fragments = 0
        stream = self.provider.stream_answer(final_prompt, domain)
        try:
            async for fragment in stream:
                cleaned = self.normalizer(fragment)
                if not cleaned:
                    continue
                fragments += 1
                yield cleaned
        except ProviderError as exc:
            log_service.log_pipeline_step(
                step_count, step_count, "failed", {"fragments": fragments, "error": str(exc)}
            )
            raise
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        log_service.log_pipeline_step(
            step_count, step_count, "completed", {"fragments": fragments}
        )
