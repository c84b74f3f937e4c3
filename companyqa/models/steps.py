from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

QUESTION_PLACEHOLDER = "{question}"


@dataclass(frozen=True)
class Step:
    """One prompt template in the fixed, ordered step pipeline."""

    prompt_template: str

    def render(self, question: str) -> str:
        # Single literal substitution of the first placeholder only.
        return self.prompt_template.replace(QUESTION_PLACEHOLDER, question, 1)


def as_steps(templates: Iterable[str | Step]) -> tuple[Step, ...]:
    steps = tuple(t if isinstance(t, Step) else Step(prompt_template=t) for t in templates)
    if len(steps) < 2:
        raise ValueError("A step pipeline needs at least one analysis step and one answer step.")
    return steps
