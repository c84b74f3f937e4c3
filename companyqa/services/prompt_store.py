from __future__ import annotations

import json
from pathlib import Path
from string import Template
from typing import Any

from companyqa.models.steps import Step, as_steps


PROMPTS_PATH = Path(__file__).resolve().parents[1] / "prompts" / "prompts.json"
DEFAULT_PIPELINE_KEY = "pipeline.company_analysis"
_catalog_cache: dict[str, Any] | None = None
_catalog_mtime_ns: int | None = None


def _load_catalog() -> dict[str, Any]:
    global _catalog_cache, _catalog_mtime_ns
    mtime_ns = PROMPTS_PATH.stat().st_mtime_ns
    if _catalog_cache is not None and _catalog_mtime_ns == mtime_ns:
        return _catalog_cache

    payload = json.loads(PROMPTS_PATH.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Prompt catalog must be a JSON object.")
    _catalog_cache = payload
    _catalog_mtime_ns = mtime_ns
    return payload


def _resolve_entry(key: str) -> Any:
    node: Any = _load_catalog()
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(f"Prompt key not found: {key}")
        node = node[part]
    return node


def get_prompt(key: str) -> str:
    node = _resolve_entry(key)
    if not isinstance(node, str):
        raise TypeError(f"Prompt key must map to a string: {key}")
    return node


def render_prompt(key: str, **values: Any) -> str:
    template = Template(get_prompt(key))
    try:
        return template.substitute(**values)
    except KeyError as exc:
        missing = str(exc.args[0])
        raise KeyError(f"Missing template value '{missing}' for prompt '{key}'") from exc


def load_steps(key: str = DEFAULT_PIPELINE_KEY) -> tuple[Step, ...]:
    """Load a step pipeline (a JSON list of prompt templates) from the catalog."""
    node = _resolve_entry(key)
    if not isinstance(node, list) or not all(isinstance(item, str) for item in node):
        raise TypeError(f"Pipeline key must map to a list of strings: {key}")
    return as_steps(node)


def clear_prompt_cache() -> None:
    global _catalog_cache, _catalog_mtime_ns
    _catalog_cache = None
    _catalog_mtime_ns = None
