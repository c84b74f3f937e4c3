"""Centralized logging for the step pipeline and provider calls."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from companyqa.config import settings

APP_LOG_LEVEL = getattr(logging, settings.app_log_level.upper(), logging.INFO)
NOISY_LOG_LEVEL = getattr(logging, settings.noisy_log_level.upper(), logging.WARNING)

_handlers: list[logging.Handler] = [logging.StreamHandler()]
if settings.log_dir:
    LOG_DIR = Path(settings.log_dir)
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    _handlers.append(logging.FileHandler(LOG_DIR / "companyqa.log"))

logging.basicConfig(
    level=APP_LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

# Keep HTTP client chatter out of the app log unless explicitly requested.
for logger_name in (
    "httpx",
    "httpcore",
    "openai",
    "openai._base_client",
    "asyncio",
):
    logging.getLogger(logger_name).setLevel(NOISY_LOG_LEVEL)

logger = logging.getLogger("companyqa")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def log_llm_call(
    model: str,
    caller: str,
    prompt_chars: int = 0,
    output_chars: int = 0,
    duration_ms: int = 0,
    status: str = "success",
    error: Optional[str] = None,
) -> None:
    """Log a provider call. Only sizes are recorded, never prompt text."""
    call_data = {
        "timestamp": _now(),
        "model": model,
        "caller": caller,
        "prompt_chars": prompt_chars,
        "output_chars": output_chars,
        "duration_ms": duration_ms,
        "status": status,
        "error": error,
    }
    logger.info(f"LLM_CALL: {json.dumps(call_data)}")


def log_pipeline_step(
    step_index: int,
    step_count: int,
    status: str,
    data: Optional[dict[str, Any]] = None,
) -> None:
    """Log a step pipeline transition (started, completed, retry, failed)."""
    step_data = {
        "timestamp": _now(),
        "step": step_index,
        "of": step_count,
        "status": status,
        "data": data,
    }
    level = logging.WARNING if status in ("retry", "failed") else logging.INFO
    logger.log(level, f"PIPELINE_STEP: {json.dumps(step_data)}")


def log_event(
    event_type: str,
    message: str,
    **kwargs: Any,
) -> None:
    """Log a generic event."""
    event_data = {
        "timestamp": _now(),
        "event_type": event_type,
        "message": message,
        **kwargs,
    }
    logger.info(f"EVENT: {json.dumps(event_data)}")
