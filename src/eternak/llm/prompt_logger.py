"""
E-TernakID - Prompt Logger.

Writes every LLM prompt and response to a markdown file for debugging.
Enabled via ETERNAK_LOG_PROMPTS=1 or the --log-prompts CLI flag.

Layout: prompt_logs/<session>/<NN>_<node>.md
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LOG_PROMPTS = os.getenv("ETERNAK_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

_session_id: str | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Turn prompt file logging on or off for this process."""
    global LOG_PROMPTS
    LOG_PROMPTS = enabled


def get_logging_status() -> dict[str, Any]:
    """Current logging configuration (startup log, health command)."""
    return {
        "file_logging": LOG_PROMPTS,
        "log_dir": str(LOG_DIR),
        "env_ETERNAK_LOG_PROMPTS": os.getenv("ETERNAK_LOG_PROMPTS", "0"),
    }


def get_session_log_dir() -> Path | None:
    """This session's log directory, if logging is enabled."""
    if not LOG_PROMPTS:
        return None
    return _session_dir()


def reset_session() -> None:
    """Start a new log session (tests, new CLI run)."""
    global _session_id, _call_counter
    _session_id = None
    _call_counter = 0


def _session_dir() -> Path:
    global _session_id
    if _session_id is None:
        _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_dir = LOG_DIR / _session_id
    session_dir.mkdir(parents=True, exist_ok=True)
    return session_dir


def _format_response(response: Any) -> str:
    payload = response.model_dump() if hasattr(response, "model_dump") else response
    try:
        return f"```json\n{json.dumps(payload, indent=2, ensure_ascii=False, default=str)}\n```\n"
    except (TypeError, ValueError):
        return f"```\n{response}\n```\n"


def log_prompt(
    *,
    node: str,
    model: str,
    system_prompt: str,
    user_prompt: str,
    response_model: str,
    response: Any = None,
    error: str | None = None,
    temperature: float | None = None,
) -> Path | None:
    """
    Log one LLM call.

    Returns the file written, or None when logging is disabled.
    """
    if not LOG_PROMPTS:
        return None

    global _call_counter
    _call_counter += 1
    filepath = _session_dir() / f"{_call_counter:02d}_{node}.md"

    sections = [
        f"# LLM Call: {node}",
        "",
        f"**Time:** {datetime.now().isoformat()}",
        f"**Model:** {model}",
        f"**Response Model:** {response_model}",
    ]
    if temperature is not None:
        sections.append(f"**Temperature:** {temperature}")
    sections += [
        "",
        "## System Prompt",
        "",
        f"```\n{system_prompt}\n```",
        "",
        "## User Prompt",
        "",
        f"```\n{user_prompt}\n```",
        "",
        "## Response",
        "",
    ]

    if error:
        sections.append(f"**ERROR:** {error}")
    elif response is not None:
        sections.append(_format_response(response))
    else:
        sections.append("(No response)")

    filepath.write_text("\n".join(sections) + "\n", encoding="utf-8")
    logger.debug(f"Prompt logged to {filepath}")
    return filepath
