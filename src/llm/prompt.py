"""Chat message assembly for the supportive-chat endpoint."""

import logging
from functools import cache
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"

DEFAULT_PERSONA = (
    "You are a warm, compassionate companion who offers thoughtful, emotionally "
    "supportive responses to people who are feeling down, sad or discouraged. "
    "Listen carefully, validate their feelings, and gently suggest small, "
    "practical steps. You are not a therapist; if someone may be in danger, "
    "encourage them to contact emergency services or a crisis line."
)


def _read_config(filename: str) -> str:
    """Read a config markdown file, returning empty string if missing."""
    path = CONFIG_DIR / filename
    if path.exists():
        return path.read_text(encoding="utf-8").strip()
    return ""


@cache
def persona() -> str:
    """The fixed system persona, from ``config/PERSONA.md`` when present."""
    text = _read_config("PERSONA.md")
    if not text:
        logger.debug("PERSONA.md not found, using built-in persona")
    return text or DEFAULT_PERSONA


def build_messages(prompt: str, context: list[str]) -> list[dict[str, str]]:
    """Compose the chat-completions message list.

    Order: persona system message, one system message per context string
    (order preserved), then the user's raw prompt.
    """
    messages = [{"role": "system", "content": persona()}]
    messages.extend({"role": "system", "content": text} for text in context)
    messages.append({"role": "user", "content": prompt})
    logger.debug("Composed %d messages (%d context)", len(messages), len(context))
    return messages
