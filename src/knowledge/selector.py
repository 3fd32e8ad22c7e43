"""Pick knowledge base content relevant to a user's chat prompt."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.knowledge.base import tokenize

if TYPE_CHECKING:
    from src.knowledge.base import KnowledgeBase

logger = logging.getLogger(__name__)

DEFAULT_MAX_PROMPT_LENGTH = 300


class InvalidPromptError(ValueError):
    """The prompt is missing or too long. Safe to show to the caller."""


def validate_prompt(prompt: object, max_length: int = DEFAULT_MAX_PROMPT_LENGTH) -> str:
    """Return *prompt* if it is a usable chat prompt, else raise."""
    if not prompt or not isinstance(prompt, str):
        raise InvalidPromptError("Prompt is required")
    if len(prompt) > max_length:
        raise InvalidPromptError(
            f"Prompt is too long. Please limit the prompt to {max_length} characters."
        )
    return prompt


def select_context(
    prompt: str,
    kb: KnowledgeBase,
    max_length: int = DEFAULT_MAX_PROMPT_LENGTH,
) -> list[str]:
    """Return the knowledge base content to send along with *prompt*.

    Items whose tags share a token with the prompt are selected in
    knowledge base order. When nothing matches, the whole knowledge base
    is returned so the model still has the full picture rather than just
    the introductory "Chatbot Information" item.

    Raises:
        InvalidPromptError: If the prompt is empty or longer than *max_length*.
    """
    validate_prompt(prompt, max_length)
    keywords = tokenize(prompt)

    matched = [item for item in kb if item.matches(keywords)]
    logger.info("Selected knowledge items: %s", [item.name for item in matched])

    selected = [item.content for item in matched]
    chatbot_info = kb.chatbot_info

    if not selected and chatbot_info:
        selected.insert(0, chatbot_info)

    # Only the fallback intro survived, so nothing really matched
    if len(selected) == 1 and selected[0] == chatbot_info:
        selected = kb.contents()

    return selected
