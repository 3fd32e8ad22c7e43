"""Static knowledge base and prompt-driven content selection."""

from src.knowledge.base import (
    CHATBOT_INFO_NAME,
    ContentItem,
    KnowledgeBase,
    load_knowledge_base,
)
from src.knowledge.selector import InvalidPromptError, select_context, validate_prompt

__all__ = [
    "CHATBOT_INFO_NAME",
    "ContentItem",
    "InvalidPromptError",
    "KnowledgeBase",
    "load_knowledge_base",
    "select_context",
    "validate_prompt",
]
