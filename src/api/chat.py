"""POST /api/generate returns a supportive chat reply grounded in the knowledge base."""

from __future__ import annotations

import logging

from aiohttp import web

from src.api.context import (
    GENERATION_CLIENT,
    KNOWLEDGE_BASE,
    MAX_PROMPT_LENGTH,
    json_error,
)
from src.knowledge.selector import InvalidPromptError, select_context
from src.llm.client import UpstreamError
from src.llm.prompt import build_messages

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE_MESSAGE = "Failed to fetch response from OpenAI."


async def handle_generate(request: web.Request) -> web.Response:
    """Validate the prompt, pick context, and ask the model for a reply."""
    try:
        payload = await request.json()
    except ValueError:
        return json_error("Invalid JSON body", 400)

    prompt = payload.get("prompt") if isinstance(payload, dict) else None

    try:
        context = select_context(
            prompt, request.app[KNOWLEDGE_BASE], request.app[MAX_PROMPT_LENGTH]
        )
    except InvalidPromptError as exc:
        logger.info("Rejected prompt: %s", exc)
        return json_error(str(exc), 400)

    messages = build_messages(prompt, context)

    try:
        generation = await request.app[GENERATION_CLIENT].generate(messages)
    except UpstreamError:
        return json_error(UPSTREAM_FAILURE_MESSAGE, 500)

    return web.json_response({
        "reply": generation.text,
        "token_usage": generation.usage.to_dict(),
    })
