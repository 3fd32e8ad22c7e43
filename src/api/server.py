"""Async HTTP server for the wellness API.

Uses aiohttp's AppRunner/TCPSite for non-blocking start/stop. Each request
runs as its own task, so a slow generation call never holds up timeline or
record requests.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING

from aiohttp import web

from src.api.chat import handle_generate
from src.api.context import (
    CLOCK,
    GENERATION_CLIENT,
    KNOWLEDGE_BASE,
    MAX_PROMPT_LENGTH,
    STORES,
    TIMEZONE,
    BadRequest,
    Stores,
    json_error,
)
from src.api.records import add_record_routes
from src.api.timeline import handle_timeline
from src.config import settings
from src.knowledge.base import load_knowledge_base
from src.llm.client import GenerationClient
from src.timeline.calendar import get_zone

if TYPE_CHECKING:
    from src.knowledge.base import KnowledgeBase

    try:
        import zoneinfo
    except ImportError:  # pragma: no cover
        from backports import zoneinfo  # type: ignore[no-redef]

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def _error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Map request errors to JSON bodies and log anything unexpected."""
    try:
        return await handler(request)
    except BadRequest as exc:
        return json_error(str(exc), 400)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception("Unhandled error: %s %s", request.method, request.path)
        return json_error("Internal server error", 500)


async def _root(request: web.Request) -> web.Response:
    return web.json_response({"message": "Welcome to the Wellness Journal API!"})


async def _health(request: web.Request) -> web.Response:
    """GET /health: basic liveness check."""
    return web.json_response({"status": "ok"})


def create_web_app(
    *,
    knowledge_base: KnowledgeBase,
    generation_client: GenerationClient,
    stores: Stores | None = None,
    tz: zoneinfo.ZoneInfo | None = None,
    clock: Callable[[], datetime] | None = None,
    max_prompt_length: int | None = None,
) -> web.Application:
    """Build the aiohttp Application with routes and shared dependencies."""
    tz = tz or get_zone()

    app = web.Application(middlewares=[_error_middleware])
    app[KNOWLEDGE_BASE] = knowledge_base
    app[GENERATION_CLIENT] = generation_client
    app[STORES] = stores or Stores()
    app[TIMEZONE] = tz
    app[CLOCK] = clock or (lambda: datetime.now(tz))
    app[MAX_PROMPT_LENGTH] = max_prompt_length or settings.max_prompt_length

    app.router.add_get("/", _root)
    app.router.add_get("/health", _health)
    app.router.add_post("/api/generate", handle_generate)
    app.router.add_post("/generate", handle_generate)
    app.router.add_get("/timeline/{user_id}", handle_timeline)
    add_record_routes(app)
    return app


class ApiServer:
    """Manages the aiohttp server lifecycle."""

    def __init__(self, host: str | None = None, port: int | None = None) -> None:
        self.host = host or settings.server_host
        self.port = port or settings.server_port
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        """Load the knowledge base and start listening.

        Raises:
            FileNotFoundError / ValueError: If the knowledge base is unusable.
        """
        knowledge_base = load_knowledge_base(settings.knowledge_base_path)
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is empty, /api/generate will fail upstream")

        app = create_web_app(
            knowledge_base=knowledge_base,
            generation_client=GenerationClient(),
        )
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info(
            "API server listening on %s:%d (timezone: %s)",
            self.host,
            self.port,
            settings.app_timezone,
        )

    async def stop(self) -> None:
        """Shut down the server gracefully."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("API server stopped")
