"""GET /timeline/{user_id}: this week's logging grid and current streak."""

from __future__ import annotations

import logging

from aiohttp import web

from src.api.context import CLOCK, STORES, TIMEZONE, json_error
from src.timeline.builder import build_timeline

logger = logging.getLogger(__name__)


async def handle_timeline(request: web.Request) -> web.Response:
    user_id = request.match_info["user_id"]
    try:
        timestamps = await request.app[STORES].logs.list_created_at(user_id)
        result = build_timeline(
            timestamps,
            now=request.app[CLOCK](),
            tz=request.app[TIMEZONE],
        )
    except Exception:
        logger.exception("Error calculating timeline: user_id=%s", user_id)
        return json_error("Failed to calculate timeline", 500)

    logger.debug(
        "Timeline for %s: %d log(s), streak=%d",
        user_id,
        len(timestamps),
        result.current_streak,
    )
    return web.json_response(result.to_response())
