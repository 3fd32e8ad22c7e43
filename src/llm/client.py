"""Async OpenAI chat-completions client for supportive replies."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

import httpx

from src.config import settings

if TYPE_CHECKING:
    from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The generation service failed. Details are logged, not shown to callers."""


@dataclass(frozen=True)
class TokenUsage:
    """Token counters reported by the completion service."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class Generation:
    """A generated reply plus its token usage."""

    text: str
    usage: TokenUsage


class GenerationClient:
    """Single-attempt chat completion with a bounded reply and a timeout.

    The underlying ``AsyncOpenAI`` client is created lazily so that the
    service can start (and tests can run) without an API key.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.chat_model
        self.max_tokens = max_tokens or settings.generation_max_tokens
        self.timeout_seconds = timeout_seconds or settings.generation_timeout_seconds
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        """Return the lazily-initialised AsyncOpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=httpx.Timeout(self.timeout_seconds, connect=10.0),
                max_retries=0,
            )
        return self._client

    async def generate(self, messages: list[dict[str, Any]]) -> Generation:
        """Run one chat completion.

        Raises:
            UpstreamError: On any failure talking to the service, including
                timeouts and responses without a message or usage block.
        """
        try:
            client = self._get_client()
            response = await client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
            )
            text = response.choices[0].message.content or ""
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        except Exception as exc:
            logger.exception("Error communicating with OpenAI API")
            raise UpstreamError("Failed to fetch response from OpenAI.") from exc

        logger.info(
            "Generated reply: model=%s, prompt_tokens=%d, completion_tokens=%d",
            self.model,
            usage.prompt_tokens,
            usage.completion_tokens,
        )
        return Generation(text=text, usage=usage)
