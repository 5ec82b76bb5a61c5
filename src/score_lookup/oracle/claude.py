import logging
import os

import anthropic
from anthropic.types import TextBlock

from score_lookup.data import APICallUsage, Usage
from score_lookup.errors import OracleUnavailableError

logger = logging.getLogger(__name__)


class ClaudeOracle:
    """Text oracle backed by Anthropic's Claude Messages API.

    The client is created with an explicit timeout and no automatic retries,
    so a slow upstream costs at most ``timeout`` seconds per call.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to ANTHROPIC_API_KEY env var).
        timeout: Request timeout in seconds.
        max_tokens: Maximum tokens to generate.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        timeout: float = 15.0,
        max_tokens: int = 512,
    ) -> None:
        self._model = model
        self._max_tokens = max_tokens
        resolved_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._client: anthropic.AsyncAnthropic | None = None
        if resolved_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=resolved_key, timeout=timeout, max_retries=0
            )

    @property
    def configured(self) -> bool:
        """Whether credentials were found."""
        return self._client is not None

    async def complete(self, instructions: str, query: str) -> tuple[str, Usage]:
        if self._client is None:
            raise OracleUnavailableError(
                "Claude API key not configured. Pass api_key or set ANTHROPIC_API_KEY env var."
            )

        response = await self._client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            system=instructions,
            messages=[{"role": "user", "content": query}],
        )

        usage = Usage(
            api_calls=[
                APICallUsage(
                    model=self._model,
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                ),
            ],
        )

        text = " ".join(
            block.text for block in response.content if isinstance(block, TextBlock)
        ).strip()
        logger.debug("Oracle response: %s", text[:200])
        return (text, usage)
