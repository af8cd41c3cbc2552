"""
Anthropic generator - produces agent responses with Claude.

Requires the `anthropic` extra.
"""

from __future__ import annotations

import logging

from anthropic import AsyncAnthropic
from anthropic.types import Message, MessageParam

from hybrd.core.types import BehaviorContext

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful agent in a messaging conversation. "
    "Reply concisely to the latest message."
)


class AnthropicGenerator:
    """
    Generator backed by the Anthropic Messages API.

    Example:
        generator = AnthropicGenerator(model="claude-sonnet-4-5-20250929")
        agent = Agent.create(name="my-agent", generator=generator)
    """

    def __init__(
        self,
        model: str = "claude-sonnet-4-5-20250929",
        api_key: str | None = None,
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        client: AsyncAnthropic | None = None,
    ):
        self.model = model
        self.system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self.max_tokens = max_tokens

        # Anthropic client (uses ANTHROPIC_API_KEY env var if not provided)
        self.client = client or AsyncAnthropic(api_key=api_key)

    async def generate(self, context: BehaviorContext) -> str | None:
        text = context.message.text
        if not text:
            logger.debug(f"Message {context.message.id} has no text, skipping")
            return None

        messages: list[MessageParam] = [{"role": "user", "content": text}]
        response: Message = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=self.system_prompt,
            messages=messages,
        )

        parts = [
            block.text for block in response.content if getattr(block, "type", None) == "text"
        ]
        logger.debug(
            f"Anthropic response for {context.message.id}: "
            f"stop_reason={response.stop_reason}, blocks={len(response.content)}"
        )
        return "".join(parts) or None
