"""
Custom behaviors.

Shows a hand-written behavior alongside the built-in rate limiter and
content filter. Filters run first so vetoed messages get no reaction.

Run with:
    ANTHROPIC_API_KEY=xxx uv run python examples/basic/02_custom_behaviors.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from console import ConsoleClient
from setup_logging import setup_logging
from hybrd import (
    Agent,
    Behavior,
    BehaviorConfig,
    BehaviorContext,
    content_filter,
    filter_messages,
    rate_limiter,
    react_with,
    threaded_reply,
)
from hybrd.adapters import AnthropicGenerator

setup_logging()
logger = logging.getLogger(__name__)


def tag_metadata(tag: str) -> Behavior:
    """After-hook that attaches a tag to every outgoing message."""

    async def after(context: BehaviorContext) -> None:
        metadata = dict(context.send_options.metadata or {})
        metadata["tag"] = tag
        context.send_options.metadata = metadata
        await context.next()

    return Behavior(id=f"tag-{tag}", config=BehaviorConfig(data={"tag": tag}), after=after)


async def main():
    load_dotenv()
    client = ConsoleClient()

    agent = Agent.create(
        name="custom-behaviors",
        generator=AnthropicGenerator(),
        behaviors=[
            filter_messages(lambda f: f.is_text() and not f.starts_with("/")),
            content_filter(blocked_words=["spam", "scam"]),
            rate_limiter(cooldown_seconds=5),
            react_with("👀"),
            threaded_reply(),
            tag_metadata("demo"),
        ],
        client=client,
    )

    listener = await agent.start_listener(client.stream())
    try:
        await listener.join()
    finally:
        await agent.stop()


if __name__ == "__main__":
    asyncio.run(main())
