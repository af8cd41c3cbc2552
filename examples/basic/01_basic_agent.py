"""
Basic hybrd agent.

Reacts to every message with 👀, answers with Claude in the message's
thread, and accepts forwarded events on POST /blockchain-event.

Run with:
    ANTHROPIC_API_KEY=xxx uv run python examples/basic/01_basic_agent.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from console import ConsoleClient
from setup_logging import setup_logging
from hybrd import Agent, EventsPlugin, react_with, threaded_reply
from hybrd.adapters import AnthropicGenerator
from hybrd.config import load_agent_config

setup_logging()
logger = logging.getLogger(__name__)


async def main():
    load_dotenv()

    # Load agent settings from agent_config.yaml
    settings = load_agent_config("basic_agent")
    client = ConsoleClient()

    agent = Agent.create(
        name=settings.name,
        generator=AnthropicGenerator(
            system_prompt="You are a helpful assistant. Be concise and friendly.",
        ),
        behaviors=[react_with("👀"), threaded_reply()],
        client=client,
        api_key=settings.api_key,
    )
    agent.use(EventsPlugin())

    logger.info(f"Starting {settings.name} on port {settings.port}...")
    await agent.start_server(port=settings.port)
    listener = await agent.start_listener(client.stream())
    try:
        await listener.join()
    finally:
        await agent.stop()


if __name__ == "__main__":
    asyncio.run(main())
