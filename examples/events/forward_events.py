"""
Forward events to a running agent.

Start 01_basic_agent.py first, then:
    AGENT_URL=http://localhost:8454 AGENT_API_KEY=change-me \
        uv run python examples/events/forward_events.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from setup_logging import setup_logging
from hybrd import create_event_forwarder

setup_logging()
logger = logging.getLogger(__name__)


async def main():
    load_dotenv()

    forward = create_event_forwarder()

    ok = await forward(
        "blockchain.bet.created",
        {
            "betId": "123",
            "conversationId": "console",
            "creator": "0x123",
            "transactionHash": "0xabc",
        },
    )
    logger.info(f"Event delivered: {ok}")


if __name__ == "__main__":
    asyncio.run(main())
