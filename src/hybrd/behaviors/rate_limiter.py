"""rate_limiter - keep the agent from answering the same sender too often."""

from __future__ import annotations

import logging
import time
from typing import Callable

from hybrd.core.types import Behavior, BehaviorConfig, BehaviorContext

logger = logging.getLogger(__name__)


def rate_limiter(
    *,
    cooldown_seconds: float = 60.0,
    enabled: bool = True,
    clock: Callable[[], float] = time.monotonic,
) -> Behavior:
    """
    Create a pre-response behavior that vetoes senders inside a cooldown.

    The per-sender timestamps live in this behavior's closure. The check and
    the update happen with no await in between, so concurrent messages on
    one event loop cannot both slip through.
    """
    last_seen: dict[str, float] = {}
    config = BehaviorConfig(
        enabled=enabled, data={"cooldown_seconds": cooldown_seconds}
    )

    async def before(context: BehaviorContext) -> None:
        if not config.enabled:
            await context.advance()
            return

        sender_id = context.message.sender_inbox_id
        now = clock()
        previous = last_seen.get(sender_id)

        if previous is not None and now - previous < cooldown_seconds:
            logger.info(f"[rate-limiter] Rate limiting sender {sender_id}")
            context.send_options.filtered = True
            return

        last_seen[sender_id] = now
        await context.advance()

    return Behavior(id="rate-limiter", config=config, before=before)
