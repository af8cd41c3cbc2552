"""content_filter - block messages by word list or sender allow list."""

from __future__ import annotations

import logging
from typing import Iterable

from hybrd.core.types import Behavior, BehaviorConfig, BehaviorContext

logger = logging.getLogger(__name__)


def content_filter(
    *,
    blocked_words: Iterable[str] = ("spam", "scam"),
    allow_list: Iterable[str] | None = None,
    enabled: bool = True,
) -> Behavior:
    """Create a pre-response behavior that vetoes unwanted content."""
    words = [w.lower() for w in blocked_words]
    allowed = set(allow_list) if allow_list is not None else None
    config = BehaviorConfig(
        enabled=enabled,
        data={"blocked_words": words, "allow_list": sorted(allowed or [])},
    )

    async def before(context: BehaviorContext) -> None:
        if not config.enabled:
            await context.advance()
            return

        content = context.message.text.lower()
        for word in words:
            if word in content:
                logger.info(f"[content-filter] Blocked message containing: {word}")
                context.send_options.filtered = True
                return

        if allowed is not None and context.message.sender_inbox_id not in allowed:
            logger.info("[content-filter] Message from non-allowlisted sender")
            context.send_options.filtered = True
            return

        await context.advance()

    return Behavior(id="content-filter", config=config, before=before)
