"""react_with - acknowledge inbound messages with an emoji reaction."""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable

from hybrd.core.types import Behavior, BehaviorConfig, BehaviorContext
from hybrd.messaging.types import ContentType, Reaction

logger = logging.getLogger(__name__)

ContextPredicate = Callable[[BehaviorContext], "bool | Awaitable[bool]"]


def react_with(
    reaction: str,
    *,
    react_to_all: bool = True,
    filter: ContextPredicate | None = None,
    enabled: bool = True,
) -> Behavior:
    """
    Create a behavior that reacts to each message before the agent responds.

    Args:
        reaction: Emoji to react with
        react_to_all: React to every message. When False, `filter` decides
        filter: Optional predicate over the context (sync or async)
        enabled: Initial enabled state

    Messages already vetoed by an earlier behavior (send_options.filtered)
    get no reaction.
    """
    config = BehaviorConfig(
        enabled=enabled,
        data={
            "reaction": reaction,
            "react_to_all": react_to_all,
            "filter": getattr(filter, "__name__", None) if filter else None,
        },
    )

    async def before(context: BehaviorContext) -> None:
        if not config.enabled:
            await context.advance()
            return

        if context.send_options.filtered:
            logger.debug("[react-with] Skipping reaction, message was filtered")
            await context.advance()
            return

        if not react_to_all and filter is not None:
            should_react = filter(context)
            if inspect.isawaitable(should_react):
                should_react = await should_react
            if not should_react:
                await context.advance()
                return

        try:
            await context.conversation.send(
                Reaction(reference=context.message.id, content=reaction),
                content_type=ContentType.REACTION,
            )
            logger.debug(
                f"[react-with] Reacted with {reaction} to message {context.message.id}"
            )
        except Exception as e:
            logger.error(f"[react-with] Failed to add reaction {reaction}: {e}")

        await context.advance()

    return Behavior(id=f"react-with-{reaction}", config=config, before=before)
