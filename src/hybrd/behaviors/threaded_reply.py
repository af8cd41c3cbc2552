"""threaded_reply - reply in the originating message's thread."""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable

from hybrd.core.types import Behavior, BehaviorConfig, BehaviorContext

ContextPredicate = Callable[[BehaviorContext], "bool | Awaitable[bool]"]


def threaded_reply(
    *,
    enabled: bool = True,
    always_thread: bool = True,
    filter: ContextPredicate | None = None,
) -> Behavior:
    """
    Create a behavior that threads the agent's reply onto the inbound message.

    Runs after the response is generated. With always_thread=False the
    optional `filter` decides per message.
    """
    config = BehaviorConfig(
        enabled=enabled,
        data={
            "always_thread": always_thread,
            "filter": getattr(filter, "__name__", None) if filter else None,
        },
    )

    async def after(context: BehaviorContext) -> None:
        if not config.enabled:
            await context.advance()
            return

        should_thread = True
        if not always_thread and filter is not None:
            result = filter(context)
            should_thread = bool(await result if inspect.isawaitable(result) else result)

        if should_thread:
            context.send_options.threaded = True

        await context.advance()

    return Behavior(id="threaded-reply", config=config, after=after)
