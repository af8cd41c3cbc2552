"""filter_messages - veto messages that fail any filter callback."""

from __future__ import annotations

import logging

from hybrd.core.types import Behavior, BehaviorConfig, BehaviorContext
from hybrd.filters import FilterAPI, FilterCallback, MessageView

logger = logging.getLogger(__name__)


def filter_messages(filters: FilterCallback | list[FilterCallback]) -> Behavior:
    """
    Create a pre-response behavior that filters messages.

    Each callback receives a FilterAPI for the current message. The first
    callback returning False marks the message filtered and stops the
    chain, so behaviors registered after this one do not run.

    Example:
        filter_messages(lambda f: f.is_text() and not f.from_self())
    """
    filter_list = filters if isinstance(filters, list) else [filters]
    config = BehaviorConfig(enabled=True, data={"filters": len(filter_list)})

    async def before(context: BehaviorContext) -> None:
        message = context.message
        logger.debug(f"[filter-messages] Processing message {message.id}")

        if not filter_list:
            await context.advance()
            return

        api = FilterAPI(
            MessageView(
                message=message,
                conversation=context.conversation,
                client=context.client,
            )
        )

        for index, callback in enumerate(filter_list, start=1):
            try:
                passes = callback(api)
            except Exception as e:
                logger.error(f"[filter-messages] Error executing message filter: {e}")
                raise

            if not passes:
                logger.debug(
                    f"[filter-messages] Filter {index}/{len(filter_list)} failed, "
                    "message filtered out"
                )
                context.send_options.filtered = True
                return

        logger.debug("[filter-messages] All filters passed, continuing chain")
        await context.advance()

    return Behavior(id="filter-messages", config=config, before=before)
