"""Behavior registry - ordered store of an agent's behaviors."""

from __future__ import annotations

import logging
from typing import Iterable

from hybrd.behaviors.chain import ExecutionChain
from hybrd.core.types import Behavior, BehaviorContext

logger = logging.getLogger(__name__)


class BehaviorRegistry:
    """
    Holds behaviors in registration order. One per agent.

    No deduplication: registering two behaviors with the same id runs both.

    Example:
        registry = BehaviorRegistry()
        registry.register_all([react_with("👀"), threaded_reply()])
        await registry.execute_before(context)
    """

    def __init__(self, chain: ExecutionChain | None = None):
        self._behaviors: list[Behavior] = []
        self._chain = chain or ExecutionChain()

    @property
    def chain(self) -> ExecutionChain:
        return self._chain

    def register(self, behavior: Behavior) -> None:
        """Append a behavior."""
        if any(b.id == behavior.id for b in self._behaviors):
            logger.warning(
                f"Behavior '{behavior.id}' registered more than once; both will run"
            )
        self._behaviors.append(behavior)

    def register_all(self, behaviors: Iterable[Behavior]) -> None:
        """Append several behaviors, keeping their order."""
        for behavior in behaviors:
            self.register(behavior)

    def get_all(self) -> list[Behavior]:
        """Snapshot of all behaviors (copy)."""
        return list(self._behaviors)

    def get_before_behaviors(self) -> list[Behavior]:
        """Behaviors with a pre-response hook, in registration order."""
        return [b for b in self._behaviors if b.before is not None]

    def get_after_behaviors(self) -> list[Behavior]:
        """Behaviors with a post-response hook, in registration order."""
        return [b for b in self._behaviors if b.after is not None]

    async def execute_before(self, context: BehaviorContext) -> bool:
        """Run the pre-response phase. Returns context.stopped."""
        return await self._chain.run(self.get_before_behaviors(), context, "before")

    async def execute_after(self, context: BehaviorContext) -> bool:
        """Run the post-response phase. Returns context.stopped."""
        return await self._chain.run(self.get_after_behaviors(), context, "after")

    def clear(self) -> None:
        """Remove all behaviors (re-configuration/teardown only)."""
        self._behaviors = []

    def __len__(self) -> int:
        return len(self._behaviors)
