"""
Execution chain - runs one phase of behaviors over a shared context.

The chain is cooperative: each hook gets `context.next`, a one-shot
continuation that runs the rest of the phase. A hook that returns without
calling it halts the phase (unless the chain was built with
auto_advance=True, in which case only an explicit ChainSignal.STOP halts).

Hooks that raise are reported to the observer and skipped over; a failing
hook never takes the rest of the phase down with it.
"""

from __future__ import annotations

import logging
from typing import Sequence

from hybrd.core.exceptions import ChainError
from hybrd.core.protocols import ChainObserver
from hybrd.core.types import Behavior, BehaviorContext, ChainSignal, Phase

logger = logging.getLogger(__name__)


class LoggingChainObserver:
    """Default observer: reports chain diagnostics through logging."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def behavior_failed(
        self, behavior_id: str, phase: Phase, error: BaseException
    ) -> None:
        self._log.error(
            f"Error executing {phase} behavior '{behavior_id}': {error}",
            exc_info=error,
        )

    def chain_stopped(self, phase: Phase, executed: int, total: int) -> None:
        self._log.debug(f"{phase} chain stopped after {executed}/{total} behaviors")


class _Continuation:
    """One-shot `next()` handed to a single hook invocation."""

    def __init__(self, chain_run: "_ChainRun", behavior_id: str):
        self._run = chain_run
        self._behavior_id = behavior_id
        self.called = False

    async def __call__(self) -> None:
        if self.called:
            raise ChainError(
                f"Behavior '{self._behavior_id}' called next() more than once"
            )
        self.called = True
        try:
            await self._run.advance()
        finally:
            # later hooks replaced context.next; hand ours back to the caller
            self._run.context.next = self


class _ChainRun:
    """Cursor state for one phase over one context."""

    def __init__(
        self,
        behaviors: Sequence[Behavior],
        context: BehaviorContext,
        phase: Phase,
        observer: ChainObserver,
        auto_advance: bool,
    ):
        self.behaviors = behaviors
        self.context = context
        self.phase = phase
        self.observer = observer
        self.auto_advance = auto_advance
        self.cursor = 0

    async def advance(self) -> None:
        while self.cursor < len(self.behaviors):
            behavior = self.behaviors[self.cursor]
            self.cursor += 1

            hook = behavior.hook_for(self.phase)
            if hook is None or not behavior.config.enabled:
                continue

            continuation = _Continuation(self, behavior.id)
            self.context.next = continuation
            try:
                signal = await hook(self.context)
            except Exception as e:
                self.observer.behavior_failed(behavior.id, self.phase, e)
                if continuation.called:
                    return
                continue

            if continuation.called or signal is ChainSignal.STOP:
                return
            if not self.auto_advance:
                return


class ExecutionChain:
    """
    Runs a phase's behaviors in registration order.

    Example:
        chain = ExecutionChain()
        await chain.run(registry.get_before_behaviors(), context, "before")
        if context.stopped:
            ...  # some behavior vetoed the rest of the phase
    """

    def __init__(
        self,
        observer: ChainObserver | None = None,
        auto_advance: bool = False,
    ):
        self.observer: ChainObserver = observer or LoggingChainObserver()
        self.auto_advance = auto_advance

    async def run(
        self,
        behaviors: Sequence[Behavior],
        context: BehaviorContext,
        phase: Phase,
    ) -> bool:
        """
        Execute one phase.

        Returns:
            True if the phase stopped before every behavior ran
            (also stored in context.stopped)
        """
        run = _ChainRun(behaviors, context, phase, self.observer, self.auto_advance)
        context.stopped = False
        try:
            await run.advance()
        finally:
            context.next = None

        context.stopped = run.cursor < len(behaviors)
        if context.stopped:
            self.observer.chain_stopped(phase, run.cursor, len(behaviors))
        return context.stopped
