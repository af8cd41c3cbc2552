"""
Message processor - drives one inbound message through the pipeline.

filter -> before behaviors -> generate -> after behaviors -> dispatch
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

from hybrd.behaviors.chain import ExecutionChain
from hybrd.behaviors.registry import BehaviorRegistry
from hybrd.core.exceptions import FilterEvaluationError, GenerationError
from hybrd.core.protocols import Generator
from hybrd.core.types import AgentRuntime, BehaviorContext, SendOptions
from hybrd.filters import Filter, MessageView, evaluate, from_self, not_
from hybrd.messaging.types import ContentType, Reply

logger = logging.getLogger(__name__)

ProcessStatus = Literal["filtered", "dropped", "vetoed", "no_response", "sent"]


@dataclass
class ProcessResult:
    """Outcome of processing one message."""

    status: ProcessStatus
    send_options: SendOptions = field(default_factory=SendOptions)
    response: str | None = None
    before_stopped: bool = False
    after_stopped: bool = False


@dataclass
class ProcessorState:
    """Counters for operability. Mutated only by MessageProcessor."""

    messages_processed: int = 0
    messages_filtered: int = 0
    consecutive_errors: int = 0
    last_ok_at: datetime | None = None
    last_err_at: datetime | None = None

    def record_ok(self) -> None:
        self.messages_processed += 1
        self.consecutive_errors = 0
        self.last_ok_at = datetime.now(timezone.utc)

    def record_filtered(self) -> None:
        self.messages_filtered += 1

    def record_error(self) -> None:
        self.consecutive_errors += 1
        self.last_err_at = datetime.now(timezone.utc)


class MessageProcessor:
    """
    Runs the behavior pipeline for inbound messages.

    One processor per agent; `process` may run concurrently for different
    messages since every call builds its own BehaviorContext.

    Example:
        processor = MessageProcessor(registry, generator)
        result = await processor.process(
            AgentRuntime(conversation=conv, message=msg, sender=sender)
        )
        if result.status == "sent":
            ...
    """

    def __init__(
        self,
        registry: BehaviorRegistry,
        generator: Generator,
        message_filter: Filter | None = None,
        chain: ExecutionChain | None = None,
    ):
        self._registry = registry
        self._generator = generator
        self._filter = message_filter or not_(from_self)
        self._chain = chain or registry.chain
        self.state = ProcessorState()

    @property
    def registry(self) -> BehaviorRegistry:
        return self._registry

    async def process(self, runtime: AgentRuntime) -> ProcessResult:
        """
        Process one message.

        Raises:
            GenerationError: If the generator failed. Nothing is dispatched.
        """
        message = runtime.message
        view = MessageView(
            message=message,
            conversation=runtime.conversation,
            client=runtime.client,
        )

        try:
            accepted = evaluate(self._filter, view)
        except FilterEvaluationError as e:
            logger.error(f"Dropping message {message.id}: {e}")
            self.state.record_error()
            return ProcessResult(status="dropped")

        if not accepted:
            logger.debug(f"Message {message.id} rejected by message filter")
            self.state.record_filtered()
            return ProcessResult(status="filtered")

        context = BehaviorContext(runtime=runtime)

        before_stopped = await self._chain.run(
            self._registry.get_before_behaviors(), context, "before"
        )

        if context.send_options.filtered:
            logger.debug(f"Message {message.id} vetoed by a before behavior")
            self.state.record_filtered()
            return ProcessResult(
                status="vetoed",
                send_options=context.send_options,
                before_stopped=before_stopped,
            )

        try:
            response = await self._generator.generate(context)
        except Exception as e:
            self.state.record_error()
            raise GenerationError(
                f"Failed to generate response for message {message.id}: {e}"
            ) from e

        context.response = response or None

        after_stopped = await self._chain.run(
            self._registry.get_after_behaviors(), context, "after"
        )

        if not context.response:
            logger.debug(f"No response generated for message {message.id}")
            self.state.record_ok()
            return ProcessResult(
                status="no_response",
                send_options=context.send_options,
                before_stopped=before_stopped,
                after_stopped=after_stopped,
            )

        await self._dispatch(context)
        self.state.record_ok()

        return ProcessResult(
            status="sent",
            send_options=context.send_options,
            response=context.response,
            before_stopped=before_stopped,
            after_stopped=after_stopped,
        )

    async def _dispatch(self, context: BehaviorContext) -> None:
        """Send context.response honoring the final send options."""
        options = context.send_options
        content_type = options.content_type or ContentType.TEXT

        if options.threaded:
            await context.conversation.send(
                Reply(
                    reference=context.message.id,
                    content=context.response,
                    content_type=content_type,
                ),
                content_type=ContentType.REPLY,
                metadata=options.metadata,
            )
            logger.debug(f"Sent threaded reply to message {context.message.id}")
        else:
            await context.conversation.send(
                context.response,
                content_type=content_type,
                metadata=options.metadata,
            )
            logger.debug(f"Sent response to conversation {context.conversation.id}")
