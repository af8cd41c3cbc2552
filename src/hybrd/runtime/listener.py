"""Message listener - feeds the messaging network's stream into the processor."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterable

from hybrd.core.protocols import MessagingClient
from hybrd.core.types import AgentRuntime
from hybrd.messaging.types import IncomingMessage
from hybrd.runtime.processor import MessageProcessor

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I encountered an error processing your message."


class MessageListener:
    """
    Spawns one task per inbound message.

    Contexts are never shared between tasks and no ordering is kept across
    messages. A message whose processing fails gets a best-effort error
    reply; the listener keeps going.

    Example:
        listener = MessageListener(processor, client.stream(), client=client)
        await listener.start()
        ...
        await listener.stop()
    """

    def __init__(
        self,
        processor: MessageProcessor,
        messages: AsyncIterable[IncomingMessage | None],
        client: MessagingClient | None = None,
    ):
        self._processor = processor
        self._messages = messages
        self._client = client
        self._reader: asyncio.Task[Any] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def is_running(self) -> bool:
        return self._reader is not None and not self._reader.done()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def start(self) -> None:
        """Start reading the stream in the background."""
        if self.is_running:
            return
        self._reader = asyncio.create_task(self._read_loop())
        logger.info("Message listener started")

    async def stop(self) -> None:
        """Cancel the read loop and any in-flight message tasks."""
        tasks = list(self._tasks)
        if self._reader is not None:
            tasks.append(self._reader)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._reader = None
        self._tasks.clear()
        logger.info("Message listener stopped")

    async def run(self) -> None:
        """Consume the whole stream, then wait for in-flight messages."""
        await self._read_loop()
        await self.drain()

    async def join(self) -> None:
        """Wait for the background reader to reach the end of the stream."""
        if self._reader is not None:
            await self._reader
        await self.drain()

    async def drain(self) -> None:
        """Wait until every spawned message task finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _read_loop(self) -> None:
        async for incoming in self._messages:
            if incoming is None:
                continue
            task = asyncio.create_task(self._handle(incoming))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _handle(self, incoming: IncomingMessage) -> None:
        runtime = AgentRuntime(
            conversation=incoming.conversation,
            message=incoming.message,
            sender=incoming.sender,
            client=self._client,
        )
        try:
            result = await self._processor.process(runtime)
            logger.debug(f"Message {incoming.message.id} -> {result.status}")
        except Exception as e:
            logger.error(
                f"Error processing message {incoming.message.id}: {e}", exc_info=True
            )
            await self._send_error_reply(incoming)

    async def _send_error_reply(self, incoming: IncomingMessage) -> None:
        try:
            await incoming.conversation.send(ERROR_REPLY)
        except Exception as e:
            logger.error(f"Failed to send error reply: {e}")
