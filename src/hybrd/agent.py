"""Agent - composes behaviors, generator, processor and HTTP server."""

from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING, AsyncIterable, Iterable

from hybrd.behaviors.chain import ExecutionChain
from hybrd.behaviors.registry import BehaviorRegistry
from hybrd.core.protocols import Generator, MessagingClient, Plugin
from hybrd.core.types import AgentRuntime, Behavior
from hybrd.events.types import BlockchainEvent
from hybrd.filters import Filter
from hybrd.messaging.types import InboundMessage, IncomingMessage, Sender
from hybrd.runtime.listener import MessageListener
from hybrd.runtime.processor import MessageProcessor, ProcessResult
from hybrd.server.app import DEFAULT_PORT, AgentServer, build_app
from hybrd.server.plugins import PluginRegistry

if TYPE_CHECKING:
    from starlette.applications import Starlette

logger = logging.getLogger(__name__)

EVENT_SENDER_ID = "blockchain-event"


class Agent:
    """
    Composes the behavior registry, message processor and server plugins.

    Two ways to create:

    1. Full composition (power users):
        agent = Agent(
            name="my-agent",
            processor=MessageProcessor(registry, generator),
            client=client,
        )

    2. Simple factory (most users):
        agent = Agent.create(
            name="my-agent",
            generator=AnthropicGenerator(),
            behaviors=[react_with("👀"), threaded_reply()],
            client=client,
        )
        agent.use(EventsPlugin())
        await agent.listen(port=8454)
    """

    def __init__(
        self,
        name: str,
        processor: MessageProcessor,
        client: MessagingClient | None = None,
        api_key: str | None = None,
    ):
        self._name = name
        self._processor = processor
        self._client = client
        self._api_key = api_key
        self._plugins = PluginRegistry()
        self._server: AgentServer | None = None
        self._listener: MessageListener | None = None

    @classmethod
    def create(
        cls,
        name: str,
        generator: Generator,
        behaviors: Iterable[Behavior] = (),
        client: MessagingClient | None = None,
        api_key: str | None = None,
        message_filter: Filter | None = None,
        chain: ExecutionChain | None = None,
    ) -> "Agent":
        """Create an agent with a fresh registry holding `behaviors`."""
        registry = BehaviorRegistry(chain=chain)
        registry.register_all(behaviors)
        processor = MessageProcessor(
            registry, generator, message_filter=message_filter
        )
        return cls(name=name, processor=processor, client=client, api_key=api_key)

    @property
    def name(self) -> str:
        return self._name

    @property
    def api_key(self) -> str | None:
        return self._api_key

    @property
    def client(self) -> MessagingClient | None:
        return self._client

    @property
    def processor(self) -> MessageProcessor:
        return self._processor

    @property
    def registry(self) -> BehaviorRegistry:
        return self._processor.registry

    @property
    def plugins(self) -> PluginRegistry:
        return self._plugins

    def use(self, plugin: Plugin) -> "Agent":
        """Register a server plugin. Returns self for chaining."""
        self._plugins.register(plugin)
        return self

    async def process(self, runtime: AgentRuntime) -> ProcessResult:
        """Run the pipeline for one message."""
        return await self._processor.process(runtime)

    async def handle_event(self, event: BlockchainEvent) -> ProcessResult | None:
        """
        Run the pipeline for a forwarded event.

        The event becomes a synthetic text message in the conversation named
        by `data["conversationId"]`. Events without a resolvable
        conversation are only logged.
        """
        conversation_id = event.data.get("conversationId")
        if not conversation_id or self._client is None:
            logger.info(f"Event {event.type} has no target conversation, acknowledged")
            return None

        conversation = await self._client.get_conversation(str(conversation_id))
        if conversation is None:
            logger.warning(
                f"Event {event.type} targets unknown conversation {conversation_id}"
            )
            return None

        message = InboundMessage(
            id=f"event-{uuid.uuid4()}",
            conversation_id=conversation.id,
            content=f"Blockchain event {event.type}: {json.dumps(event.data, default=str)}",
            sender_inbox_id=EVENT_SENDER_ID,
            metadata={"event_type": event.type, "event_data": event.data},
        )
        runtime = AgentRuntime(
            conversation=conversation,
            message=message,
            sender=Sender(inbox_id=EVENT_SENDER_ID, name="blockchain"),
            client=self._client,
        )
        return await self._processor.process(runtime)

    async def build_app(self) -> "Starlette":
        """Build the Starlette app with every registered plugin applied."""
        return await build_app(self, self._plugins.get_all())

    async def start_server(
        self, host: str = "0.0.0.0", port: int = DEFAULT_PORT
    ) -> None:
        """Start the HTTP server in the background."""
        self._server = AgentServer(await self.build_app(), host=host, port=port)
        await self._server.start()

    async def stop_server(self) -> None:
        if self._server is not None:
            await self._server.stop()
            self._server = None

    async def listen(self, host: str = "0.0.0.0", port: int = DEFAULT_PORT) -> None:
        """Serve HTTP until interrupted."""
        server = AgentServer(await self.build_app(), host=host, port=port)
        self._server = server
        try:
            await server.serve()
        finally:
            await server.stop()
            self._server = None

    async def start_listener(
        self, messages: AsyncIterable[IncomingMessage | None]
    ) -> MessageListener:
        """Start consuming a message stream in the background."""
        self._listener = MessageListener(self._processor, messages, client=self._client)
        await self._listener.start()
        return self._listener

    async def stop(self) -> None:
        """Stop the listener and the server."""
        if self._listener is not None:
            await self._listener.stop()
            self._listener = None
        await self.stop_server()
