"""Tests for Agent compositor."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hybrd.agent import Agent
from hybrd.behaviors import ExecutionChain, react_with, threaded_reply
from hybrd.filters import is_text
from hybrd.runtime import MessageProcessor
from hybrd.testing import FakeGenerator, message_stream


@pytest.fixture
def mock_processor():
    """Create mock MessageProcessor."""
    processor = MagicMock(spec=MessageProcessor)
    processor.process = AsyncMock()
    return processor


class TestInitialization:
    """Tests for Agent initialization."""

    def test_full_composition(self, mock_processor, client):
        """Should accept a processor and client."""
        agent = Agent(name="bot", processor=mock_processor, client=client, api_key="k")

        assert agent.processor is mock_processor
        assert agent.client is client
        assert agent.api_key == "k"
        assert agent.name == "bot"

    def test_create_registers_behaviors_in_order(self):
        """Should build a registry holding the given behaviors."""
        agent = Agent.create(
            name="bot",
            generator=FakeGenerator(),
            behaviors=[react_with("👀"), threaded_reply()],
        )

        assert [b.id for b in agent.registry.get_all()] == ["react-with-👀", "threaded-reply"]

    def test_create_passes_chain_and_filter(self):
        chain = ExecutionChain(auto_advance=True)
        agent = Agent.create(
            name="bot", generator=FakeGenerator(), chain=chain, message_filter=is_text
        )

        assert agent.registry.chain is chain

    def test_agents_do_not_share_registries(self):
        first = Agent.create(name="a", generator=FakeGenerator(), behaviors=[react_with("👀")])
        second = Agent.create(name="b", generator=FakeGenerator())

        assert len(first.registry) == 1
        assert len(second.registry) == 0


class TestProcessing:
    """Tests for message handling through the agent."""

    async def test_process_delegates(self, mock_processor, runtime):
        agent = Agent(name="bot", processor=mock_processor)

        await agent.process(runtime)

        mock_processor.process.assert_awaited_once_with(runtime)

    async def test_listener_feeds_processor(self, client, conversation):
        from hybrd.messaging.types import IncomingMessage, Sender
        from hybrd.testing import make_message

        agent = Agent.create(name="bot", generator=FakeGenerator(response="hey"), client=client)
        incoming = IncomingMessage(
            conversation=conversation,
            message=make_message("hi"),
            sender=Sender(inbox_id="user-inbox"),
        )

        listener = await agent.start_listener(message_stream([incoming]))
        await listener.join()
        await agent.stop()

        assert [s["content"] for s in conversation.sent] == ["hey"]


class TestServer:
    """Tests for server lifecycle."""

    async def test_start_and_stop_server(self):
        agent = Agent.create(name="bot", generator=FakeGenerator())

        with patch("hybrd.server.app.AgentServer.start", new_callable=AsyncMock) as start, patch(
            "hybrd.server.app.AgentServer.stop", new_callable=AsyncMock
        ) as stop:
            await agent.start_server(port=9999)
            start.assert_awaited_once()

            await agent.stop_server()
            stop.assert_awaited_once()

    async def test_listen_stops_server_on_exit(self):
        agent = Agent.create(name="bot", generator=FakeGenerator())

        with patch(
            "hybrd.server.app.AgentServer.serve", new_callable=AsyncMock
        ) as serve, patch(
            "hybrd.server.app.AgentServer.stop", new_callable=AsyncMock
        ) as stop:
            await agent.listen(port=9999)

        serve.assert_awaited_once()
        stop.assert_awaited_once()
