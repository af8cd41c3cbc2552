"""Tests for the agent HTTP app and EventsPlugin."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from starlette.testclient import TestClient

from hybrd.agent import Agent
from hybrd.behaviors import react_with
from hybrd.core.exceptions import ConfigurationError
from hybrd.events import BlockchainEvent, EventForwarder, ForwarderConfig
from hybrd.server import EventsPlugin, build_app, create_app
from hybrd.testing import FakeGenerator


def make_agent(client=None, api_key=None, generator=None) -> Agent:
    return Agent.create(
        name="test-agent",
        generator=generator or FakeGenerator(response="event seen"),
        client=client,
        api_key=api_key,
    )


def asgi_client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://agent.test")


class TestBaseApp:
    """Health and fallback routes."""

    def test_health(self):
        client = TestClient(create_app(make_agent()))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "test-agent"}

    def test_unknown_route_returns_json_404(self):
        client = TestClient(create_app(make_agent()))

        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}


class TestEventsPlugin:
    """POST /blockchain-event."""

    @pytest.mark.asyncio
    async def test_requires_agent_context(self):
        app = create_app(make_agent())

        with pytest.raises(ConfigurationError):
            await EventsPlugin().apply(app, None)

    @pytest.mark.asyncio
    async def test_valid_event_processed(self):
        agent = make_agent()
        agent.handle_event = AsyncMock(return_value=None)
        app = await build_app(agent, [EventsPlugin()])

        async with asgi_client(app) as http:
            response = await http.post(
                "/blockchain-event",
                json={"type": "blockchain.bet.created", "data": {"betId": "1"}},
            )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Event blockchain.bet.created processed successfully",
        }
        event = agent.handle_event.call_args.args[0]
        assert event == BlockchainEvent(type="blockchain.bet.created", data={"betId": "1"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"type": "only-type"},
            {"data": {"x": 1}},
            {"type": "", "data": {}},
            {"type": "t", "data": [1, 2]},
        ],
    )
    async def test_invalid_event_rejected(self, body):
        app = await build_app(make_agent(), [EventsPlugin()])

        async with asgi_client(app) as http:
            response = await http.post("/blockchain-event", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid event format. Expected { type, data }"}

    @pytest.mark.asyncio
    async def test_non_json_body_rejected(self):
        app = await build_app(make_agent(), [EventsPlugin()])

        async with asgi_client(app) as http:
            response = await http.post("/blockchain-event", content=b"not json")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_handler_failure_returns_500(self):
        agent = make_agent()
        agent.handle_event = AsyncMock(side_effect=RuntimeError("db down"))
        app = await build_app(agent, [EventsPlugin()])

        async with asgi_client(app) as http:
            response = await http.post("/blockchain-event", json={"type": "t", "data": {}})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process blockchain event"}

    @pytest.mark.asyncio
    async def test_api_key_enforced(self):
        app = await build_app(make_agent(api_key="secret"), [EventsPlugin()])
        event = {"type": "t", "data": {}}

        async with asgi_client(app) as http:
            missing = await http.post("/blockchain-event", json=event)
            wrong = await http.post(
                "/blockchain-event", json=event, headers={"Authorization": "Bearer nope"}
            )
            right = await http.post(
                "/blockchain-event", json=event, headers={"Authorization": "Bearer secret"}
            )

        assert missing.status_code == 401
        assert missing.json() == {"error": "Unauthorized"}
        assert wrong.status_code == 401
        assert right.status_code == 200


class TestForwarderToAgent:
    """Forwarder delivering into the agent app over ASGI."""

    @pytest.mark.asyncio
    async def test_event_reaches_conversation(self, conversation, client):
        agent = make_agent(client=client, api_key="secret")
        agent.use(EventsPlugin())
        app = await agent.build_app()

        http = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://agent.test"
        )
        forwarder = EventForwarder(
            ForwarderConfig(agent_url="http://agent.test", api_key="secret"),
            client=http,
        )

        async with http:
            ok = await forwarder.forward_event(
                {"type": "blockchain.bet.created", "data": {"conversationId": "conv-1"}}
            )

        assert ok is True
        assert [s["content"] for s in conversation.sent] == ["event seen"]

    @pytest.mark.asyncio
    async def test_generation_failure_returns_500_and_is_retried(self, conversation, client):
        agent = make_agent(client=client, generator=FakeGenerator(error=RuntimeError("x")))
        agent.use(EventsPlugin())
        app = await agent.build_app()
        sleep = AsyncMock()

        http = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://agent.test"
        )
        forwarder = EventForwarder(
            ForwarderConfig(agent_url="http://agent.test", max_retries=2),
            client=http,
            sleep=sleep,
        )

        async with http:
            ok = await forwarder.forward_event(
                {"type": "t", "data": {"conversationId": "conv-1"}}
            )

        assert ok is False
        sleep.assert_awaited_once_with(1.0)

    @pytest.mark.asyncio
    async def test_retried_event_repeats_before_phase(self, conversation, client):
        """Each retry of a failed event runs the before behaviors again."""
        agent = Agent.create(
            name="test-agent",
            generator=FakeGenerator(error=RuntimeError("x")),
            behaviors=[react_with("👀")],
            client=client,
        )
        agent.use(EventsPlugin())
        app = await agent.build_app()

        http = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://agent.test"
        )
        forwarder = EventForwarder(
            ForwarderConfig(agent_url="http://agent.test", max_retries=2),
            client=http,
            sleep=AsyncMock(),
        )

        async with http:
            ok = await forwarder.forward_event(
                {"type": "t", "data": {"conversationId": "conv-1"}}
            )

        assert ok is False
        assert len(conversation.sent_of_type("reaction")) == 2


class TestAgentEvents:
    """Agent.handle_event routing."""

    @pytest.mark.asyncio
    async def test_event_without_conversation_is_acknowledged(self, client):
        agent = make_agent(client=client)

        assert await agent.handle_event(BlockchainEvent(type="t", data={})) is None

    @pytest.mark.asyncio
    async def test_unknown_conversation(self, client):
        agent = make_agent(client=client)

        result = await agent.handle_event(
            BlockchainEvent(type="t", data={"conversationId": "missing"})
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_synthetic_message(self, client, conversation):
        generator = FakeGenerator(response="ok")
        agent = make_agent(client=client, generator=generator)

        result = await agent.handle_event(
            BlockchainEvent(type="blockchain.bet.created", data={"conversationId": "conv-1"})
        )

        assert result.status == "sent"
        message = generator.calls[0].message
        assert message.text.startswith("Blockchain event blockchain.bet.created")
        assert message.metadata["event_type"] == "blockchain.bet.created"

    def test_use_is_chainable_and_rejects_duplicates(self):
        agent = make_agent()
        plugin = MagicMock()
        plugin.name = "p"

        assert agent.use(plugin) is agent
        with pytest.raises(ConfigurationError):
            agent.use(plugin)
