"""
Pytest fixtures for hybrd SDK tests.

Uses the fakes from hybrd.testing so pipeline tests need no network:
- conversation: FakeConversation recording every send
- client: FakeMessagingClient knowing that conversation
- runtime: AgentRuntime for a plain text message from another user
"""

from unittest.mock import MagicMock

import pytest

from hybrd.behaviors import BehaviorRegistry, ExecutionChain
from hybrd.core.types import BehaviorContext
from hybrd.testing import (
    FakeConversation,
    FakeGenerator,
    FakeMessagingClient,
    make_runtime,
)


@pytest.fixture
def conversation() -> FakeConversation:
    return FakeConversation(id="conv-1")


@pytest.fixture
def client(conversation) -> FakeMessagingClient:
    return FakeMessagingClient(inbox_id="agent-inbox", conversations=[conversation])


@pytest.fixture
def runtime(conversation, client):
    return make_runtime(
        "hello agent", conversation=conversation, client=client, message_id="msg-1"
    )


@pytest.fixture
def context(runtime) -> BehaviorContext:
    """Fresh behavior context for one message."""
    return BehaviorContext(runtime=runtime)


@pytest.fixture
def observer() -> MagicMock:
    """ChainObserver recording diagnostics."""
    return MagicMock(spec=["behavior_failed", "chain_stopped"])


@pytest.fixture
def registry(observer) -> BehaviorRegistry:
    return BehaviorRegistry(chain=ExecutionChain(observer=observer))


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator(response="Hello from the agent")
