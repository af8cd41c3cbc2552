"""Testing utilities for hybrd agents."""

from hybrd.testing.fakes import (
    FakeConversation,
    FakeGenerator,
    FakeMessagingClient,
    make_message,
    make_runtime,
    message_stream,
)

__all__ = [
    "FakeConversation",
    "FakeGenerator",
    "FakeMessagingClient",
    "make_message",
    "make_runtime",
    "message_stream",
]
