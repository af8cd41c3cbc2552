"""Normalized messaging network types."""

from hybrd.messaging.types import (
    ContentType,
    InboundMessage,
    IncomingMessage,
    Reaction,
    Reply,
    Sender,
)

__all__ = [
    "ContentType",
    "InboundMessage",
    "IncomingMessage",
    "Reaction",
    "Reply",
    "Sender",
]
