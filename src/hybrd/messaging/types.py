"""
Messaging types for hybrd agents.

These are the normalized shapes the messaging network hands to the
pipeline. The network client itself is external; it only has to produce
InboundMessage/Sender values and a Conversation it can send through.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hybrd.core.protocols import Conversation


class ContentType:
    """Content type identifiers understood by the dispatch layer."""

    TEXT = "text"
    REACTION = "reaction"
    REPLY = "reply"
    REMOTE_ATTACHMENT = "remote_attachment"
    GROUP_UPDATED = "group_updated"


@dataclass
class Reaction:
    """Emoji reaction to a previous message."""

    reference: str
    content: str
    action: str = "added"  # "added" | "removed"
    schema: str = "unicode"


@dataclass
class Reply:
    """Reply threaded onto a previous message."""

    reference: str
    content: Any
    content_type: str = ContentType.TEXT


@dataclass
class Sender:
    """Resolved sender of an inbound message."""

    inbox_id: str
    address: str = ""
    name: str = ""
    basename: str | None = None


@dataclass
class InboundMessage:
    """
    Message received from the messaging network (normalized).

    `content` is a string for text, a Reaction for reactions and a Reply for
    replies. Clients may also hand over raw dicts for structured content;
    filters treat anything they cannot read as non-matching.
    """

    id: str
    conversation_id: str
    content: Any
    sender_inbox_id: str
    content_type: str = ContentType.TEXT
    sent_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Best-effort plain text of the message (empty for non-text)."""
        if isinstance(self.content, str):
            return self.content
        if isinstance(self.content, Reply) and isinstance(self.content.content, str):
            return self.content.content
        return ""


@dataclass
class IncomingMessage:
    """A message together with the runtime objects it arrived with."""

    conversation: "Conversation"
    message: InboundMessage
    sender: Sender
