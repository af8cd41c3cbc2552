"""
Core types for the hybrd behavior pipeline.

A Behavior is a named interceptor with two optional hook slots, one for
the pre-response phase and one for the post-response phase. Every inbound
message gets a fresh BehaviorContext which both phases share, so anything a
pre-response behavior writes to `send_options` is still there at dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Literal

if TYPE_CHECKING:
    from hybrd.core.protocols import Conversation, MessagingClient
    from hybrd.messaging.types import InboundMessage, Sender

Phase = Literal["before", "after"]


class ChainSignal(Enum):
    """Optional hook return value. Only meaningful with auto-advance chains."""

    CONTINUE = "continue"
    STOP = "stop"


# Hook receives the shared context and may call `await context.next()`
Hook = Callable[["BehaviorContext"], Awaitable["ChainSignal | None"]]
Advance = Callable[[], Awaitable[None]]


@dataclass
class BehaviorConfig:
    """Configuration carried by a behavior."""

    enabled: bool = True
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Behavior:
    """
    Interceptor registered with a BehaviorRegistry.

    Built once by a factory function (react_with, threaded_reply, ...).
    Only `config.enabled` is expected to change after creation.
    """

    id: str
    config: BehaviorConfig = field(default_factory=BehaviorConfig)
    before: Hook | None = None
    after: Hook | None = None

    def hook_for(self, phase: Phase) -> Hook | None:
        """Return the hook for a phase, if this behavior defines one."""
        return self.before if phase == "before" else self.after


@dataclass
class SendOptions:
    """
    Delivery options accumulated across both phases.

    Fields are last-write-wins; nothing in the pipeline clears them.
    """

    threaded: bool | None = None
    content_type: str | None = None
    filtered: bool | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Set fields only (mirrors how the options are reported)."""
        return {
            key: value
            for key, value in (
                ("threaded", self.threaded),
                ("content_type", self.content_type),
                ("filtered", self.filtered),
                ("metadata", self.metadata),
            )
            if value is not None
        }


@dataclass
class AgentRuntime:
    """Runtime objects supplied by the messaging network for one message."""

    conversation: "Conversation"
    message: "InboundMessage"
    sender: "Sender"
    client: "MessagingClient | None" = None


@dataclass
class BehaviorContext:
    """
    Per-message mutable context passed through the behavior chain.

    Behaviors receive a reference for the duration of their hook call and
    must not keep it afterwards.
    """

    runtime: AgentRuntime
    send_options: SendOptions = field(default_factory=SendOptions)
    response: str | None = None
    next: Advance | None = None
    stopped: bool = False

    @property
    def conversation(self) -> "Conversation":
        return self.runtime.conversation

    @property
    def message(self) -> "InboundMessage":
        return self.runtime.message

    @property
    def sender(self) -> "Sender":
        return self.runtime.sender

    @property
    def client(self) -> "MessagingClient | None":
        return self.runtime.client

    async def advance(self) -> None:
        """Call `next()` if the chain has installed one."""
        if self.next is not None:
            await self.next()
