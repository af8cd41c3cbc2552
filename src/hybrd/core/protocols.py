"""Core protocols for the hybrd agent runtime."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from starlette.applications import Starlette

    from hybrd.core.types import BehaviorContext, Phase


@runtime_checkable
class Conversation(Protocol):
    """
    Conversation handle supplied by the messaging network.

    Implementations must honor `content_type="reply"` by posting the Reply
    into the referenced message's thread.
    """

    id: str

    @property
    def is_group(self) -> bool: ...

    async def send(
        self,
        content: Any,
        content_type: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Any:
        """Send content to the conversation."""
        ...


@runtime_checkable
class MessagingClient(Protocol):
    """Messaging network client (identity + conversation lookup)."""

    inbox_id: str

    async def get_conversation(self, conversation_id: str) -> Conversation | None:
        """Look up a conversation by id, or None if unknown."""
        ...


@runtime_checkable
class Generator(Protocol):
    """
    Produces the agent's response for one message.

    The model call itself lives outside the SDK. SDK ships AnthropicGenerator.
    """

    async def generate(self, context: "BehaviorContext") -> str | None:
        """
        Generate a response.

        Args:
            context: Behavior context after the pre-response phase

        Returns:
            Response text, or None/"" when there is nothing to send
        """
        ...


@runtime_checkable
class ChainObserver(Protocol):
    """Receives diagnostics from the execution chain."""

    def behavior_failed(
        self, behavior_id: str, phase: "Phase", error: BaseException
    ) -> None:
        """A behavior hook raised. The chain has absorbed the error."""
        ...

    def chain_stopped(self, phase: "Phase", executed: int, total: int) -> None:
        """A behavior halted the phase before every behavior ran."""
        ...


@runtime_checkable
class Plugin(Protocol):
    """
    Extends the agent's HTTP server with routes or middleware.

    `apply` receives the Starlette app and the plugin context (the agent).
    """

    name: str
    description: str

    async def apply(self, app: "Starlette", context: Any | None = None) -> None:
        """Mount the plugin onto the app."""
        ...
