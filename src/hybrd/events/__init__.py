"""Event forwarding into an agent's HTTP entry point."""

from hybrd.events.forwarder import (
    EventForwarder,
    backoff_delay,
    create_event_forwarder,
    derive_agent_url,
)
from hybrd.events.types import EVENT_ENDPOINT, BlockchainEvent, ForwarderConfig

__all__ = [
    "EVENT_ENDPOINT",
    "BlockchainEvent",
    "EventForwarder",
    "ForwarderConfig",
    "backoff_delay",
    "create_event_forwarder",
    "derive_agent_url",
]
