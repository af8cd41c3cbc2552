"""Event forwarding types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

EVENT_ENDPOINT = "/blockchain-event"


class BlockchainEvent(BaseModel):
    """
    Externally sourced event, e.g. an indexed on-chain log.

    Wire format: {"type": "blockchain.bet.created", "data": {...}}
    """

    type: str = Field(min_length=1)
    data: dict[str, Any]


@dataclass(frozen=True)
class ForwarderConfig:
    """
    Event forwarder settings.

    Attributes:
        agent_url: Base URL of the agent's HTTP server
        api_key: Sent as a bearer token when set
        max_retries: Total delivery attempts (at least 1)
        timeout_ms: Per-attempt timeout in milliseconds
    """

    agent_url: str
    api_key: str | None = None
    max_retries: int = 3
    timeout_ms: int = 10000

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0, got {self.timeout_ms}")
