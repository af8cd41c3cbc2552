"""
Event forwarder - delivers events to an agent's HTTP server.

Delivery uses bounded retry with capped exponential backoff. 4xx responses
are terminal; 5xx, network errors and timeouts are retried.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable, Mapping

import httpx
from pydantic import ValidationError

from hybrd.events.types import EVENT_ENDPOINT, BlockchainEvent, ForwarderConfig

logger = logging.getLogger(__name__)

DEFAULT_AGENT_URL = "http://localhost:8454"
BACKOFF_BASE_MS = 1000
BACKOFF_CAP_MS = 5000

Sleep = Callable[[float], Awaitable[Any]]


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after failed attempt number `attempt` (1-based)."""
    return min(BACKOFF_BASE_MS * 2 ** (attempt - 1), BACKOFF_CAP_MS) / 1000


def derive_agent_url(url: str | None = None) -> str:
    """
    Resolve the agent base URL.

    Explicit url, then AGENT_URL, then http://localhost:8454. A bare host
    gets an https:// scheme.
    """
    url = url or os.environ.get("AGENT_URL")
    if not url:
        return DEFAULT_AGENT_URL
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url.rstrip("/")


def _failure_reason(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return f"HTTP {response.status_code}: {body['error']}"
    text = response.text.strip()
    return f"HTTP {response.status_code}: {text}" if text else f"HTTP {response.status_code}"


class EventForwarder:
    """
    Forwards events to `<agent_url>/blockchain-event`.

    Example:
        forwarder = EventForwarder(ForwarderConfig(agent_url="http://localhost:8454"))
        ok = await forwarder.forward_event(
            BlockchainEvent(type="blockchain.bet.created", data={"betId": "1"})
        )
    """

    def __init__(
        self,
        config: ForwarderConfig,
        client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._config = config
        self._client = client
        self._sleep = sleep

    @property
    def config(self) -> ForwarderConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return f"{self._config.agent_url.rstrip('/')}{EVENT_ENDPOINT}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        timeout = httpx.Timeout(self._config.timeout_ms / 1000)
        if self._client is not None:
            return await self._client.post(
                self.endpoint, json=body, headers=self._headers(), timeout=timeout
            )
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(
                self.endpoint, json=body, headers=self._headers(), timeout=timeout
            )

    async def forward_event(
        self, event: BlockchainEvent | Mapping[str, Any]
    ) -> bool:
        """
        Deliver one event.

        Returns:
            True if the agent accepted it. Never raises.
        """
        try:
            if not isinstance(event, BlockchainEvent):
                event = BlockchainEvent.model_validate(event)
        except ValidationError as e:
            logger.error(f"Refusing to forward malformed event: {e}")
            return False

        body = event.model_dump()
        max_retries = self._config.max_retries
        timeout = self._config.timeout_ms / 1000

        for attempt in range(1, max_retries + 1):
            try:
                response = await asyncio.wait_for(self._post(body), timeout=timeout)
            except asyncio.TimeoutError:
                reason = f"timed out after {self._config.timeout_ms}ms"
            except httpx.InvalidURL as e:
                logger.error(
                    f"Cannot forward event {event.type} to {self.endpoint}: {e}"
                )
                return False
            except httpx.HTTPError as e:
                reason = str(e) or type(e).__name__
            else:
                if response.is_success:
                    logger.info(
                        f"Forwarded event {event.type} (attempt {attempt}/{max_retries})"
                    )
                    return True
                reason = _failure_reason(response)
                if 400 <= response.status_code < 500:
                    logger.error(
                        f"Event {event.type} rejected, not retrying: {reason}"
                    )
                    return False

            if attempt == max_retries:
                logger.error(
                    f"Failed to forward event {event.type} after {max_retries} "
                    f"attempts: {reason}"
                )
                return False

            delay = backoff_delay(attempt)
            logger.warning(
                f"Forward attempt {attempt}/{max_retries} for {event.type} failed "
                f"({reason}), retrying in {delay:.1f}s"
            )
            await self._sleep(delay)

        return False


def create_event_forwarder(
    agent_url: str | None = None,
    api_key: str | None = None,
    *,
    max_retries: int = 3,
    timeout_ms: int = 10000,
    client: httpx.AsyncClient | None = None,
    sleep: Sleep = asyncio.sleep,
) -> Callable[[str, dict[str, Any]], Awaitable[bool]]:
    """
    Build a `forward(event_type, event_data) -> bool` callable.

    The api key falls back to AGENT_API_KEY.
    """
    forwarder = EventForwarder(
        ForwarderConfig(
            agent_url=derive_agent_url(agent_url),
            api_key=api_key or os.environ.get("AGENT_API_KEY"),
            max_retries=max_retries,
            timeout_ms=timeout_ms,
        ),
        client=client,
        sleep=sleep,
    )

    async def forward(event_type: str, event_data: dict[str, Any]) -> bool:
        return await forwarder.forward_event({"type": event_type, "data": event_data})

    return forward
