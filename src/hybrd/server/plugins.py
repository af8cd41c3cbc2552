"""
Server plugins - extend the agent's Starlette app.

A plugin is anything with `name`, `description` and
`async apply(app, context)`; the context passed by the agent is the agent
itself.
"""

from __future__ import annotations

import hmac
import logging
from typing import Any, Sequence

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import BaseRoute, Mount, Route

from hybrd.core.exceptions import ConfigurationError
from hybrd.core.protocols import Plugin
from hybrd.events.types import EVENT_ENDPOINT, BlockchainEvent

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Plugins keyed by name, applied in registration order."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}

    def register(self, plugin: Plugin) -> None:
        """
        Register a plugin.

        Raises:
            ConfigurationError: If a plugin with the same name exists
        """
        if plugin.name in self._plugins:
            raise ConfigurationError(f'Plugin "{plugin.name}" is already registered')
        self._plugins[plugin.name] = plugin

    def unregister(self, name: str) -> bool:
        """Remove a plugin. Returns False if it was not registered."""
        return self._plugins.pop(name, None) is not None

    def get(self, name: str) -> Plugin | None:
        return self._plugins.get(name)

    def get_all(self) -> list[Plugin]:
        return list(self._plugins.values())

    def has(self, name: str) -> bool:
        return name in self._plugins

    async def apply_all(self, app: Starlette, context: Any | None = None) -> None:
        """Apply every plugin. The first failure is logged and re-raised."""
        for plugin in self.get_all():
            try:
                logger.debug(f"Applying plugin: {plugin.name}")
                await plugin.apply(app, context)
                logger.info(f"Plugin applied: {plugin.name}")
            except Exception as e:
                logger.error(f"Failed to apply plugin {plugin.name}: {e}")
                raise

    def clear(self) -> None:
        self._plugins.clear()

    @property
    def size(self) -> int:
        return len(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)


class RoutePlugin:
    """Mounts a group of routes under a path prefix."""

    def __init__(
        self,
        name: str,
        path: str,
        routes: Sequence[BaseRoute],
        description: str | None = None,
    ):
        self.name = name
        self.path = path
        self.routes = list(routes)
        self.description = description or f"Mounts routes at {path}"

    async def apply(self, app: Starlette, context: Any | None = None) -> None:
        app.router.routes.append(Mount(self.path, routes=self.routes))


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


class EventsPlugin:
    """
    Receives forwarded events on POST /blockchain-event.

    Requires the agent as context: events are handed to
    `context.handle_event(event)` and, when the agent has an api key,
    requests must carry it as a bearer token.

    Handler failures (including generation errors) answer 500, which the
    EventForwarder retries. Each retry runs the whole pipeline again, so
    before-phase side effects such as react_with reactions repeat once per
    attempt.
    """

    name = "blockchain-events"
    description = "Receives blockchain events forwarded to the agent"

    async def apply(self, app: Starlette, context: Any | None = None) -> None:
        if context is None or not callable(getattr(context, "handle_event", None)):
            raise ConfigurationError(
                f"Plugin {self.name} requires the agent as context"
            )
        agent = context

        async def handle(request: Request) -> JSONResponse:
            api_key = getattr(agent, "api_key", None)
            if api_key:
                auth = request.headers.get("authorization", "").encode()
                if not hmac.compare_digest(auth, f"Bearer {api_key}".encode()):
                    return _error("Unauthorized", 401)

            try:
                event = BlockchainEvent.model_validate(await request.json())
            except (ValidationError, ValueError):
                return _error("Invalid event format. Expected { type, data }", 400)

            logger.info(f"Processing blockchain event: {event.type}")
            try:
                await agent.handle_event(event)
            except Exception as e:
                logger.error(f"Error processing blockchain event: {e}", exc_info=True)
                return _error("Failed to process blockchain event", 500)

            return JSONResponse(
                {
                    "success": True,
                    "message": f"Event {event.type} processed successfully",
                }
            )

        app.router.routes.append(Route(EVENT_ENDPOINT, handle, methods=["POST"]))
