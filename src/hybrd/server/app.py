"""HTTP server for hybrd agents."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Iterable

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from hybrd.core.protocols import Plugin
from hybrd.server.plugins import PluginRegistry

if TYPE_CHECKING:
    from hybrd.agent import Agent

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8454


def create_app(agent: "Agent") -> Starlette:
    """Base app: GET /health and JSON 404s. No plugins applied."""

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "service": agent.name})

    async def not_found(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse({"error": "Not found"}, status_code=404)

    return Starlette(
        routes=[Route("/health", health, methods=["GET"])],
        exception_handlers={404: not_found},
    )


async def build_app(agent: "Agent", plugins: Iterable[Plugin] = ()) -> Starlette:
    """
    Build the agent's app and apply plugins with the agent as context.

    Raises:
        ConfigurationError: If a plugin cannot be applied
    """
    app = create_app(agent)
    registry = PluginRegistry()
    for plugin in plugins:
        registry.register(plugin)
    await registry.apply_all(app, agent)
    return app


class AgentServer:
    """Serves a Starlette app with uvicorn as a background task."""

    def __init__(self, app: Starlette, host: str = "0.0.0.0", port: int = DEFAULT_PORT):
        self.app = app
        self.host = host
        self.port = port
        self._server: Any = None
        self._server_task: asyncio.Task[Any] | None = None

    @property
    def is_running(self) -> bool:
        return self._server_task is not None and not self._server_task.done()

    async def start(self) -> None:
        """Start serving in the background."""
        import uvicorn

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level="warning",
        )
        self._server = uvicorn.Server(config)

        logger.info(f"Starting agent server on {self.host}:{self.port}")
        self._server_task = asyncio.create_task(self._server.serve())

    async def serve(self) -> None:
        """Start and block until the server exits."""
        await self.start()
        if self._server_task is not None:
            await self._server_task

    async def stop(self) -> None:
        """Stop the server."""
        if self._server is not None:
            self._server.should_exit = True
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
            self._server_task = None
            logger.info("Agent server stopped")
