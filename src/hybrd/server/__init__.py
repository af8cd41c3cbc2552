"""Agent HTTP server and plugins."""

from hybrd.server.app import DEFAULT_PORT, AgentServer, build_app, create_app
from hybrd.server.plugins import EventsPlugin, PluginRegistry, RoutePlugin

__all__ = [
    "DEFAULT_PORT",
    "AgentServer",
    "EventsPlugin",
    "PluginRegistry",
    "RoutePlugin",
    "build_app",
    "create_app",
]
