"""Tests for PluginRegistry and RoutePlugin."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from hybrd.core.exceptions import ConfigurationError
from hybrd.server import PluginRegistry, RoutePlugin, create_app
from hybrd.testing import FakeGenerator
from hybrd.agent import Agent


def make_plugin(name: str, apply=None) -> MagicMock:
    plugin = MagicMock()
    plugin.name = name
    plugin.description = f"{name} plugin"
    plugin.apply = apply or AsyncMock()
    return plugin


class TestPluginRegistry:
    """Registration bookkeeping."""

    def test_register_and_lookup(self):
        registry = PluginRegistry()
        plugin = make_plugin("a")

        registry.register(plugin)

        assert registry.has("a") is True
        assert registry.get("a") is plugin
        assert registry.get("missing") is None
        assert registry.size == 1

    def test_duplicate_name_rejected(self):
        registry = PluginRegistry()
        registry.register(make_plugin("a"))

        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register(make_plugin("a"))

    def test_unregister(self):
        registry = PluginRegistry()
        registry.register(make_plugin("a"))

        assert registry.unregister("a") is True
        assert registry.unregister("a") is False
        assert registry.size == 0

    def test_get_all_and_clear(self):
        registry = PluginRegistry()
        registry.register(make_plugin("a"))
        registry.register(make_plugin("b"))

        assert [p.name for p in registry.get_all()] == ["a", "b"]
        registry.clear()
        assert registry.get_all() == []

    @pytest.mark.asyncio
    async def test_apply_all_in_order_with_context(self):
        order: list[str] = []
        registry = PluginRegistry()
        for name in ("a", "b"):
            registry.register(
                make_plugin(name, AsyncMock(side_effect=lambda app, ctx, n=name: order.append(n)))
            )
        app, context = MagicMock(), object()

        await registry.apply_all(app, context)

        assert order == ["a", "b"]
        registry.get("a").apply.assert_awaited_once_with(app, context)

    @pytest.mark.asyncio
    async def test_apply_all_reraises(self):
        registry = PluginRegistry()
        registry.register(make_plugin("bad", AsyncMock(side_effect=RuntimeError("nope"))))
        later = make_plugin("later")
        registry.register(later)

        with pytest.raises(RuntimeError):
            await registry.apply_all(MagicMock())

        later.apply.assert_not_awaited()


class TestRoutePlugin:
    """Mounting extra routes."""

    @pytest.mark.asyncio
    async def test_routes_mounted_under_path(self):
        async def ping(request):
            return PlainTextResponse("pong")

        agent = Agent.create(name="a", generator=FakeGenerator())
        app = create_app(agent)
        await RoutePlugin("ping", "/api", [Route("/ping", ping)]).apply(app, agent)

        response = TestClient(app).get("/api/ping")

        assert response.status_code == 200
        assert response.text == "pong"
