"""
hybrd SDK - behavior pipelines for messaging agents.

Pipeline:
    MessageProcessor: filter -> before behaviors -> generate -> after behaviors -> dispatch
    BehaviorRegistry: Ordered behaviors for one agent
    ExecutionChain: Runs one phase with explicit next() and error isolation

Behaviors:
    react_with, threaded_reply, filter_messages, rate_limiter, content_filter

Events:
    EventForwarder: Delivers external events to the agent with retry/backoff
    EventsPlugin: Receives them on POST /blockchain-event

Example:
    from hybrd import Agent, EventsPlugin, react_with, threaded_reply
    from hybrd.adapters import AnthropicGenerator

    agent = Agent.create(
        name="my-agent",
        generator=AnthropicGenerator(),
        behaviors=[react_with("👀"), threaded_reply()],
        client=client,
    )
    agent.use(EventsPlugin())
    await agent.listen(port=8454)
"""

from .agent import Agent

from .behaviors import (
    BehaviorRegistry,
    ExecutionChain,
    LoggingChainObserver,
    content_filter,
    filter_messages,
    rate_limiter,
    react_with,
    threaded_reply,
)
from .core import (
    AgentRuntime,
    Behavior,
    BehaviorConfig,
    BehaviorContext,
    ChainError,
    ChainSignal,
    ConfigurationError,
    FilterEvaluationError,
    GenerationError,
    HybrdError,
    SendOptions,
)
from .events import (
    BlockchainEvent,
    EventForwarder,
    ForwarderConfig,
    create_event_forwarder,
)
from .messaging import InboundMessage, IncomingMessage, Reaction, Reply, Sender
from .runtime import MessageListener, MessageProcessor, ProcessResult
from .server import EventsPlugin, PluginRegistry

__version__ = "0.1.0"

__all__ = [
    # Composition
    "Agent",
    # Pipeline
    "BehaviorRegistry",
    "ExecutionChain",
    "LoggingChainObserver",
    "MessageListener",
    "MessageProcessor",
    "ProcessResult",
    # Types
    "AgentRuntime",
    "Behavior",
    "BehaviorConfig",
    "BehaviorContext",
    "ChainSignal",
    "SendOptions",
    "InboundMessage",
    "IncomingMessage",
    "Reaction",
    "Reply",
    "Sender",
    # Behaviors
    "content_filter",
    "filter_messages",
    "rate_limiter",
    "react_with",
    "threaded_reply",
    # Events
    "BlockchainEvent",
    "EventForwarder",
    "ForwarderConfig",
    "create_event_forwarder",
    # Server
    "EventsPlugin",
    "PluginRegistry",
    # Errors
    "ChainError",
    "ConfigurationError",
    "FilterEvaluationError",
    "GenerationError",
    "HybrdError",
]
