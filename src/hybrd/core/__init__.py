"""Core types, protocols and exceptions."""

from hybrd.core.exceptions import (
    ChainError,
    ConfigurationError,
    FilterEvaluationError,
    GenerationError,
    HybrdError,
)
from hybrd.core.protocols import (
    ChainObserver,
    Conversation,
    Generator,
    MessagingClient,
    Plugin,
)
from hybrd.core.types import (
    AgentRuntime,
    Behavior,
    BehaviorConfig,
    BehaviorContext,
    ChainSignal,
    Hook,
    Phase,
    SendOptions,
)

__all__ = [
    "AgentRuntime",
    "Behavior",
    "BehaviorConfig",
    "BehaviorContext",
    "ChainError",
    "ChainObserver",
    "ChainSignal",
    "ConfigurationError",
    "Conversation",
    "FilterEvaluationError",
    "GenerationError",
    "Generator",
    "Hook",
    "HybrdError",
    "MessagingClient",
    "Phase",
    "Plugin",
    "SendOptions",
]
