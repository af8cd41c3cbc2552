"""Behaviors - ordered interceptors around the agent's response."""

from hybrd.behaviors.chain import ExecutionChain, LoggingChainObserver
from hybrd.behaviors.content_filter import content_filter
from hybrd.behaviors.filter_messages import filter_messages
from hybrd.behaviors.rate_limiter import rate_limiter
from hybrd.behaviors.react_with import react_with
from hybrd.behaviors.registry import BehaviorRegistry
from hybrd.behaviors.threaded_reply import threaded_reply

__all__ = [
    "BehaviorRegistry",
    "ExecutionChain",
    "LoggingChainObserver",
    "content_filter",
    "filter_messages",
    "rate_limiter",
    "react_with",
    "threaded_reply",
]
