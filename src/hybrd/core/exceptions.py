"""Exceptions raised by the hybrd SDK."""


class HybrdError(Exception):
    """Base class for SDK errors."""


class ConfigurationError(HybrdError):
    """Agent or plugin is misconfigured. Raised at startup, never per message."""


class FilterEvaluationError(HybrdError):
    """A message filter raised instead of returning a boolean."""


class GenerationError(HybrdError):
    """The response generator failed for a message."""


class ChainError(HybrdError):
    """A behavior misused the chain continuation (e.g. advanced twice)."""
