"""Built-in generators. Requires the `anthropic` extra."""

from hybrd.adapters.anthropic import AnthropicGenerator

__all__ = ["AnthropicGenerator"]
