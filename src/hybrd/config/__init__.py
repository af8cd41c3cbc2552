"""Configuration loading."""

from hybrd.config.loader import AgentSettings, get_config_path, load_agent_config

__all__ = ["AgentSettings", "get_config_path", "load_agent_config"]
