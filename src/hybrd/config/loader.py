"""
Agent configuration management utilities.

Loads agent settings from agent_config.yaml at the project root, with
AGENT_URL, AGENT_API_KEY and PORT environment overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from hybrd.events.forwarder import derive_agent_url
from hybrd.events.types import ForwarderConfig
from hybrd.server.app import DEFAULT_PORT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentSettings:
    """Resolved settings for one agent."""

    name: str
    agent_url: str
    api_key: str | None
    port: int
    forwarder: ForwarderConfig


def get_config_path() -> Path:
    """
    Get the path to the agent configuration file.

    Looks for agent_config.yaml in the current working directory (project root).
    """
    return Path(os.getcwd()) / "agent_config.yaml"


def load_agent_config(agent_key: str) -> AgentSettings:
    """
    Load agent settings from YAML file at project root.

    Example agent_config.yaml:
        basic_agent:
          name: basic-agent
          agent_url: https://agent.example.com
          api_key: secret
          port: 8454
          forwarder:
            max_retries: 3
            timeout_ms: 10000

    Args:
        agent_key: The key identifying the agent in the config file

    Returns:
        AgentSettings

    Raises:
        FileNotFoundError: If agent_config.yaml doesn't exist
        ValueError: If the agent is missing or a field is invalid
        RuntimeError: If the file cannot be read or parsed
    """
    config_path = get_config_path()
    logger.debug(f"Loading config from: {config_path}")

    if not config_path.exists():
        raise FileNotFoundError(
            f"agent_config.yaml not found at {config_path}. "
            "Copy agent_config.yaml.example to agent_config.yaml and configure your agents."
        )

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}

        agent_config = config.get(agent_key)
        if not isinstance(agent_config, dict) or not agent_config:
            raise ValueError(
                f"Agent '{agent_key}' not found in {config_path}. "
                f"Please add the agent configuration."
            )

        name = agent_config.get("name")
        if not name:
            raise ValueError(
                f"Missing required fields for agent '{agent_key}': name. "
                f"Please add it to {config_path}"
            )

        agent_url = derive_agent_url(
            os.environ.get("AGENT_URL") or agent_config.get("agent_url")
        )
        api_key = os.environ.get("AGENT_API_KEY") or agent_config.get("api_key")

        raw_port = os.environ.get("PORT") or agent_config.get("port") or DEFAULT_PORT
        try:
            port = int(raw_port)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port for agent '{agent_key}': {raw_port!r}")

        forwarder_config = agent_config.get("forwarder") or {}
        forwarder = ForwarderConfig(
            agent_url=agent_url,
            api_key=api_key,
            max_retries=int(forwarder_config.get("max_retries", 3)),
            timeout_ms=int(forwarder_config.get("timeout_ms", 10000)),
        )

        return AgentSettings(
            name=str(name),
            agent_url=agent_url,
            api_key=api_key,
            port=port,
            forwarder=forwarder,
        )
    except ValueError:
        raise
    except Exception as e:
        raise RuntimeError(f"Error loading agent config: {e}")
