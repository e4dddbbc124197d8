"""pelletgrab/agents/registry.py — Agent name → class mapping.

Used by scenario YAML resolution to instantiate agents by string name.
"""

from __future__ import annotations

from pelletgrab.agents.hold import HoldLeftAgent, HoldRightAgent
from pelletgrab.agents.idle import IdleAgent
from pelletgrab.agents.keyboard import KeyboardAgent
from pelletgrab.agents.scripted import ScriptedAgent
from pelletgrab.agents.seek import SeekPelletAgent

AGENT_REGISTRY: dict[str, type] = {
    "idle": IdleAgent,
    "hold_right": HoldRightAgent,
    "hold_left": HoldLeftAgent,
    "seek_pellet": SeekPelletAgent,
    "scripted": ScriptedAgent,
    "keyboard": KeyboardAgent,
}


def resolve_agent(name: str, params: dict | None = None):
    """Look up an agent class by name and instantiate with optional kwargs.

    Args:
        name: Agent name (key in AGENT_REGISTRY).
        params: Optional kwargs passed to the agent constructor.

    Returns:
        An instantiated agent conforming to the Agent protocol.

    Raises:
        KeyError: If name is not in the registry.
    """
    if name not in AGENT_REGISTRY:
        raise KeyError(f"Unknown agent: {name!r}. Available: {sorted(AGENT_REGISTRY)}")
    cls = AGENT_REGISTRY[name]
    return cls(**(params or {}))
