"""pelletgrab/agents — Agent interface, named actions, and programmed agents."""

from pelletgrab.agents.actions import (
    ACTION_LEFT,
    ACTION_NAMES,
    ACTION_NOOP,
    ACTION_RIGHT,
    axis_from_keys,
    parse_action,
)
from pelletgrab.agents.base import Agent
from pelletgrab.agents.hold import HoldLeftAgent, HoldRightAgent
from pelletgrab.agents.idle import IdleAgent
from pelletgrab.agents.keyboard import KeyboardAgent
from pelletgrab.agents.registry import AGENT_REGISTRY, resolve_agent
from pelletgrab.agents.scripted import ScriptedAgent
from pelletgrab.agents.seek import SeekPelletAgent

__all__ = [
    "Agent",
    "ACTION_LEFT",
    "ACTION_NOOP",
    "ACTION_RIGHT",
    "ACTION_NAMES",
    "axis_from_keys",
    "parse_action",
    "IdleAgent",
    "HoldRightAgent",
    "HoldLeftAgent",
    "SeekPelletAgent",
    "ScriptedAgent",
    "KeyboardAgent",
    "AGENT_REGISTRY",
    "resolve_agent",
]
