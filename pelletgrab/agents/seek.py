"""pelletgrab/agents/seek.py — SeekPelletAgent: steer toward the observed pellet.

Reads agent and target x straight from the observation vector. A
hand-written oracle, useful as the upper bound in scenarios.
"""

from __future__ import annotations

import numpy as np

from pelletgrab.agents.actions import ACTION_LEFT, ACTION_NOOP, ACTION_RIGHT
from pelletgrab.observation import agent_x, target_x


class SeekPelletAgent:
    """Agent that moves toward the target until within *deadband*."""

    def __init__(self, deadband: float = 0.0) -> None:
        self.deadband = float(deadband)

    def act(self, obs: np.ndarray) -> float:
        gap = target_x(obs) - agent_x(obs)
        if gap > self.deadband:
            return ACTION_RIGHT
        if gap < -self.deadband:
            return ACTION_LEFT
        return ACTION_NOOP

    def reset(self) -> None:
        pass
