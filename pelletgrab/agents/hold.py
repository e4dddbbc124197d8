"""pelletgrab/agents/hold.py — HoldRightAgent and HoldLeftAgent.

Constant-direction baselines. Each grabs the pellet when it sits on its
side and runs into the wall on that side otherwise.
"""

from __future__ import annotations

import numpy as np

from pelletgrab.agents.actions import ACTION_LEFT, ACTION_RIGHT


class HoldRightAgent:
    """Agent that holds right every step."""

    def act(self, obs: np.ndarray) -> float:
        return ACTION_RIGHT

    def reset(self) -> None:
        pass


class HoldLeftAgent:
    """Agent that holds left every step."""

    def act(self, obs: np.ndarray) -> float:
        return ACTION_LEFT

    def reset(self) -> None:
        pass
