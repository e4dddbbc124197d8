"""pelletgrab/agents/idle.py — IdleAgent: always returns ACTION_NOOP.

Null baseline: never reaches anything, so only a step cap ends its episodes.
"""

from __future__ import annotations

import numpy as np

from pelletgrab.agents.actions import ACTION_NOOP


class IdleAgent:
    """Agent that does nothing every step."""

    def act(self, obs: np.ndarray) -> float:
        return ACTION_NOOP

    def reset(self) -> None:
        pass
