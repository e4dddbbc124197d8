"""pelletgrab/agents/base.py — Agent protocol.

All action sources (programmed, human, or an external policy) conform to
this interface and reach the environment through the same step() call.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Agent(Protocol):
    """Anything that maps observations to actions."""

    def act(self, obs: np.ndarray) -> float:
        """Given an observation vector, return a continuous action."""
        ...

    def reset(self) -> None:
        """Called at episode start. Reset internal state if any."""
        ...
