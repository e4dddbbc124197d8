"""pelletgrab/agents/keyboard.py — KeyboardAgent: human control path.

Reads the left/right arrow keys as a raw horizontal axis and returns it
as the action. The result goes through the same step() call as every
other agent.

By default keys are polled from Pyxel, so a Pyxel app must be running
(see pelletgrab.play). Pass *key_source* to read keys from elsewhere.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from pelletgrab.agents.actions import axis_from_keys

KeySource = Callable[[], tuple[bool, bool]]


def pyxel_arrow_keys() -> tuple[bool, bool]:
    """(left_held, right_held) from the running Pyxel app."""
    import pyxel

    return pyxel.btn(pyxel.KEY_LEFT), pyxel.btn(pyxel.KEY_RIGHT)


class KeyboardAgent:
    """Agent driven by a human holding the arrow keys."""

    def __init__(self, key_source: KeySource | None = None) -> None:
        self.key_source = key_source or pyxel_arrow_keys

    def act(self, obs: np.ndarray) -> float:
        left, right = self.key_source()
        return axis_from_keys(left, right)

    def reset(self) -> None:
        pass
