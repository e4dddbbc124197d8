"""pelletgrab/agents/scripted.py — ScriptedAgent: step-indexed timeline playback.

Takes a list of (start_step, end_step, action) tuples and returns the action
for the active window. Actions may be numbers or names ("left", "right",
"noop"). Tracks its own step counter.
"""

from __future__ import annotations

import numpy as np

from pelletgrab.agents.actions import ACTION_NOOP, parse_action


class ScriptedAgent:
    """Agent that plays back a scripted timeline of actions."""

    def __init__(self, timeline: list[tuple[int, int, float | str]]) -> None:
        self.timeline = [
            (int(start), int(end), parse_action(action))
            for start, end, action in timeline
        ]
        self._step: int = 0

    def act(self, obs: np.ndarray) -> float:
        step = self._step
        self._step += 1
        for start, end, action in self.timeline:
            if start <= step < end:
                return action
        return ACTION_NOOP

    def reset(self) -> None:
        self._step = 0
