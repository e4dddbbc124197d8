"""pelletgrab/rewards.py — Terminal events and the reward policy.

Reward values live here and nowhere else. Movement code reports what
happened; this module decides what it is worth. There is no per-step
shaping: only the step that ends an episode can earn a non-zero reward.
"""

from __future__ import annotations

from enum import Enum

from pelletgrab.config import EnvConfig
from pelletgrab.world import ObjectKind


class TerminalEvent(Enum):
    NONE = "none"
    PELLET_REACHED = "pellet_reached"
    WALL_HIT = "wall_hit"
    STEP_LIMIT = "step_limit"

    @property
    def is_terminal(self) -> bool:
        return self is not TerminalEvent.NONE


EVENT_FOR_KIND: dict[ObjectKind, TerminalEvent] = {
    ObjectKind.PELLET: TerminalEvent.PELLET_REACHED,
    ObjectKind.WALL: TerminalEvent.WALL_HIT,
}


class RewardPolicy:
    """Maps a terminal event to a scalar reward.

    Stateless: the same event always yields the same reward, regardless
    of history. The step limit is a cut-off, not an outcome, and earns 0.

    Usage:
        policy = RewardPolicy.from_config(EnvConfig())
        policy.reward(TerminalEvent.PELLET_REACHED)  # 2.0
    """

    def __init__(self, pellet_reward: float = 2.0, wall_penalty: float = 1.0) -> None:
        self.pellet_reward = float(pellet_reward)
        self.wall_penalty = float(wall_penalty)

    @classmethod
    def from_config(cls, config: EnvConfig) -> RewardPolicy:
        return cls(pellet_reward=config.pellet_reward, wall_penalty=config.wall_penalty)

    def reward(self, event: TerminalEvent) -> float:
        if event is TerminalEvent.PELLET_REACHED:
            return self.pellet_reward
        if event is TerminalEvent.WALL_HIT:
            return -self.wall_penalty
        return 0.0

    def __repr__(self) -> str:
        return (
            f"RewardPolicy(pellet_reward={self.pellet_reward!r}, "
            f"wall_penalty={self.wall_penalty!r})"
        )
