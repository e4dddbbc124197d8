"""pelletgrab/controller.py — Episode controller (the environment core).

Owns agent and target state for one environment instance and drives the
episode state machine:

    IDLE --reset()--> RUNNING --step()--> RUNNING | TERMINATED
    TERMINATED --reset()--> RUNNING

The caller drives every transition; there are no host callbacks. Geometry
is delegated to a PhysicsCollaborator; rewards to a RewardPolicy.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from pelletgrab.config import EnvConfig
from pelletgrab.errors import InvalidActionError, InvalidUseError
from pelletgrab.observation import encode
from pelletgrab.physics import BoxPhysics, PhysicsCollaborator
from pelletgrab.rewards import EVENT_FOR_KIND, RewardPolicy, TerminalEvent
from pelletgrab.world import (
    CollisionEvent,
    TargetSlot,
    Vec3,
    WorldLayout,
    parse_target_slot,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# State types
# ---------------------------------------------------------------------------

class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class AgentState:
    position: Vec3


@dataclass(frozen=True)
class TargetState:
    slot: TargetSlot
    position: Vec3


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step.

    ``done`` is True when the episode ended for any reason; ``truncated``
    is True only when the configured step cap ended it.
    """

    observation: np.ndarray
    reward: float
    done: bool
    event: TerminalEvent
    truncated: bool = False

    @property
    def terminated(self) -> bool:
        return self.done and not self.truncated


# ---------------------------------------------------------------------------
# Action handling
# ---------------------------------------------------------------------------

def clamp_action(action: float | Sequence[float] | np.ndarray, low: float, high: float) -> float:
    """Validate a one-element action and clamp it into ``[low, high]``.

    Finite values outside the range are clamped, not rejected. NaN,
    infinities and anything that is not exactly one number raise
    InvalidActionError.
    """
    try:
        arr = np.asarray(action, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidActionError(f"Action is not numeric: {action!r}") from exc
    if arr.size != 1:
        raise InvalidActionError(
            f"Action must hold exactly one value, got shape {arr.shape}"
        )
    value = float(arr.reshape(-1)[0])
    if not math.isfinite(value):
        raise InvalidActionError(f"Action must be finite, got {value!r}")
    return min(max(value, low), high)


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------

class EpisodeController:
    """Single-owner episode state machine.

    Args:
        config: Tuning values. Defaults to ``EnvConfig()``.
        physics: Collision/tick collaborator. Defaults to a BoxPhysics built
            from *layout* and ``config.dt``.
        rng: A ``numpy.random.Generator``, an integer seed, or None. Only
            target placement draws from it.
        layout: Agent origin and target slots. Defaults to the layout of a
            BoxPhysics collaborator, else ``WorldLayout()``.
    """

    def __init__(
        self,
        config: EnvConfig | None = None,
        physics: PhysicsCollaborator | None = None,
        rng: np.random.Generator | int | None = None,
        layout: WorldLayout | None = None,
    ) -> None:
        self.config = config or EnvConfig()
        if layout is None:
            layout = getattr(physics, "layout", None) or WorldLayout()
        self.layout = layout
        self.physics = physics if physics is not None else BoxPhysics(layout, self.config.dt)
        self.rng = np.random.default_rng(rng)
        self.reward_policy = RewardPolicy.from_config(self.config)

        self._phase = Phase.IDLE
        self._agent: AgentState | None = None
        self._target: TargetState | None = None
        self._step_count = 0
        self._episode_count = 0
        self._last_event = TerminalEvent.NONE

    # -- read-only views ---------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def agent(self) -> AgentState | None:
        if self._agent is None:
            return None
        return AgentState(self._agent.position)

    @property
    def target(self) -> TargetState | None:
        return self._target

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def episode_count(self) -> int:
        return self._episode_count

    @property
    def last_event(self) -> TerminalEvent:
        return self._last_event

    # -- lifecycle ---------------------------------------------------------

    def reset(self, target_slot: TargetSlot | str | None = None) -> np.ndarray:
        """Start a new episode and return its first observation.

        The target slot is drawn uniformly from LEFT/RIGHT unless
        *target_slot* forces one. Draws are independent across resets.
        """
        slot = parse_target_slot(target_slot)
        if slot is None:
            slot = self._sample_slot()

        origin = tuple(float(v) for v in self.layout.agent_origin)
        target = TargetState(slot, tuple(float(v) for v in self.layout.slot_position(slot)))

        self.physics.place_agent(origin)
        self.physics.place_target(target.position)

        self._agent = AgentState(origin)
        self._target = target
        self._step_count = 0
        self._last_event = TerminalEvent.NONE
        self._phase = Phase.RUNNING
        self._episode_count += 1

        logger.debug(
            "episode %d started: target=%s at x=%.2f",
            self._episode_count, slot.value, target.position[0],
        )
        return self.observe()

    def step(self, action: float | Sequence[float] | np.ndarray) -> StepResult:
        """Apply one action and report ``(observation, reward, done)``.

        Raises InvalidUseError outside RUNNING and InvalidActionError for
        non-finite actions; neither mutates any state.
        """
        if self._phase is Phase.IDLE:
            raise InvalidUseError("step() called before reset()")
        if self._phase is Phase.TERMINATED:
            raise InvalidUseError(
                "step() called on a terminated episode; call reset() first"
            )

        value = clamp_action(action, self.config.action_low, self.config.action_high)
        dx = value * self.config.move_speed * float(self.physics.dt)
        delta = (dx, 0.0, 0.0)

        collisions = self.physics.translate_agent(delta)
        x, y, z = self._agent.position
        self._agent = AgentState((x + dx, y, z))
        self._step_count += 1

        event = _first_terminal(collisions)
        truncated = False
        if (
            event is TerminalEvent.NONE
            and self.config.max_steps is not None
            and self._step_count >= self.config.max_steps
        ):
            event = TerminalEvent.STEP_LIMIT
            truncated = True

        reward = self.reward_policy.reward(event)
        done = event.is_terminal
        self._last_event = event
        if done:
            self._phase = Phase.TERMINATED
            logger.debug(
                "episode %d ended after %d steps: %s (reward %+.1f)",
                self._episode_count, self._step_count, event.value, reward,
            )

        return StepResult(
            observation=self.observe(),
            reward=reward,
            done=done,
            event=event,
            truncated=truncated,
        )

    def observe(self) -> np.ndarray:
        """Current observation. Valid once reset() has been called."""
        if self._agent is None or self._target is None:
            raise InvalidUseError("No observation before the first reset()")
        return encode(self._agent.position, self._target.position)

    def _sample_slot(self) -> TargetSlot:
        if int(self.rng.integers(0, 2)) == 0:
            return TargetSlot.LEFT
        return TargetSlot.RIGHT


def _first_terminal(collisions: list[CollisionEvent]) -> TerminalEvent:
    """The first reported collision with a terminal object decides the event."""
    for collision in collisions:
        event = EVENT_FOR_KIND.get(collision.kind)
        if event is not None:
            return event
    return TerminalEvent.NONE
