"""pelletgrab/scenarios/conditions — Success and failure conditions.

A condition is a named predicate over the trajectory so far. Success is
checked before failure, so a step that satisfies both counts as a pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from pelletgrab.scenarios.runner import StepRecord

STUCK_WINDOW = 50
STUCK_TOLERANCE = 0.1


@dataclass
class SuccessCondition:
    type: str
    value: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SuccessCondition:
        if data["type"] not in VALID_SUCCESS_TYPES:
            raise ValueError(f"Unknown success condition type: {data['type']!r}")
        return cls(type=data["type"], value=data.get("value"))


@dataclass
class FailureCondition:
    type: str
    tolerance: float | None = None
    window: int | None = None
    conditions: list[FailureCondition] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> FailureCondition:
        if data["type"] not in VALID_FAILURE_TYPES:
            raise ValueError(f"Unknown failure condition type: {data['type']!r}")
        nested = None
        if data["type"] == "any":
            nested = [cls.from_dict(c) for c in data.get("conditions", [])]
        return cls(
            type=data["type"],
            tolerance=data.get("tolerance"),
            window=data.get("window"),
            conditions=nested,
        )


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

# (condition, trajectory, step, max_steps) -> fired
_SUCCESS_CHECKS: dict[str, Callable[..., bool]] = {
    "pellet_reached": lambda c, traj, step, n: traj[-1].event == "pellet_reached",
    "wall_hit": lambda c, traj, step, n: traj[-1].event == "wall_hit",
    "total_reward_gte": lambda c, traj, step, n: sum(r.reward for r in traj) >= c.value,
    "position_x_gte": lambda c, traj, step, n: traj[-1].x >= c.value,
    "position_x_lte": lambda c, traj, step, n: traj[-1].x <= c.value,
    "alive_at_end": lambda c, traj, step, n: step >= n - 1 and traj[-1].event != "wall_hit",
}


def _is_stuck(cond: FailureCondition, trajectory: list[StepRecord]) -> bool:
    window = cond.window or STUCK_WINDOW
    if len(trajectory) < window:
        return False
    xs = [r.x for r in trajectory[-window:]]
    return max(xs) - min(xs) < (cond.tolerance or STUCK_TOLERANCE)


def _failure_reason(cond: FailureCondition, trajectory: list[StepRecord]) -> str | None:
    """Name of the failure that fired, or None. ``any`` reports its first child."""
    if cond.type == "wall_hit" and trajectory[-1].event == "wall_hit":
        return "wall_hit"
    if cond.type == "stuck" and _is_stuck(cond, trajectory):
        return "stuck"
    if cond.type == "any":
        for sub in cond.conditions or []:
            reason = _failure_reason(sub, trajectory)
            if reason is not None:
                return reason
    return None


VALID_SUCCESS_TYPES: frozenset[str] = frozenset(_SUCCESS_CHECKS)
VALID_FAILURE_TYPES: frozenset[str] = frozenset({"wall_hit", "stuck", "any"})


def check_conditions(
    success: SuccessCondition,
    failure: FailureCondition,
    trajectory: list[StepRecord],
    step: int,
    max_steps: int,
) -> tuple[bool | None, str | None]:
    """Return ``(True, reason)``, ``(False, reason)`` or ``(None, None)``."""
    if not trajectory:
        return None, None
    if _SUCCESS_CHECKS[success.type](success, trajectory, step, max_steps):
        return True, success.type
    reason = _failure_reason(failure, trajectory)
    if reason is not None:
        return False, reason
    return None, None
