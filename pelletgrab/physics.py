"""pelletgrab/physics.py — Physics collaborator interface and a headless box world.

The episode core never tests geometry itself. It hands the collaborator
position changes and reads back the collisions that began on that tick.
BoxPhysics is the in-process collaborator used for training and tests:
axis-aligned boxes, trigger-enter semantics tested over the swept move,
fixed tick.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from pelletgrab.constants import PHYSICS_DT
from pelletgrab.world import (
    CollisionEvent,
    ObjectKind,
    Vec3,
    WorldLayout,
    WorldObject,
)


@runtime_checkable
class PhysicsCollaborator(Protocol):
    """What the episode core needs from a physics engine."""

    @property
    def dt(self) -> float:
        """Duration of one physics tick in seconds."""
        ...

    def place_agent(self, position: Sequence[float]) -> None:
        """Teleport the agent. Never reports collisions."""
        ...

    def place_target(self, position: Sequence[float]) -> None:
        """Teleport the pellet. Never reports collisions."""
        ...

    def translate_agent(self, delta: Sequence[float]) -> list[CollisionEvent]:
        """Move the agent by *delta* and return contacts that began."""
        ...


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def boxes_overlap(
    a_pos: np.ndarray, a_half: np.ndarray, b_pos: np.ndarray, b_half: np.ndarray
) -> bool:
    """True if two axis-aligned boxes intersect (touching faces do not count)."""
    return bool(np.all(np.abs(a_pos - b_pos) < a_half + b_half))


def sweep_entry(
    a_pos: np.ndarray,
    a_half: np.ndarray,
    delta: np.ndarray,
    b_pos: np.ndarray,
    b_half: np.ndarray,
) -> float | None:
    """Fraction of *delta* at which box *a* first overlaps box *b*.

    Box *a* moves from *a_pos* to ``a_pos + delta``. Returns a value in
    ``[0, 1)`` when the boxes overlap at some point of the move, else None.
    Overlap is strict, as in :func:`boxes_overlap`.
    """
    reach = a_half + b_half
    gap = b_pos - a_pos
    enter, leave = -np.inf, np.inf
    for d, g, r in zip(delta, gap, reach):
        if d == 0.0:
            if abs(g) >= r:
                return None
            continue
        t0, t1 = (g - r) / d, (g + r) / d
        enter = max(enter, min(t0, t1))
        leave = min(leave, max(t0, t1))
    if enter >= leave or enter >= 1.0 or leave <= 0.0:
        return None
    return max(float(enter), 0.0)


# ---------------------------------------------------------------------------
# Headless implementation
# ---------------------------------------------------------------------------

class BoxPhysics:
    """Axis-aligned box overlap world with a fixed tick."""

    def __init__(
        self, layout: WorldLayout | None = None, dt: float = PHYSICS_DT
    ) -> None:
        self.layout = layout or WorldLayout()
        self._dt = float(dt)
        self._agent_pos = np.array(self.layout.agent_origin, dtype=np.float64)
        self._agent_half = np.array(self.layout.agent_half_extent, dtype=np.float64)
        self._pellet_pos = np.array(self.layout.right_slot, dtype=np.float64)
        self._pellet_half = np.array(self.layout.pellet_half_extent, dtype=np.float64)
        self._walls: tuple[WorldObject, ...] = tuple(self.layout.walls)
        self._contacts: frozenset[int] = self._current_contacts()

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def agent_position(self) -> Vec3:
        return tuple(float(v) for v in self._agent_pos)

    @property
    def target_position(self) -> Vec3:
        return tuple(float(v) for v in self._pellet_pos)

    def objects(self) -> list[WorldObject]:
        """All collidable objects; the pellet is always index 0."""
        pellet = WorldObject(
            ObjectKind.PELLET, self.target_position, self.layout.pellet_half_extent
        )
        return [pellet, *self._walls]

    def place_agent(self, position: Sequence[float]) -> None:
        self._agent_pos = np.array(position, dtype=np.float64)
        self._contacts = self._current_contacts()

    def place_target(self, position: Sequence[float]) -> None:
        self._pellet_pos = np.array(position, dtype=np.float64)
        self._contacts = self._current_contacts()

    def translate_agent(self, delta: Sequence[float]) -> list[CollisionEvent]:
        """Move the agent and report contacts begun anywhere along the move.

        Objects are reported in the order the agent reaches them, ties by
        object index. An object passed clean through still counts.
        """
        step = np.asarray(delta, dtype=np.float64)
        start = self._agent_pos
        self._agent_pos = start + step
        objs = self.objects()
        entered = []
        for i, obj in enumerate(objs):
            if i in self._contacts:
                continue
            t = sweep_entry(
                start,
                self._agent_half,
                step,
                np.asarray(obj.position, dtype=np.float64),
                np.asarray(obj.half_extent, dtype=np.float64),
            )
            if t is not None:
                entered.append((t, i))
        self._contacts = self._current_contacts()
        return [CollisionEvent(objs[i].kind) for _, i in sorted(entered)]

    def _current_contacts(self) -> frozenset[int]:
        hits = set()
        for i, obj in enumerate(self.objects()):
            if boxes_overlap(
                self._agent_pos,
                self._agent_half,
                np.asarray(obj.position, dtype=np.float64),
                np.asarray(obj.half_extent, dtype=np.float64),
            ):
                hits.add(i)
        return frozenset(hits)
