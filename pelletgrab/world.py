"""pelletgrab/world.py — Object kinds, collision events, and world layout.

Every object the agent can touch is classified by an explicit ObjectKind
when the layout is built. Collision events carry that kind; nothing
downstream inspects names or tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pelletgrab.constants import (
    AGENT_HALF_EXTENT,
    AGENT_ORIGIN,
    LEFT_SLOT,
    PELLET_HALF_EXTENT,
    RIGHT_SLOT,
    WALL_HALF_EXTENT,
    WALL_POSITIONS,
)

Vec3 = tuple[float, float, float]


class ObjectKind(Enum):
    PELLET = "pellet"
    WALL = "wall"


class TargetSlot(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class WorldObject:
    """A static box the agent can collide with."""

    kind: ObjectKind
    position: Vec3
    half_extent: Vec3


@dataclass(frozen=True)
class CollisionEvent:
    """Agent began overlapping an object of the given kind this tick."""

    kind: ObjectKind


@dataclass(frozen=True)
class WorldLayout:
    """Fixed geometry of the arena."""

    agent_origin: Vec3 = AGENT_ORIGIN
    agent_half_extent: Vec3 = AGENT_HALF_EXTENT
    left_slot: Vec3 = LEFT_SLOT
    right_slot: Vec3 = RIGHT_SLOT
    pellet_half_extent: Vec3 = PELLET_HALF_EXTENT
    walls: tuple[WorldObject, ...] = field(
        default_factory=lambda: tuple(
            WorldObject(ObjectKind.WALL, pos, WALL_HALF_EXTENT)
            for pos in WALL_POSITIONS
        )
    )

    def slot_position(self, slot: TargetSlot) -> Vec3:
        if slot is TargetSlot.LEFT:
            return self.left_slot
        return self.right_slot


def parse_target_slot(value: TargetSlot | str | None) -> TargetSlot | None:
    """Accept a TargetSlot, its string value (``"left"``/``"right"``), or None."""
    if value is None or isinstance(value, TargetSlot):
        return value
    try:
        return TargetSlot(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Unknown target slot: {value!r}. "
            f"Valid slots: {[s.value for s in TargetSlot]}"
        ) from None
