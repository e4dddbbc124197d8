"""pelletgrab/config.py — Named configuration values for the environment.

Movement speed and reward magnitudes are supplied here instead of being
embedded in the controller. Values are validated once, at construction.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from pelletgrab.constants import (
    ACTION_HIGH,
    ACTION_LOW,
    MOVE_SPEED,
    PELLET_REWARD,
    PHYSICS_DT,
    WALL_PENALTY,
)
from pelletgrab.errors import ConfigurationError


@dataclass(frozen=True)
class EnvConfig:
    """Environment tuning.

    Attributes:
        move_speed: Agent speed in units per second at full action.
        pellet_reward: Reward granted when the agent touches the pellet.
        wall_penalty: Magnitude of the penalty for touching a wall; the
            reward on that step is ``-wall_penalty``.
        dt: Tick length used when building the default physics.
        action_low: Lower clamp bound applied to every action.
        action_high: Upper clamp bound applied to every action.
        max_steps: Optional step cap. ``None`` means episodes only end on
            contact.
    """

    move_speed: float = MOVE_SPEED
    pellet_reward: float = PELLET_REWARD
    wall_penalty: float = WALL_PENALTY
    dt: float = PHYSICS_DT
    action_low: float = ACTION_LOW
    action_high: float = ACTION_HIGH
    max_steps: int | None = None

    def __post_init__(self) -> None:
        for name in ("move_speed", "pellet_reward", "wall_penalty", "dt",
                     "action_low", "action_high"):
            _require_finite(name, getattr(self, name))

        if self.move_speed <= 0:
            raise ConfigurationError(
                f"move_speed must be positive, got {self.move_speed!r}"
            )
        if self.dt <= 0:
            raise ConfigurationError(f"dt must be positive, got {self.dt!r}")
        if self.wall_penalty < 0:
            raise ConfigurationError(
                f"wall_penalty is a magnitude and must be >= 0, "
                f"got {self.wall_penalty!r}"
            )
        if self.action_low >= self.action_high:
            raise ConfigurationError(
                f"action_low ({self.action_low!r}) must be below "
                f"action_high ({self.action_high!r})"
            )
        if self.max_steps is not None:
            if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int):
                raise ConfigurationError(
                    f"max_steps must be an integer or None, got {self.max_steps!r}"
                )
            if self.max_steps <= 0:
                raise ConfigurationError(
                    f"max_steps must be positive, got {self.max_steps!r}"
                )

    @classmethod
    def from_dict(cls, data: dict | None) -> EnvConfig:
        """Build a config from a plain mapping, rejecting unknown keys."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"config must be a mapping, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys: {unknown}. Valid keys: {sorted(known)}"
            )
        return cls(**data)

    def replace(self, **overrides) -> EnvConfig:
        """Return a copy with *overrides* applied (validated again)."""
        merged = asdict(self)
        merged.update(overrides)
        return EnvConfig.from_dict(merged)


def _require_finite(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")


def load_config(path: Path | str) -> EnvConfig:
    """Load an EnvConfig from a YAML mapping. An empty file gives defaults."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return EnvConfig.from_dict(data)
