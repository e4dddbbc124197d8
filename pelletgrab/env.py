"""pelletgrab/env.py — Gymnasium environment wrapper.

Thin adapter over EpisodeController: exposes the observation and action
spaces and translates the controller's StepResult into Gymnasium's
5-tuple. Seeding goes through ``gym.Env.np_random``.
"""

from __future__ import annotations

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from pelletgrab.config import EnvConfig
from pelletgrab.controller import EpisodeController
from pelletgrab.observation import OBS_DIM
from pelletgrab.physics import BoxPhysics, PhysicsCollaborator
from pelletgrab.world import WorldLayout


class PelletGrabberEnv(gym.Env):
    """Move left or right to grab the pellet without touching a wall."""

    metadata = {"render_modes": [], "render_fps": 50}

    def __init__(
        self,
        config: EnvConfig | dict | None = None,
        layout: WorldLayout | None = None,
        physics: PhysicsCollaborator | None = None,
        render_mode: str | None = None,
        max_steps: int | None = None,
    ) -> None:
        super().__init__()
        if not isinstance(config, EnvConfig):
            config = EnvConfig.from_dict(config)
        if max_steps is not None:
            config = config.replace(max_steps=max_steps)
        self.config = config
        self.render_mode = render_mode

        layout = layout or getattr(physics, "layout", None) or WorldLayout()
        if physics is None:
            physics = BoxPhysics(layout, config.dt)

        self.observation_space = spaces.Box(
            low=-np.inf,
            high=np.inf,
            shape=(OBS_DIM,),
            dtype=np.float32,
        )
        self.action_space = spaces.Box(
            low=np.float32(config.action_low),
            high=np.float32(config.action_high),
            shape=(1,),
            dtype=np.float32,
        )

        self.controller = EpisodeController(
            config=config, physics=physics, rng=self.np_random, layout=layout,
        )

    def reset(
        self,
        *,
        seed: int | None = None,
        options: dict | None = None,
    ) -> tuple[np.ndarray, dict]:
        super().reset(seed=seed)
        self.controller.rng = self.np_random
        target_slot = (options or {}).get("target_slot")
        obs = self.controller.reset(target_slot=target_slot)
        return obs, self._get_info()

    def step(
        self, action
    ) -> tuple[np.ndarray, float, bool, bool, dict]:
        result = self.controller.step(action)
        return (
            result.observation,
            float(result.reward),
            result.terminated,
            result.truncated,
            self._get_info(),
        )

    def _get_info(self) -> dict:
        c = self.controller
        return {
            "step": c.step_count,
            "agent_x": c.agent.position[0],
            "target_x": c.target.position[0],
            "target_slot": c.target.slot.value,
            "event": c.last_event.value,
        }
