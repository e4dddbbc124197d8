"""pelletgrab/observation.py — Observation encoding.

Produces a flat float32 vector from agent and target positions. Raw world
coordinates, no normalization.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

OBS_DIM = 6


def encode(agent_position: Sequence[float], target_position: Sequence[float]) -> np.ndarray:
    """Encode agent and target positions into an observation vector.

    Layout:
        [0-2] agent position (x, y, z)
        [3-5] target position (x, y, z)
    """
    obs = np.zeros(OBS_DIM, dtype=np.float32)
    obs[0:3] = agent_position
    obs[3:6] = target_position
    return obs


def agent_x(obs: np.ndarray) -> float:
    """Agent x coordinate from an observation."""
    return float(obs[0])


def target_x(obs: np.ndarray) -> float:
    """Target x coordinate from an observation."""
    return float(obs[3])
