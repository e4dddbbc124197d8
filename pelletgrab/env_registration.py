"""pelletgrab/env_registration.py — Register pelletgrab envs with Gymnasium.

Import this module to register all environments::

    import pelletgrab.env_registration
    env = gymnasium.make("pelletgrab/PelletGrabber-v0")
"""

import gymnasium as gym

gym.register(
    id="pelletgrab/PelletGrabber-v0",
    entry_point="pelletgrab.env:PelletGrabberEnv",
)

# Step-capped variant: episodes that neither grab the pellet nor hit a wall
# are truncated after 500 steps (10 s of simulated time at 50 Hz). The cap
# lives in the controller, so no TimeLimit wrapper is added on top.
gym.register(
    id="pelletgrab/PelletGrabber-Capped-v0",
    entry_point="pelletgrab.env:PelletGrabberEnv",
    kwargs={"max_steps": 500},
)
