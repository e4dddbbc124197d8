"""pelletgrab/constants.py — World geometry and default tuning values.

Positions are (x, y, z) in world units. Only x ever changes during an
episode; y and z stay at the floor height the scene was built with.
"""

# Agent
AGENT_ORIGIN = (0.0, 0.3, 0.0)
AGENT_HALF_EXTENT = (0.5, 0.5, 0.5)

# Pellet slots
LEFT_SLOT = (-4.0, 0.3, 0.0)
RIGHT_SLOT = (4.0, 0.3, 0.0)
PELLET_HALF_EXTENT = (0.25, 0.25, 0.25)

# Walls
WALL_POSITIONS = ((-5.0, 0.3, 0.0), (5.0, 0.3, 0.0))
WALL_HALF_EXTENT = (0.25, 1.0, 5.0)

# Movement
MOVE_SPEED = 2.0  # units per second
PHYSICS_DT = 0.02  # 50 Hz fixed step
ACTION_LOW = -1.0
ACTION_HIGH = 1.0

# Rewards
PELLET_REWARD = 2.0
WALL_PENALTY = 1.0
