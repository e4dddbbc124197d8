"""pelletgrab — a one-axis pellet-grabbing reinforcement-learning environment."""
