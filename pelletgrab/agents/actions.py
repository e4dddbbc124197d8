"""pelletgrab/agents/actions.py — Named action values and key-to-axis mapping.

The action space is one continuous value. These constants name the
three values a digital input (keyboard, scripted timeline) can produce.
"""

from __future__ import annotations

ACTION_LEFT = -1.0
ACTION_NOOP = 0.0
ACTION_RIGHT = 1.0

ACTION_NAMES: dict[str, float] = {
    "left": ACTION_LEFT,
    "noop": ACTION_NOOP,
    "right": ACTION_RIGHT,
}


def axis_from_keys(left: bool, right: bool) -> float:
    """Raw horizontal axis from two buttons: -1, 0 or +1.

    Holding both cancels out, like a digital axis with no smoothing.
    """
    return float(right) - float(left)


def parse_action(value: float | str) -> float:
    """Accept a number or one of the ACTION_NAMES keys."""
    if isinstance(value, str):
        try:
            return ACTION_NAMES[value.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown action name: {value!r}. Valid names: {sorted(ACTION_NAMES)}"
            ) from None
    return float(value)
