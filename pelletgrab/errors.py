"""pelletgrab/errors.py — Exception types raised by the environment core."""

from __future__ import annotations


class PelletGrabError(Exception):
    """Base class for all pelletgrab errors."""


class InvalidUseError(PelletGrabError, RuntimeError):
    """An operation was called in a lifecycle phase that does not allow it.

    Raised by ``step()`` before the first ``reset()`` or after a terminal
    step without an intervening ``reset()``.
    """


class ConfigurationError(PelletGrabError, ValueError):
    """A configuration value is malformed."""


class InvalidActionError(PelletGrabError, ValueError):
    """An action is non-finite or has the wrong shape."""
