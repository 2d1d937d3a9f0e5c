"""
Custom exception hierarchy for the hot-seat engine and its service client.

Ordinary rule violations (building, mortgaging) are not exceptions: they come
back as failed ``ActionResult`` values. These types cover the cases that stop
a flow.
"""


class HotseatError(Exception):
    """Base exception for all game-related errors."""


class ConfigurationError(HotseatError):
    """Board configuration is missing or unusable."""


class NetworkError(HotseatError):
    """Scoring/configuration service call failed."""


class InvalidActionError(HotseatError):
    """Action is not legal in the current game state."""
