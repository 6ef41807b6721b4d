"""
Exceptions raised by the Jungle Snake core.
"""


class SnakeGameError(Exception):
    """Base class for all game errors."""


class InvalidGridError(SnakeGameError, ValueError):
    """Grid bounds too small to hold the starting snake."""


class InvalidPlayerNameError(SnakeGameError, ValueError):
    """A session was started without a usable player name."""


class InvalidTransitionError(SnakeGameError):
    """A session control was used in a state that does not allow it."""

    def __init__(self, action: str, status: str):
        super().__init__(f"Cannot {action} while session is {status}.")
        self.action = action
        self.status = status
