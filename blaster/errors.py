"""
Error types raised by the simulation core
"""


class BlasterError(Exception):
    """Base class for all game errors"""


class SpawnSaturationError(BlasterError):
    """No free spot for a new target was found within the attempt budget"""

    def __init__(self, attempts: int):
        super().__init__(
            f"Could not find a spot for the new target after {attempts} attempts."
        )
        self.attempts = attempts


class InvalidDirectionError(BlasterError, ValueError):
    """A value outside the closed direction set reached the motion code"""

    def __init__(self, direction):
        super().__init__(f"Invalid direction: {direction!r}")
        self.direction = direction


class RoundStateError(BlasterError):
    """Requested round transition is not allowed from the current phase"""


class ConfigError(BlasterError, ValueError):
    """Invalid game configuration"""
