"""
Exceptions raised by the region generator.
"""


class RegionMapError(Exception):
    """Base class for region map generation failures."""


class InvalidInput(RegionMapError, ValueError):
    """Map dimensions or body count cannot produce a map."""


class ConstraintUnsatisfiable(RegionMapError):
    """A bounded search ran out of attempts without finding a valid candidate."""

    def __init__(self, stage: str, attempts: int, detail: str = ""):
        self.stage = stage
        self.attempts = attempts
        message = f"{stage}: no valid candidate after {attempts} attempts"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
