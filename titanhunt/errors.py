"""
Error hierarchy for the Titan Hunt rules engine.

Every failure the engine raises derives from TitanHuntError so the host
layer can catch and report them uniformly.

Usage:
    from titanhunt.errors import CommandRejectedError

    try:
        events = state.process_command(command)
    except CommandRejectedError as e:
        logger.warning(f"Rejected: {e.message}")
"""

from typing import Any

__all__ = [
    # Base error
    "TitanHuntError",
    # Command rejections
    "CommandRejectedError",
    "UnitNotFoundError",
    "PreconditionError",
    "WrongPhaseError",
    "NotActivePlayerError",
    "UnitAlreadyMovedError",
    "EmptyPathError",
    "GeometryError",
    "InvalidDestinationError",
    "DestinationOccupiedError",
    "IllegalPathError",
    # Boundary input errors
    "InvalidInputError",
    "InvalidFacingError",
    "UnknownUnitTypeError",
    "InvalidPlayerError",
    "UnknownTerrainError",
    "InvalidCoordinateError",
    "DuplicateUnitError",
    # Data / configuration
    "DataLoadError",
    "ConfigurationError",
]


class TitanHuntError(Exception):
    """Base exception for all engine errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "TITANHUNT_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the host layer."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Command Rejections
# =============================================================================


class CommandRejectedError(TitanHuntError):
    """A command failed validation. Game state was not modified."""
    code: str = "COMMAND_REJECTED"


class UnitNotFoundError(CommandRejectedError):
    """No unit with the requested id exists."""
    code: str = "UNIT_NOT_FOUND"

    def __init__(self, unit_id: int):
        super().__init__("Unit not found", context={"unit_id": unit_id})
        self.unit_id = unit_id


class PreconditionError(CommandRejectedError):
    """Command issued at the wrong time or by the wrong side."""
    code: str = "PRECONDITION_FAILED"


class WrongPhaseError(PreconditionError):
    code: str = "WRONG_PHASE"


class NotActivePlayerError(PreconditionError):
    code: str = "NOT_ACTIVE_PLAYER"


class UnitAlreadyMovedError(PreconditionError):
    code: str = "UNIT_ALREADY_MOVED"


class EmptyPathError(PreconditionError):
    code: str = "EMPTY_PATH"


class GeometryError(CommandRejectedError):
    """Destination or path is not legal on the map."""
    code: str = "GEOMETRY"


class InvalidDestinationError(GeometryError):
    code: str = "INVALID_DESTINATION"


class DestinationOccupiedError(GeometryError):
    code: str = "DESTINATION_OCCUPIED"


class IllegalPathError(GeometryError):
    """Raised only when path validation is enabled on the game state."""
    code: str = "ILLEGAL_PATH"


# =============================================================================
# Boundary Input Errors
# =============================================================================


class InvalidInputError(TitanHuntError):
    """Malformed value handed to the engine by the host layer."""
    code: str = "INVALID_INPUT"


class InvalidFacingError(InvalidInputError):
    code: str = "INVALID_FACING"

    def __init__(self, index: Any):
        super().__init__("Invalid facing (must be 0-5)", context={"index": index})


class UnknownUnitTypeError(InvalidInputError):
    code: str = "UNKNOWN_UNIT_TYPE"

    def __init__(self, name: Any):
        super().__init__(f"Unknown unit type: {name}", context={"name": name})


class InvalidPlayerError(InvalidInputError):
    code: str = "INVALID_PLAYER"

    def __init__(self, player: Any):
        super().__init__("Invalid player (must be 1 or 2)", context={"player": player})


class UnknownTerrainError(InvalidInputError):
    code: str = "UNKNOWN_TERRAIN"

    def __init__(self, name: Any):
        super().__init__(f"Unknown terrain: {name}", context={"name": name})


class InvalidCoordinateError(InvalidInputError):
    code: str = "INVALID_COORDINATE"


class DuplicateUnitError(InvalidInputError):
    code: str = "DUPLICATE_UNIT"

    def __init__(self, unit_id: int):
        super().__init__("Unit id already in use", context={"unit_id": unit_id})
        self.unit_id = unit_id


# =============================================================================
# Data / Configuration
# =============================================================================


class DataLoadError(TitanHuntError):
    """Scenario or map data file could not be read or is malformed."""
    code: str = "DATA_LOAD"


class ConfigurationError(TitanHuntError):
    code: str = "CONFIGURATION"
