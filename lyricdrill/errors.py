"""Error taxonomy for lesson generation, submission and storage."""


class LyricDrillError(Exception):
    """Base class for all LyricDrill errors."""


class ValidationError(LyricDrillError, ValueError):
    """Request rejected before any work is done (bad input or unusable song)."""


class ConflictError(LyricDrillError):
    """An answer was already recorded for this lesson item."""


class NotFoundError(LyricDrillError, LookupError):
    """The requested lesson does not exist."""


class StorageError(LyricDrillError):
    """The underlying database failed; the message names the operation."""
