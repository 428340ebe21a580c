"""Exceptions raised by the mosaic engine and session layer."""


class MosaicError(Exception):
    """Base class for py-mosaic errors."""


class InvalidRegionCountError(MosaicError, ValueError):
    """A board was requested with fewer than one region."""

    def __init__(self, count: int):
        super().__init__(f"Region count must be >= 1, got {count}")
        self.count = count


class SurfaceUnavailableError(MosaicError, RuntimeError):
    """The drawing surface could not be acquired from the host."""


class SessionNotStartedError(MosaicError, RuntimeError):
    """An operation needs a started session (surface acquired, board generated)."""
