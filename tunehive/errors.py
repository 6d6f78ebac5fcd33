"""
Error taxonomy for the catalogue.

Library code raises these; the HTTP layer in ``catalog.router`` turns
them into ``HTTPException`` responses. None of them is fatal: every
path that raises leaves the store in a consistent state.
"""

from typing import Iterable


class CatalogError(Exception):
    """Base exception for tunehive."""


class ValidationError(CatalogError):
    """Raised when a draft is submitted without a title or an artist."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required field(s): {', '.join(self.missing)}")


class NotFoundError(CatalogError):
    """Raised when no song with the requested id exists."""

    def __init__(self, song_id: int):
        self.song_id = song_id
        super().__init__(f"No song with id {song_id}")


class UnknownFieldError(CatalogError):
    """Raised when a draft update names a field that does not exist."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unknown draft field: {field}")


class UnsupportedCapabilityError(CatalogError):
    """Raised when voice search is started without a recognizer."""

    def __init__(self, capability: str = "speech recognition"):
        self.capability = capability
        super().__init__(f"{capability.capitalize()} is not supported on this platform.")


class RecognitionError(CatalogError):
    """Reported by the voice provider while listening."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Speech recognition error: {reason}")
