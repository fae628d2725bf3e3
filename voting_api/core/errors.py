"""Error taxonomy shared by the stores, services and HTTP layer."""

from __future__ import annotations


class VotingError(Exception):
    """Base exception for every store/service failure."""


class NotFoundError(VotingError):
    """Raised when an entity (or a nested history entry) does not exist."""


class AlreadyExistsError(VotingError):
    """Raised when creating an entity whose id is already taken."""


class PartialFailureError(VotingError):
    """Raised when a bulk delete removed fewer keys than it matched."""


class MalformedInputError(VotingError):
    """Raised when a payload does not have the expected shape."""


class BackendUnavailableError(VotingError):
    """Raised when the key-value backend cannot be reached."""
