"""Error taxonomy raised by the relationship engine."""
from __future__ import annotations


class EngineError(Exception):
    """Base error for relationship engine operations."""


class InvalidInteractionError(EngineError):
    """Raised when an interaction or scheduling input fails validation."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class ResourceNotFoundError(EngineError):
    """Raised when a referenced contact, tag or event does not exist."""

    def __init__(self, resource: str, resource_id: int):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.resource_id = resource_id


class ConsistencyError(EngineError):
    """Raised when callers break an engine contract, e.g. mismatched log ownership."""
