"""Domain errors raised by the lesson service.

All of them derive from ValueError, which is how business-rule failures
are signalled elsewhere in the service layer, so existing
``except ValueError`` handlers keep working.
"""

from typing import Any, Optional


class LessonServiceError(ValueError):
    """Base class for lesson service errors."""
    pass


class InvalidIdentifierError(LessonServiceError):
    """An identifier was missing or does not resolve to an existing entity."""

    def __init__(self, entity: str, identifier: Optional[Any]):
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            message = f"{entity} id is required"
        else:
            message = f"{entity} with id {identifier} not found"
        super().__init__(message)


class ConflictingIdentifierError(LessonServiceError):
    """Two identifiers that must match (path and payload) differ."""

    def __init__(self, path_id: Any, payload_id: Any):
        self.path_id = path_id
        self.payload_id = payload_id
        super().__init__(f"Path id {path_id} does not match payload id {payload_id}")


class WrongTimeError(LessonServiceError):
    """An operation was attempted outside its permitted time window."""
    pass
