"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """User roles controlling access scope."""

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    USER = "USER"

    @property
    def is_admin(self) -> bool:
        """Check if this role may act on any user's documents and accounts."""
        return self == Role.ADMIN


class DocumentStatus(str, Enum):
    """Workflow stage of a document on the board. Any status may move to any other."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class DocumentPriority(str, Enum):
    """Urgency classification of a document."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"
