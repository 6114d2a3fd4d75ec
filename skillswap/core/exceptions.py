"""
Exception hierarchy for the SkillSwap application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SkillSwapException(Exception):
    """Base exception for all SkillSwap application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(SkillSwapException):
    """Raised when an entity id does not resolve."""

    def __init__(
        self,
        entity: str,
        entity_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            entity: Entity kind (user, skill, exchange, session)
            entity_id: The id that failed to resolve
            details: Additional context
        """
        details = details or {}
        details["entity"] = entity
        details["entity_id"] = entity_id
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}", details)


class ForbiddenError(SkillSwapException):
    """Raised when the actor lacks the relationship an operation requires."""

    def __init__(
        self,
        message: str,
        actor_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize forbidden error.

        Args:
            message: Error message
            actor_id: User attempting the operation
            details: Additional context
        """
        details = details or {}
        if actor_id is not None:
            details["actor_id"] = actor_id
        super().__init__(message, details)


class InvalidInputError(SkillSwapException):
    """Raised when input is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConflictError(SkillSwapException):
    """Raised for a transition the entity's current state does not allow."""

    def __init__(
        self,
        message: str,
        current_state: str | None = None,
        requested_state: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize conflict error.

        Args:
            message: Error message
            current_state: State observed on the entity
            requested_state: State the caller asked for
            details: Additional context
        """
        details = details or {}
        if current_state is not None:
            details["current_state"] = current_state
        if requested_state is not None:
            details["requested_state"] = requested_state
        super().__init__(message, details)


class AuthenticationError(SkillSwapException):
    """Raised when a bearer token is missing, malformed or expired."""

    pass
