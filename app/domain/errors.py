"""Domain errors surfaced by the services and mapped to HTTP responses."""


class DomainError(Exception):
    """Base class for domain errors."""


class EntityValidationError(DomainError):
    """Raised when input failed validation; nothing was written."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


class EntityNotFoundError(DomainError):
    """Raised when an entity does not exist within the caller's company."""

    def __init__(self, entity: str, entity_id: int | str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(DomainError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(f"Cannot move {entity} from '{current}' to '{target}'")
        self.entity = entity
        self.current = current
        self.target = target


class NotificationError(DomainError):
    """Raised when a notification cannot be composed.

    ``reason`` is one of ``template_not_found``, ``entity_not_found``,
    ``unsupported_channel``, ``missing_content``, ``missing_recipient`` or
    ``channel_error``.
    """

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
