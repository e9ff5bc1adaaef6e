"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class DuplicateSlugError(DuplicateEntityError):
    """Raised when a slug is already taken by another entity of the same type."""

    def __init__(self, entity_type: str, slug: str):
        self.slug = slug
        super().__init__(entity_type, "slug", slug)


class ValidationError(Exception):
    """Raised when input does not satisfy a domain rule (bad filter, unknown field)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BackendUnavailableError(Exception):
    """Raised when the storage substrate cannot be reached.

    Backend-agnostic: wraps SQLAlchemy and pymongo connection failures alike.
    """

    def __init__(self, backend: str, reason: str):
        self.backend = backend
        self.reason = reason
        super().__init__(f"[{backend}] storage unavailable: {reason}")
