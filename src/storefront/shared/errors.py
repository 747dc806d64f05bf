"""Application-level error taxonomy.

Domain code raises Protean's `ValidationError` / `ObjectNotFoundError`; the
stores translate failures into these types before they reach callers.
"""


class StorefrontError(Exception):
    """Base class for storefront application errors."""

    def __init__(self, message: str = "", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class Unauthenticated(StorefrontError):
    """A cart or checkout mutation was attempted without a signed-in user."""


class NotFound(StorefrontError):
    """A lookup by slug or identifier yielded nothing."""


class BackendError(StorefrontError):
    """An underlying store operation failed (constraint, permission, I/O)."""
