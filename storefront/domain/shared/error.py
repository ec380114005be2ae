"""Error hierarchy for Storefront.

Error layers:
- StorefrontError: Base class for all Storefront errors
- DomainError: Business rule violations (4xx responses)
- InfrastructureError: System-level failures like storage issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class StorefrontError(Exception):
    """Base class for all Storefront errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(StorefrontError):
    """Base class for domain/business errors."""


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class ConflictError(DomainError):
    """A write collided with an existing record (unique constraint)."""


class RegistrationError(DomainError):
    """Customer registration was rejected.

    Codes:
    - password_mismatch: password and confirmation differ
    - duplicate_email: an account with this email/username already exists
    - already_registered: the customer record is already registered
    """


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(StorefrontError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable."""
