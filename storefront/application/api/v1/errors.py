"""Centralized error transformation for API routes.

Maps Storefront errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from storefront.domain.shared.error import (
    ConflictError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    RegistrationError,
    StorefrontError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    InvalidStateError: 409,
    ConflictError: 409,
    RegistrationError: 409,
}


def map_storefront_error(error: StorefrontError) -> HTTPException:
    """Map a Storefront error to an HTTPException.

    Args:
        error: The Storefront error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        # A mismatched confirmation is bad input, not a conflict
        if isinstance(error, RegistrationError) and error.code == "password_mismatch":
            status_code = 422
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown StorefrontError subclasses
    return HTTPException(status_code=500, detail=detail)
