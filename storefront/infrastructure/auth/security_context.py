"""Session principal from the `Authorization: Bearer` access token."""

import logging
from collections.abc import Mapping

import jwt

from storefront.domain.customer.model.principal import (
    CUSTOMER_PRINCIPAL_TYPE,
    CustomerPrincipal,
    OtherPrincipal,
    Principal,
)
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.customer.port.security_context import SecurityContext
from storefront.domain.customer.service.token import TokenService

logger = logging.getLogger(__name__)


class BearerSecurityContext(SecurityContext):
    """Reads the session principal from a bearer access token.

    Missing, expired or invalid tokens yield no principal rather than an
    error; resolution then falls through to the customer token.
    """

    def __init__(self, headers: Mapping[str, str], token_service: TokenService) -> None:
        self.headers = headers
        self.token_service = token_service

    def current_principal(self) -> Principal | None:
        auth_header = self.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return None

        token = auth_header[7:]  # Remove "Bearer " prefix

        try:
            payload = self.token_service.validate_access_token(token)
        except jwt.InvalidTokenError as e:
            logger.debug("Ignoring invalid access token: %s", e)
            return None

        subject = payload.get("sub")
        principal_type = payload.get("typ")
        if not subject or not principal_type:
            return None

        if principal_type != CUSTOMER_PRINCIPAL_TYPE:
            return OtherPrincipal(subject=subject, principal_type=principal_type)

        try:
            return CustomerPrincipal(customer_id=CustomerId.model_validate(subject))
        except ValueError:
            logger.debug("Access token subject is not a customer id: %s", subject)
            return None
