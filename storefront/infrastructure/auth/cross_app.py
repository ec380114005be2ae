"""Cross-app trust from an admin-issued JWT."""

import logging
from collections.abc import Mapping
from functools import cached_property
from typing import Any

import jwt

from storefront.config import CrossAppConfig
from storefront.domain.customer.port.cross_app import CrossAppAuthService

logger = logging.getLogger(__name__)


class AdminTokenCrossAppAuthService(CrossAppAuthService):
    """Trusts callers presenting a valid token from the admin application.

    The admin application signs a JWT with the shared cross-app secret
    (audience `admin`) and lists the caller's permissions in the
    `permissions` claim. The token is read from the configured header once
    per request.
    """

    def __init__(self, headers: Mapping[str, str], config: CrossAppConfig) -> None:
        self.headers = headers
        self.config = config

    @cached_property
    def _claims(self) -> dict[str, Any] | None:
        if not self.config.header:
            return None

        token = self.headers.get(self.config.header)
        if not token:
            return None

        try:
            return jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                audience=self.config.audience,
                options={"require": ["exp", "sub"]},
            )
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected cross-app token: %s", e)
            return None

    def is_authed_from_admin(self) -> bool:
        return self._claims is not None

    def has_csr_permission(self) -> bool:
        if self._claims is None:
            return False
        permissions = self._claims.get("permissions") or []
        return isinstance(permissions, list) and self.config.csr_permission in permissions
