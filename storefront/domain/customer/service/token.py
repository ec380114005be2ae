"""Token service for session access tokens and customer tokens."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from storefront.config import JwtConfig
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.shared.service import Service

logger = logging.getLogger(__name__)

SESSION_AUDIENCE = "session"
CUSTOMER_TOKEN_AUDIENCE = "customer"


class TokenService(Service):
    """Issues and reads the two JWTs the storefront hands out.

    - Access tokens carry the session principal (`typ` = principal type)
    - Customer tokens bind a customer id, typically a guest, to a client
      that has no session; they are what the resolver falls back to
    """

    _config: JwtConfig

    def create_access_token(
        self,
        subject: str,
        principal_type: str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        """Create a session access token.

        Args:
            subject: The principal's identifier (a customer id for customers)
            principal_type: "customer" for storefront customers, anything else otherwise
            additional_claims: Optional extra claims to include

        Returns:
            Encoded JWT string
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._config.access_token_expire_minutes)

        payload = {
            "sub": subject,
            "typ": principal_type,
            "aud": SESSION_AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a session access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=SESSION_AUDIENCE,
        )

    def create_customer_token(self, customer_id: CustomerId) -> str:
        """Create an opaque customer token bound to `customer_id`."""
        now = datetime.now(UTC)
        expires_at = now + timedelta(days=self._config.customer_token_expire_days)

        payload = {
            "sub": str(customer_id),
            "aud": CUSTOMER_TOKEN_AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def parse_customer_token(self, token: str | None) -> CustomerId | None:
        """Return the customer id a token is bound to, or None.

        Never raises: malformed input, a bad signature, the wrong audience,
        expiry or a subject that is not a customer id all yield None.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                audience=CUSTOMER_TOKEN_AUDIENCE,
                options={"require": ["exp", "sub"]},
            )
            return CustomerId.model_validate(payload["sub"])
        except jwt.ExpiredSignatureError:
            logger.debug("Customer token expired")
            return None
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as e:
            logger.debug("Customer token rejected: %s", e)
            return None

    @property
    def access_token_expire_seconds(self) -> int:
        """Get access token expiry in seconds."""
        return self._config.access_token_expire_minutes * 60

    @property
    def customer_token_expire_seconds(self) -> int:
        """Get customer token expiry in seconds."""
        return self._config.customer_token_expire_days * 24 * 60 * 60
