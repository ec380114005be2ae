"""Unit tests for TokenService customer and access tokens."""

import time
from uuid import uuid4

import jwt
import pytest

from storefront.config import JwtConfig
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.customer.service.token import TokenService

SECRET = "test-secret-key-256-bits-long-xx"


def make_service(secret: str = SECRET, customer_token_expire_days: int = 30) -> TokenService:
    """Create a TokenService with test config."""
    config = JwtConfig(
        secret=secret,
        algorithm="HS256",
        access_token_expire_minutes=60,
        customer_token_expire_days=customer_token_expire_days,
    )
    return TokenService(_config=config)


class TestCustomerTokenIssue:
    """Tests for TokenService.create_customer_token."""

    def test_customer_token_is_jwt_bound_to_customer(self):
        """create_customer_token should encode the customer id as the subject."""
        service = make_service()
        customer_id = CustomerId.generate()

        token = service.create_customer_token(customer_id)

        payload = jwt.decode(token, SECRET, algorithms=["HS256"], audience="customer")
        assert payload["sub"] == str(customer_id)
        assert payload["aud"] == "customer"
        assert payload["exp"] - payload["iat"] == 30 * 24 * 60 * 60

    def test_customer_tokens_are_unique(self):
        """Each issued token should carry its own jti."""
        service = make_service()
        customer_id = CustomerId.generate()

        assert service.create_customer_token(customer_id) != service.create_customer_token(
            customer_id
        )


class TestCustomerTokenParse:
    """Tests for TokenService.parse_customer_token."""

    def test_parse_returns_customer_id(self):
        """A token issued by the service parses back to the same id."""
        service = make_service()
        customer_id = CustomerId.generate()

        token = service.create_customer_token(customer_id)

        assert service.parse_customer_token(token) == customer_id

    @pytest.mark.parametrize(
        "token",
        [
            None,
            "",
            "garbage",
            "not.a.jwt",
            "\x00\xff\xfe",
            "eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiJ4In0.",
        ],
    )
    def test_parse_malformed_returns_none(self, token):
        """Malformed input never raises, it yields None."""
        service = make_service()

        assert service.parse_customer_token(token) is None

    def test_parse_rejects_wrong_secret(self):
        """Tokens signed with another secret are rejected."""
        issuer = make_service(secret="secret-one-that-is-long-enough-xx")
        reader = make_service(secret="secret-two-that-is-long-enough-xx")

        token = issuer.create_customer_token(CustomerId.generate())

        assert reader.parse_customer_token(token) is None

    def test_parse_rejects_expired_token(self):
        """Expired tokens yield None."""
        service = make_service()
        now = int(time.time())
        token = jwt.encode(
            {"sub": str(uuid4()), "aud": "customer", "iat": now - 120, "exp": now - 60},
            SECRET,
            algorithm="HS256",
        )

        assert service.parse_customer_token(token) is None

    def test_parse_rejects_access_token(self):
        """A session access token is not a customer token (audience differs)."""
        service = make_service()
        access_token = service.create_access_token(str(CustomerId.generate()), "customer")

        assert service.parse_customer_token(access_token) is None

    def test_parse_rejects_non_uuid_subject(self):
        """A validly signed token whose subject is not a customer id yields None."""
        service = make_service()
        now = int(time.time())
        token = jwt.encode(
            {"sub": "customer-42", "aud": "customer", "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )

        assert service.parse_customer_token(token) is None

    def test_parse_rejects_token_without_expiry(self):
        """Customer tokens must carry an expiry."""
        service = make_service()
        token = jwt.encode({"sub": str(uuid4()), "aud": "customer"}, SECRET, algorithm="HS256")

        assert service.parse_customer_token(token) is None


class TestAccessToken:
    """Tests for session access tokens."""

    def test_access_token_carries_principal_type(self):
        service = make_service()
        token = service.create_access_token("admin-7", "admin")

        payload = service.validate_access_token(token)

        assert payload["sub"] == "admin-7"
        assert payload["typ"] == "admin"
        assert payload["aud"] == "session"

    def test_validate_rejects_customer_token(self):
        """validate_access_token should raise for a customer token."""
        service = make_service()
        token = service.create_customer_token(CustomerId.generate())

        with pytest.raises(jwt.InvalidTokenError):
            service.validate_access_token(token)

    def test_expiry_properties(self):
        service = make_service(customer_token_expire_days=2)

        assert service.access_token_expire_seconds == 60 * 60
        assert service.customer_token_expire_seconds == 2 * 24 * 60 * 60
