"""Customer service: creation, lookup and registration of customers."""

import hashlib
import logging
import secrets

from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.customer.port.repository import CustomerRepository
from storefront.domain.shared.error import ConflictError, RegistrationError
from storefront.domain.shared.service import Service

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 600_000


def hash_password(password: str) -> str:
    """Hash a password as `pbkdf2_sha256$<iterations>$<salt>$<digest>`."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt), PBKDF2_ITERATIONS
    ).hex()
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest}"


class CustomerService(Service):
    """Owns customer persistence on behalf of the rest of the domain.

    - create_new_customer: build an unsaved customer
    - read_customer_by_id: load a stored customer
    - register_customer: check the password confirmation and uniqueness, then save
    - save_customer: store a customer as-is (guest records)

    Repository errors are never caught here.
    """

    _customer_repo: CustomerRepository

    def create_new_customer(self) -> Customer:
        """Create a customer in memory only. Nothing is written until it is saved."""
        return Customer.create()

    async def read_customer_by_id(self, customer_id: CustomerId) -> Customer | None:
        return await self._customer_repo.get(customer_id)

    async def save_customer(self, customer: Customer) -> Customer:
        await self._customer_repo.save(customer)
        return customer

    async def register_customer(
        self,
        customer: Customer,
        password: str,
        confirm_password: str,
    ) -> Customer:
        """Register `customer` with the given password.

        Raises:
            RegistrationError: password_mismatch, duplicate_email or already_registered
        """
        if password != confirm_password:
            raise RegistrationError(
                "Password and confirmation password do not match",
                code="password_mismatch",
            )

        if customer.is_registered:
            raise RegistrationError(
                f"Customer {customer.id} is already registered",
                code="already_registered",
            )

        if customer.username is not None:
            existing = await self._customer_repo.get_by_username(customer.username)
            if existing is not None and existing.id != customer.id:
                raise RegistrationError(
                    "An account with this email address already exists",
                    code="duplicate_email",
                )

        customer.register(hash_password(password))
        try:
            await self._customer_repo.save(customer)
        except ConflictError as e:
            # Lost a race with a concurrent registration for the same username
            raise RegistrationError(
                "An account with this email address already exists",
                code="duplicate_email",
            ) from e

        logger.info("Registered customer %s", customer.id)
        return customer
