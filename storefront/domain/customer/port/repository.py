"""Repository port for the customer domain."""

from abc import abstractmethod
from typing import Protocol

from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.shared.port import Port


class CustomerRepository(Port, Protocol):
    """Repository for Customer aggregate persistence."""

    @abstractmethod
    async def get(self, customer_id: CustomerId) -> Customer | None:
        """Get a customer by ID."""
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Customer | None:
        """Get a customer by username (usernames are unique)."""
        ...

    @abstractmethod
    async def save(self, customer: Customer) -> None:
        """Save a customer (create or update). Request-scoped flags are not stored.

        Raises:
            ConflictError: The username already belongs to another record
        """
        ...
