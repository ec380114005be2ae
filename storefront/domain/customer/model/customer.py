"""Customer aggregate for the customer domain."""

from datetime import UTC, datetime

from pydantic import Field

from storefront.domain.customer.model.value import CustomerId
from storefront.domain.shared.error import InvalidStateError
from storefront.domain.shared.model.aggregate import Aggregate


class Customer(Aggregate):
    """A shopper, either a registered account or a guest record.

    `is_anonymous` and `is_logged_in` describe the current request only.
    They are never written to storage and are excluded from serialization.

    Invariants:
    - `id` is immutable after creation
    - a customer is never both anonymous and registered
    - `password_hash` is only set on registered customers
    """

    id: CustomerId
    email_address: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_registered: bool = False
    password_hash: str | None = Field(default=None, exclude=True, repr=False)
    created_at: datetime
    updated_at: datetime | None = None

    # Request-scoped flags
    is_anonymous: bool = Field(default=False, exclude=True)
    is_logged_in: bool = Field(default=False, exclude=True)

    @classmethod
    def create(cls) -> "Customer":
        """Create a new, unsaved customer with a fresh id."""
        return cls(
            id=CustomerId.generate(),
            created_at=datetime.now(UTC),
        )

    def register(self, password_hash: str) -> None:
        """Promote this customer to a registered account."""
        if self.is_registered:
            raise InvalidStateError(f"Customer {self.id} is already registered")
        self.password_hash = password_hash
        self.is_registered = True
        self.is_anonymous = False
        self.updated_at = datetime.now(UTC)

    def mark_anonymous(self) -> None:
        if self.is_registered:
            raise InvalidStateError(f"Registered customer {self.id} cannot be anonymous")
        self.is_anonymous = True

    def mark_logged_in(self) -> None:
        if not self.is_registered:
            raise InvalidStateError(f"Customer {self.id} is not registered")
        self.is_logged_in = True
