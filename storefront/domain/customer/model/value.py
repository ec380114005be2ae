"""Value objects for the customer domain."""

from uuid import UUID, uuid4

from pydantic import RootModel

from storefront.domain.shared.model.value import ValueObject


class CustomerId(RootModel[UUID]):
    """Unique identifier for a Customer."""

    @classmethod
    def generate(cls) -> "CustomerId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class RegisterRequest(ValueObject):
    """Input for registering a new customer account.

    Used once to build a Customer; the email doubles as the username.
    """

    email_address: str
    first_name: str
    last_name: str
    password: str
    confirm_password: str
