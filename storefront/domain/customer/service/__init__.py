"""Customer domain services."""

from .customer import CustomerService
from .customer_state import (
    CustomerStateService,
    JwtCustomerStateService,
    SessionCustomerStateService,
)
from .token import TokenService

__all__ = [
    "CustomerService",
    "CustomerStateService",
    "JwtCustomerStateService",
    "SessionCustomerStateService",
    "TokenService",
]
