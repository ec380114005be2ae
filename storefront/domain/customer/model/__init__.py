"""Customer domain models."""

from .customer import Customer
from .principal import (
    CUSTOMER_PRINCIPAL_TYPE,
    CustomerPrincipal,
    OtherPrincipal,
    Principal,
)
from .request import RequestContext
from .value import CustomerId, RegisterRequest

__all__ = [
    "CUSTOMER_PRINCIPAL_TYPE",
    "Customer",
    "CustomerId",
    "CustomerPrincipal",
    "OtherPrincipal",
    "Principal",
    "RegisterRequest",
    "RequestContext",
]
