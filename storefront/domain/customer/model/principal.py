"""Principal variants attached to a request by the session mechanism."""

from dataclasses import dataclass

from storefront.domain.customer.model.value import CustomerId

CUSTOMER_PRINCIPAL_TYPE = "customer"


@dataclass(frozen=True)
class CustomerPrincipal:
    """A logged-in storefront customer. The only variant customer resolution accepts."""

    customer_id: CustomerId


@dataclass(frozen=True)
class OtherPrincipal:
    """Any other authenticated subject (admin users, service accounts)."""

    subject: str
    principal_type: str


Principal = CustomerPrincipal | OtherPrincipal
