"""Cross-application trust port.

An administrative application (e.g. the admin console) may act on behalf of
a customer when its caller holds the customer-service-representative (CSR)
permission. The capability is optional: deployments without an admin
application use NoCrossAppAuth.
"""

from abc import abstractmethod
from typing import Protocol

from storefront.domain.shared.port import Port


class CrossAppAuthService(Port, Protocol):
    """Trust delegation from another internal application."""

    @abstractmethod
    def is_authed_from_admin(self) -> bool:
        """True if the current caller authenticated through the admin application."""
        ...

    @abstractmethod
    def has_csr_permission(self) -> bool:
        """True if the current caller may act on behalf of customers."""
        ...


class NoCrossAppAuth(CrossAppAuthService):
    """Used when no admin application is configured. Never grants trust."""

    def is_authed_from_admin(self) -> bool:
        return False

    def has_csr_permission(self) -> bool:
        return False
