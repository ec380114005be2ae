"""Session/security context port."""

from abc import abstractmethod
from typing import Protocol

from storefront.domain.customer.model.principal import Principal
from storefront.domain.shared.port import Port


class SecurityContext(Port, Protocol):
    """The authenticated principal attached to the current request, if any."""

    @abstractmethod
    def current_principal(self) -> Principal | None:
        """Return the request's principal, or None for unauthenticated requests.

        Must not raise for missing or invalid credentials.
        """
        ...
