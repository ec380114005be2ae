"""Resolution of the effective customer for a request."""

import logging
from abc import abstractmethod
from dataclasses import field

from storefront.config import CustomerTokenConfig
from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.principal import CustomerPrincipal
from storefront.domain.customer.model.request import RequestContext
from storefront.domain.customer.model.value import RegisterRequest
from storefront.domain.customer.port.cross_app import CrossAppAuthService, NoCrossAppAuth
from storefront.domain.customer.port.security_context import SecurityContext
from storefront.domain.customer.service.customer import CustomerService
from storefront.domain.customer.service.token import TokenService
from storefront.domain.shared.service import Service

logger = logging.getLogger(__name__)


class CustomerStateService(Service):
    """Registers customers and works out who the current customer is.

    Every variant checks the session first and falls back to a transient
    anonymous customer; subclasses decide what happens in between.
    """

    _customer_service: CustomerService
    _security_context: SecurityContext

    async def register_new_customer(self, request: RegisterRequest) -> Customer:
        """Create and register a customer whose username is their email.

        Raises:
            RegistrationError: Propagated unchanged from CustomerService
        """
        customer = self._customer_service.create_new_customer()
        customer.email_address = request.email_address
        customer.username = request.email_address
        customer.first_name = request.first_name
        customer.last_name = request.last_name
        return await self._customer_service.register_customer(
            customer, request.password, request.confirm_password
        )

    @abstractmethod
    async def get_customer(self, request: RequestContext) -> Customer:
        """Resolve the effective customer for `request`. Never returns None."""

    async def _get_authenticated_customer(self) -> Customer | None:
        match self._security_context.current_principal():
            case CustomerPrincipal(customer_id=customer_id):
                return await self._customer_service.read_customer_by_id(customer_id)
            case _:
                return None

    def _create_anonymous_customer(self) -> Customer:
        # Never saved; lives for this request only
        customer = self._customer_service.create_new_customer()
        customer.mark_anonymous()
        return customer

    @staticmethod
    def _finish(customer: Customer) -> Customer:
        if customer.is_registered:
            customer.mark_logged_in()
        return customer


class SessionCustomerStateService(CustomerStateService):
    """Session-only resolution, used when customer tokens are disabled."""

    async def get_customer(self, request: RequestContext) -> Customer:
        customer = await self._get_authenticated_customer()
        if customer is None:
            logger.debug("No session customer; using anonymous customer")
            customer = self._create_anonymous_customer()
        return self._finish(customer)


class JwtCustomerStateService(CustomerStateService):
    """Session first, then a customer token, then an anonymous customer.

    A token may name a guest customer freely. A token naming a registered
    customer is honoured only when the caller also has cross-app trust
    (an admin-app CSR acting for that customer).
    """

    _token_service: TokenService
    _token_config: CustomerTokenConfig
    _cross_app_auth: CrossAppAuthService = field(default_factory=NoCrossAppAuth)

    async def get_customer(self, request: RequestContext) -> Customer:
        customer = await self._get_authenticated_customer()

        if customer is None:
            customer = await self._get_customer_by_token(request)

        if customer is None:
            logger.debug("No session or token customer; using anonymous customer")
            customer = self._create_anonymous_customer()

        return self._finish(customer)

    def is_cross_app_authenticated(self) -> bool:
        """True only when the caller is from the admin app and holds the CSR permission."""
        return (
            self._cross_app_auth.is_authed_from_admin()
            and self._cross_app_auth.has_csr_permission()
        )

    async def _get_customer_by_token(self, request: RequestContext) -> Customer | None:
        token = self._get_customer_token_from_request(request)
        if token is None:
            return None

        customer_id = self._token_service.parse_customer_token(token)
        if customer_id is None:
            return None

        customer = await self._customer_service.read_customer_by_id(customer_id)
        if customer is None:
            logger.debug("Customer token references unknown customer %s", customer_id)
            return None

        if customer.is_registered and not self.is_cross_app_authenticated():
            logger.warning(
                "Ignoring customer token for registered customer %s without cross-app trust",
                customer_id,
            )
            return None

        logger.debug("Resolved customer %s from customer token", customer_id)
        return customer

    def _get_customer_token_from_request(self, request: RequestContext) -> str | None:
        # A present header wins even when empty; the parameter is the fallback
        header = self._token_config.header
        if header and header in request.headers:
            return request.headers[header]

        param = self._token_config.param
        if param:
            return request.params.get(param)
        return None
