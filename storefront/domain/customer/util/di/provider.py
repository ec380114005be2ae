"""DI provider for customer domain."""

import logging

from dishka import from_context, provide
from starlette.requests import Request

from storefront.config import Config
from storefront.domain.customer.command.guest import CreateGuestCustomerHandler
from storefront.domain.customer.command.register import RegisterCustomerHandler
from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.request import RequestContext
from storefront.domain.customer.port.cross_app import CrossAppAuthService
from storefront.domain.customer.port.repository import CustomerRepository
from storefront.domain.customer.port.security_context import SecurityContext
from storefront.domain.customer.service.customer import CustomerService
from storefront.domain.customer.service.customer_state import (
    CustomerStateService,
    JwtCustomerStateService,
    SessionCustomerStateService,
)
from storefront.domain.customer.service.token import TokenService
from storefront.util.di.base import Provider
from storefront.util.di.fastapi import has_form_body
from storefront.util.di.scope import Scope

logger = logging.getLogger(__name__)


async def build_request_context(request: Request) -> RequestContext:
    """Headers plus query parameters merged over form fields (query wins)."""
    params: dict[str, str] = {}
    if has_form_body(request):
        form = await request.form()
        params.update((key, value) for key, value in form.items() if isinstance(value, str))
    params.update(request.query_params)
    return RequestContext(headers=request.headers, params=params)


class CustomerProvider(Provider):
    """DI provider for customer domain services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    register_customer_handler = provide(RegisterCustomerHandler, scope=Scope.UOW)
    create_guest_customer_handler = provide(CreateGuestCustomerHandler, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        """Provide TokenService."""
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_customer_service(self, customer_repo: CustomerRepository) -> CustomerService:
        """Provide CustomerService."""
        return CustomerService(_customer_repo=customer_repo)

    @provide(scope=Scope.UOW)
    def get_customer_state_service(
        self,
        config: Config,
        customer_service: CustomerService,
        security_context: SecurityContext,
        token_service: TokenService,
        cross_app_auth: CrossAppAuthService,
    ) -> CustomerStateService:
        """Provide the token-aware resolver, or the session-only one when tokens are off."""
        if not config.auth.customer_token.enabled:
            return SessionCustomerStateService(
                _customer_service=customer_service,
                _security_context=security_context,
            )
        return JwtCustomerStateService(
            _customer_service=customer_service,
            _security_context=security_context,
            _token_service=token_service,
            _token_config=config.auth.customer_token,
            _cross_app_auth=cross_app_auth,
        )

    @provide(scope=Scope.UOW)
    async def get_request_context(self, request: Request) -> RequestContext:
        """Expose headers and request parameters to the resolver."""
        return await build_request_context(request)

    @provide(scope=Scope.UOW)
    async def get_current_customer(
        self,
        request_context: RequestContext,
        state_service: CustomerStateService,
    ) -> Customer:
        """Resolve the effective customer for this request."""
        customer = await state_service.get_customer(request_context)
        logger.debug(
            "Customer resolved: id=%s, registered=%s, anonymous=%s",
            customer.id,
            customer.is_registered,
            customer.is_anonymous,
        )
        return customer
