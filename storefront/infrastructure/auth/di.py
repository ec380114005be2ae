"""DI provider for auth infrastructure."""

from dishka import provide
from starlette.requests import Request

from storefront.config import Config
from storefront.domain.customer.port.cross_app import CrossAppAuthService, NoCrossAppAuth
from storefront.domain.customer.port.security_context import SecurityContext
from storefront.domain.customer.service.token import TokenService
from storefront.infrastructure.auth.cross_app import AdminTokenCrossAppAuthService
from storefront.infrastructure.auth.security_context import BearerSecurityContext
from storefront.util.di.base import Provider
from storefront.util.di.scope import Scope


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    @provide(scope=Scope.UOW)
    def get_security_context(
        self, request: Request, token_service: TokenService
    ) -> SecurityContext:
        return BearerSecurityContext(headers=request.headers, token_service=token_service)

    @provide(scope=Scope.UOW)
    def get_cross_app_auth(self, request: Request, config: Config) -> CrossAppAuthService:
        """Provide the admin-token adapter if configured, otherwise NoCrossAppAuth."""
        if not config.auth.cross_app.enabled:
            return NoCrossAppAuth()
        return AdminTokenCrossAppAuthService(headers=request.headers, config=config.auth.cross_app)
